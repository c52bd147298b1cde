"""
Tests for LLM-backed intent classification and lead extraction.
"""

import json

import pytest
from unittest.mock import MagicMock, patch
from app import lead_analysis
from app.models import HighLevelIntent, JobType, LeadAnalysis, PreferredLanguage, Urgency


def _completion(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.mark.parametrize("text, expected", [
    ("Rahil ka number 9876543210 hai", "+919876543210"),
    ("call +91 9876543210", "+919876543210"),
    ("+91-8123456789", "+918123456789"),
    ("no number here", None),
    ("12345", None),
])
def test_detect_phone(text, expected):
    assert lead_analysis.detect_phone(text) == expected


def test_detect_preferred_language():
    assert lead_analysis.detect_preferred_language("HSR mein 2BHK") == PreferredLanguage.ENGLISH
    assert lead_analysis.detect_preferred_language("घर पेंट करना है") == PreferredLanguage.HINDI
    assert lead_analysis.detect_preferred_language("2BHK घर") == PreferredLanguage.MIXED
    assert lead_analysis.detect_preferred_language("12345") == PreferredLanguage.UNKNOWN
    assert lead_analysis.detect_preferred_language("घर", hint="en") == PreferredLanguage.ENGLISH
    # Unknown hints are ignored
    assert lead_analysis.detect_preferred_language("घर", hint="fr") == PreferredLanguage.HINDI


@pytest.mark.parametrize("text, intent", [
    ("hi", HighLevelIntent.GREETING),
    ("gm", HighLevelIntent.GREETING),
    ("Namaste ji", HighLevelIntent.GREETING),
    ("ok thanks", HighLevelIntent.OTHER),
    ("bye", HighLevelIntent.OTHER),
])
def test_local_intent_shortcuts(text, intent):
    assert lead_analysis.detect_local_intent(text).intent == intent


def test_local_intent_leaves_real_messages_to_the_model():
    assert lead_analysis.detect_local_intent("2BHK repaint in HSR next week") is None
    assert lead_analysis.detect_local_intent("") is None


@patch('app.lead_analysis.client')
def test_classify_intent_skips_model_for_greetings(mock_client):
    result = lead_analysis.classify_intent("hello")

    assert result.intent == HighLevelIntent.GREETING
    mock_client.chat.completions.create.assert_not_called()


@patch('app.lead_analysis.client')
def test_classify_intent_with_model(mock_client):
    mock_client.chat.completions.create.return_value = _completion(json.dumps({
        "intent": "LOG_MEASUREMENT",
        "lead_hint": "HSR 2BHK Rahil",
        "topic": None,
    }))

    result = lead_analysis.classify_intent("Rahil wale HSR ka 850 sqft hai")

    assert result.intent == HighLevelIntent.LOG_MEASUREMENT
    assert result.lead_hint == "HSR 2BHK Rahil"
    kwargs = mock_client.chat.completions.create.call_args.kwargs
    assert kwargs["response_format"] == {"type": "json_object"}
    assert "Rahil wale HSR" in kwargs["messages"][0]["content"]


@patch('app.lead_analysis.client')
def test_classify_intent_invalid_label_returns_none(mock_client):
    mock_client.chat.completions.create.return_value = _completion('{"intent": "BOOK_FLIGHT"}')

    assert lead_analysis.classify_intent("kuch aur") is None


@patch('app.lead_analysis.client')
def test_classify_intent_api_error_returns_none(mock_client):
    mock_client.chat.completions.create.side_effect = Exception("API Error")

    assert lead_analysis.classify_intent("quote bhejo") is None


def test_classify_intent_without_client_returns_none(monkeypatch):
    monkeypatch.setattr(lead_analysis, "client", None)

    assert lead_analysis.classify_intent("quote bhejo") is None


@patch('app.lead_analysis.client')
def test_analyze_lead_merges_model_output(mock_client):
    mock_client.chat.completions.create.return_value = _completion(json.dumps({
        "customer": {"name": "Rahil", "phone": None},
        "location_text": "HSR Layout, 27th Main",
        "job_type": "painting",
        "scope_hint": {"interior": True, "exterior": None},
        "urgency": "next_week",
    }))

    result = lead_analysis.analyze_lead(
        "2BHK interior repaint HSR 27th Main, customer Rahil 9876543210, next week",
        contractor_id="c-1",
    )

    assert result.success is True
    data = result.data
    assert data.customer.name == "Rahil"
    # Regex-detected phone restored when the model drops it
    assert data.customer.phone == "+919876543210"
    assert data.job_type == JobType.PAINTING
    assert data.urgency == Urgency.NEXT_WEEK
    assert data.scope_hint.interior is True
    assert data.contractor_id == "c-1"
    assert data.preferred_language == PreferredLanguage.ENGLISH
    assert data.raw_utterance.startswith("2BHK interior repaint")


@patch('app.lead_analysis.client')
def test_analyze_lead_invalid_json(mock_client):
    mock_client.chat.completions.create.return_value = _completion("not json")

    result = lead_analysis.analyze_lead("HSR mein painting")

    assert result.success is False
    assert result.error is None


@patch('app.lead_analysis.client')
def test_analyze_lead_rejects_empty_and_long_text(mock_client, monkeypatch):
    monkeypatch.setattr(lead_analysis.config, "MAX_TEXT_LENGTH", 10)

    empty = lead_analysis.analyze_lead("   ")
    too_long = lead_analysis.analyze_lead("x" * 11)

    assert empty.success is False and empty.error
    assert too_long.success is False and "10" in too_long.error
    mock_client.chat.completions.create.assert_not_called()


def test_analyze_lead_without_client(monkeypatch):
    monkeypatch.setattr(lead_analysis, "client", None)

    result = lead_analysis.analyze_lead("HSR mein painting")

    assert result.success is False
    assert result.error is None


@patch('app.lead_analysis.client')
def test_analyze_lead_keeps_partial_answer_with_nulls(mock_client):
    """Unclear fields come back as null; the rest of the extraction survives."""
    mock_client.chat.completions.create.return_value = _completion(json.dumps({
        "customer": {"name": "Rahil"},
        "location_text": "HSR Layout",
        "job_type": "painting",
        "urgency": None,
        "scope_hint": None,
        "preferred_language": None,
    }))

    result = lead_analysis.analyze_lead("HSR Layout mein painting, customer Rahil")

    assert result.success is True
    assert result.data.customer.name == "Rahil"
    assert result.data.location_text == "HSR Layout"
    assert result.data.urgency == Urgency.UNKNOWN
    assert result.data.scope_hint.interior is None
    # Base language detection is kept when the model answers null
    assert result.data.preferred_language == PreferredLanguage.ENGLISH


@patch('app.lead_analysis.client')
def test_analyze_lead_off_list_labels_become_unknown(mock_client):
    mock_client.chat.completions.create.return_value = _completion(json.dumps({
        "customer": None,
        "job_type": "interior painting",
        "urgency": "Next_Week",
    }))

    result = lead_analysis.analyze_lead("interior painting next week")

    assert result.success is True
    assert result.data.job_type == JobType.UNKNOWN
    assert result.data.urgency == Urgency.NEXT_WEEK
    assert result.data.customer.name is None


def test_lead_analysis_model_tolerates_nulls_and_label_case():
    data = LeadAnalysis.model_validate({
        "customer": None,
        "scope_hint": None,
        "job_type": None,
        "urgency": "TOMORROW",
        "preferred_language": "Hi",
    })

    assert data.customer.name is None
    assert data.scope_hint.exterior is None
    assert data.job_type == JobType.UNKNOWN
    assert data.urgency == Urgency.TOMORROW
    assert data.preferred_language == PreferredLanguage.HINDI
