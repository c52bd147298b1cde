"""Tests for missing-field detection and the lead recap."""

import pytest
from app.language.caller_hi import get_caller_text
from app.missing_fields import build_confirmation, compute_missing_fields
from app.models import Customer, HighLevelIntent, JobType, LeadAnalysis, Urgency


def test_empty_analysis_misses_everything_in_order():
    result = compute_missing_fields(LeadAnalysis())

    assert list(result.missing) == ["customer_name", "customer_phone", "location_text", "job_type", "urgency"]
    assert all(result.missing.values())
    assert result.questions[0] == get_caller_text("ask_customer_name")
    assert result.questions[-1] == get_caller_text("ask_urgency")


def test_blank_strings_count_as_missing():
    analysis = LeadAnalysis(
        customer=Customer(name="  ", phone="+919876543210"),
        location_text="",
        job_type=JobType.PAINTING,
        urgency=Urgency.TODAY,
    )
    result = compute_missing_fields(analysis)

    assert list(result.missing) == ["customer_name", "location_text"]


def test_complete_analysis_has_nothing_missing():
    analysis = LeadAnalysis(
        customer=Customer(name="Rahil", phone="+919876543210"),
        location_text="Whitefield",
        job_type=JobType.PAINTING,
        urgency=Urgency.FLEXIBLE,
    )
    result = compute_missing_fields(analysis)

    assert result.missing == {}
    assert result.questions == []


def test_quote_intent_suppresses_follow_ups():
    result = compute_missing_fields(LeadAnalysis(), HighLevelIntent.GENERATE_QUOTE_OPTIONS)

    assert result.missing == {}
    assert result.questions == []


def test_recap_skips_unknown_parts():
    analysis = LeadAnalysis(customer=Customer(name="Rahil"), location_text="JP Nagar")
    text = build_confirmation(analysis)

    assert "Customer: Rahil" in text
    assert "Location: JP Nagar" in text
    assert "Job:" not in text
    assert "Urgency:" not in text


def test_recap_without_any_parts():
    text = build_confirmation(LeadAnalysis())

    assert text == get_caller_text("lead_recap", recap="")


@pytest.mark.parametrize("analysis", [
    LeadAnalysis(),
    LeadAnalysis(location_text="HSR", job_type=JobType.PAINTING),
    LeadAnalysis(
        customer=Customer(name="Rahil", phone="+919876543210"),
        location_text="HSR Layout",
        job_type=JobType.PAINTING,
        urgency=Urgency.NEXT_WEEK,
    ),
])
def test_quote_intent_never_reports_missing(analysis):
    result = compute_missing_fields(analysis, HighLevelIntent.GENERATE_QUOTE_OPTIONS)

    assert result.missing == {}
    assert result.questions == []


@pytest.mark.parametrize("intent", [None, HighLevelIntent.NEW_LEAD, HighLevelIntent.UPDATE_EXISTING_LEAD])
def test_same_input_same_result(intent):
    analysis = LeadAnalysis(customer=Customer(name="Rahil"), urgency=Urgency.TODAY)
    snapshot = analysis.model_copy(deep=True)

    first = compute_missing_fields(analysis, intent)
    second = compute_missing_fields(analysis, intent)

    assert first == second
    assert list(first.missing) == ["customer_phone", "location_text", "job_type"]
    # The analysis itself is left untouched
    assert analysis == snapshot
