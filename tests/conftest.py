import pytest


@pytest.fixture(autouse=True)
def _safe_test_config(monkeypatch, request):
    """Force deterministic, offline-safe config for tests.

    The repo loads .env on import; these overrides prevent real OpenAI calls
    and reset the in-memory stores between tests.
    """
    from app.config import config, Config
    from app import leads_store, measurement_store
    from app.session_store import default_store

    monkeypatch.setattr(Config, "OPENAI_API_KEY", "", raising=False)
    monkeypatch.setattr(Config, "API_KEY", "", raising=False)
    monkeypatch.setattr(Config, "LOG_CONVERSATION_TEXT", False, raising=False)
    monkeypatch.setattr(Config, "PROJECT_FLOW_START_COMMAND", "/project", raising=False)

    # Keep the instance in sync for any code that reads instance attributes directly.
    monkeypatch.setattr(config, "OPENAI_API_KEY", "", raising=False)
    monkeypatch.setattr(config, "API_KEY", "", raising=False)
    monkeypatch.setattr(config, "LOG_CONVERSATION_TEXT", False, raising=False)

    default_store.clear()
    leads_store.clear_leads()
    measurement_store.clear_measurements()

    # Offline deterministic collaborators for service/endpoint tests.
    # IMPORTANT: do not patch `app.lead_analysis` for `tests/test_lead_analysis.py`,
    # which unit-tests the real implementation by mocking the OpenAI client.
    if "tests/test_lead_analysis.py" not in request.node.nodeid:
        from app import lead_analysis as lead_analysis_module
        from app.models import (
            AnalysisResult,
            Customer,
            HighLevelIntent,
            JobType,
            LeadAnalysis,
            LeadIntentResult,
            Urgency,
        )

        monkeypatch.setattr(lead_analysis_module, "client", None, raising=True)

        def _fake_classify_intent(text):
            local = lead_analysis_module.detect_local_intent(text)
            if local is not None:
                return local
            lowered = (text or "").lower()
            if "quote" in lowered:
                return LeadIntentResult(intent=HighLevelIntent.GENERATE_QUOTE_OPTIONS)
            if "sqft" in lowered or "measurement" in lowered:
                return LeadIntentResult(intent=HighLevelIntent.LOG_MEASUREMENT, lead_hint="HSR 2BHK")
            if "change" in lowered:
                return LeadIntentResult(intent=HighLevelIntent.UPDATE_EXISTING_LEAD)
            return None

        def _fake_analyze_lead(text, contractor_id=None, language_hint=None):
            if "fail" in (text or "").lower():
                return AnalysisResult(success=False)
            if "Rahil" in (text or ""):
                return AnalysisResult(success=True, data=LeadAnalysis(
                    contractor_id=contractor_id,
                    raw_utterance=text,
                    customer=Customer(name="Rahil", phone="+919876543210"),
                    location_text="HSR Layout, 27th Main",
                    job_type=JobType.PAINTING,
                    urgency=Urgency.NEXT_WEEK,
                ))
            return AnalysisResult(success=True, data=LeadAnalysis(contractor_id=contractor_id, raw_utterance=text))

        monkeypatch.setattr(lead_analysis_module, "classify_intent", _fake_classify_intent, raising=True)
        monkeypatch.setattr(lead_analysis_module, "analyze_lead", _fake_analyze_lead, raising=True)

    yield config

    default_store.clear()
