"""Tests for quote prerequisites and parameter extraction."""

import pytest
from app.models import (
    ConversationState,
    DependencyType,
    JobType,
    LeadAnalysis,
    LeadStatus,
    MeasurementData,
)
from app.quote_gate import (
    QUOTE_TOOL_NAME,
    build_quote_tool_call,
    check_quote_dependencies,
    extract_quote_parameters,
)


@pytest.fixture
def bound_state():
    return ConversationState(lead_status=LeadStatus.LEAD_CAPTURED, lead_id="lead_1")


def test_no_lead_and_no_measurements():
    deps = check_quote_dependencies(ConversationState(), None)

    assert [d.type for d in deps] == [DependencyType.PROJECT_REQUIRED, DependencyType.MEASUREMENT_REQUIRED]
    assert deps[0].action == "select_project"
    assert deps[1].action == "log_measurement"
    assert all(d.message for d in deps)


def test_bhk_only_needs_sqft(bound_state):
    deps = check_quote_dependencies(bound_state, MeasurementData(bhk=3))

    assert [d.type for d in deps] == [DependencyType.SQFT_REQUIRED]


@pytest.mark.parametrize("measurements", [
    MeasurementData(sqft=900),
    MeasurementData(paintable_area=2400),
    MeasurementData(bhk=2, sqft=850),
])
def test_area_satisfies_measurements(bound_state, measurements):
    assert check_quote_dependencies(bound_state, measurements) == []


def test_empty_measurement_record_counts_as_missing(bound_state):
    deps = check_quote_dependencies(bound_state, MeasurementData(coats=2))

    assert [d.type for d in deps] == [DependencyType.MEASUREMENT_REQUIRED]


def test_lead_missing_but_measurements_present():
    deps = check_quote_dependencies(ConversationState(), MeasurementData(sqft=500))

    assert [d.type for d in deps] == [DependencyType.PROJECT_REQUIRED]


def test_extract_defaults():
    params = extract_quote_parameters("quote bana do")

    assert params.options == 3
    assert params.timeline is None
    assert params.advance is None
    assert params.labour_and_material is False


@pytest.mark.parametrize("text, timeline", [
    ("timeline 10 days please", "10 days"),
    ("kaam 2 Weeks mein chahiye", "2 weeks"),
    ("3 months ka time hai", "3 months"),
])
def test_extract_timeline(text, timeline):
    assert extract_quote_parameters(text).timeline == timeline


@pytest.mark.parametrize("text, advance", [
    ("advance 25%", 25),
    ("advance payment 50 %", 50),
    ("20% advance chalega", 20),
])
def test_extract_advance(text, advance):
    assert extract_quote_parameters(text).advance == advance


def test_extract_options_and_labour_material():
    params = extract_quote_parameters("1 option do, labour + material dono")

    assert params.options == 1
    assert params.labour_and_material is True


def test_tool_call_arguments():
    analysis = LeadAnalysis(job_type=JobType.PAINTING, location_text="Whitefield")
    call = build_quote_tool_call("lead_3", "2 options", analysis)

    assert call.name == QUOTE_TOOL_NAME
    assert call.arguments["lead_id"] == "lead_3"
    assert call.arguments["job_type"] == "painting"
    assert call.arguments["location"] == "Whitefield"
    assert call.arguments["requirements"]["options"] == 2


def test_tool_call_skips_unknown_job_context():
    call = build_quote_tool_call("lead_3", "quote", LeadAnalysis())

    assert "job_type" not in call.arguments
    assert "location" not in call.arguments

    call = build_quote_tool_call("lead_3", "quote", None)
    assert set(call.arguments) == {"lead_id", "requirements"}


def test_extract_full_request():
    params = extract_quote_parameters("3 options, timeline 5 days, advance 30%")

    assert (params.options, params.timeline, params.advance) == (3, "5 days", 30)
