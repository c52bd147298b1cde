"""Quote generation prerequisites and quote parameter extraction."""

import re
from typing import Optional

from app.language.caller_hi import get_caller_text
from app.models import (
    ConversationState,
    Dependency,
    DependencyType,
    JobType,
    LeadAnalysis,
    MeasurementData,
    QuoteRequirements,
    ToolCall,
)

QUOTE_TOOL_NAME = "generate_quote_options"
DEFAULT_QUOTE_OPTIONS = 3

_OPTIONS_RE = re.compile(r"(\d+)\s*options?\b", re.IGNORECASE)
_TIMELINE_RES = [
    re.compile(r"timeline\s*(\d+)\s*(days|weeks|months)\b", re.IGNORECASE),
    re.compile(r"(\d+)\s*(days|weeks|months)\b", re.IGNORECASE),
]
_ADVANCE_RES = [
    re.compile(r"advance(?:\s+payment)?\s*(\d+)\s*%", re.IGNORECASE),
    re.compile(r"(\d+)\s*%\s*advance", re.IGNORECASE),
]


def check_quote_dependencies(
    state: ConversationState,
    measurements: Optional[MeasurementData] = None,
) -> list[Dependency]:
    """
    Return every unmet prerequisite for quote generation (empty list = ready).

    All checks run so the user sees the full list in one turn. Order is
    PROJECT_REQUIRED, MEASUREMENT_REQUIRED, SQFT_REQUIRED.
    """
    dependencies: list[Dependency] = []

    if not state.lead_id:
        dependencies.append(Dependency(
            type=DependencyType.PROJECT_REQUIRED,
            message=get_caller_text("dependency_project_required"),
            action="select_project",
        ))

    m = measurements or MeasurementData()
    has_area = m.sqft is not None or m.paintable_area is not None
    if m.bhk is None and not has_area:
        dependencies.append(Dependency(
            type=DependencyType.MEASUREMENT_REQUIRED,
            message=get_caller_text("dependency_measurement_required"),
            action="log_measurement",
        ))
    elif not has_area:
        dependencies.append(Dependency(
            type=DependencyType.SQFT_REQUIRED,
            message=get_caller_text("dependency_sqft_required"),
            action="log_measurement",
        ))

    return dependencies


def extract_quote_parameters(text: str) -> QuoteRequirements:
    """Pull options count, timeline, advance % and labour+material flag out of free text."""
    t = text or ""
    lowered = t.lower()

    options = DEFAULT_QUOTE_OPTIONS
    match = _OPTIONS_RE.search(t)
    if match:
        options = int(match.group(1))

    timeline = None
    for pattern in _TIMELINE_RES:
        match = pattern.search(t)
        if match:
            timeline = f"{match.group(1)} {match.group(2).lower()}"
            break

    advance = None
    for pattern in _ADVANCE_RES:
        match = pattern.search(t)
        if match:
            advance = int(match.group(1))
            break

    return QuoteRequirements(
        options=options,
        timeline=timeline,
        advance=advance,
        labour_and_material="labour" in lowered and "material" in lowered,
    )


def build_quote_tool_call(
    lead_id: str,
    text: str,
    analysis: Optional[LeadAnalysis] = None,
) -> ToolCall:
    """Build the generate_quote_options call for the caller's tool executor."""
    arguments = {"lead_id": lead_id}

    if analysis is not None:
        if analysis.job_type != JobType.UNKNOWN:
            arguments["job_type"] = analysis.job_type.value
        if analysis.location_text:
            arguments["location"] = analysis.location_text

    arguments["requirements"] = extract_quote_parameters(text).model_dump()
    return ToolCall(name=QUOTE_TOOL_NAME, arguments=arguments)
