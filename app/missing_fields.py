"""Missing-field detection and lead recap for extracted lead analyses."""

from typing import Optional

from app.language.caller_hi import get_caller_text
from app.models import (
    HighLevelIntent,
    JobType,
    LeadAnalysis,
    MissingFields,
    Urgency,
)

# Intents whose flow assumes the job context already exists.
SUPPRESSED_INTENTS = {HighLevelIntent.GENERATE_QUOTE_OPTIONS}


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def compute_missing_fields(
    analysis: LeadAnalysis,
    intent: Optional[HighLevelIntent] = None,
) -> MissingFields:
    """
    Work out which lead fields are still missing and the follow-up questions to ask.

    Order is fixed: name, phone, location, job type, urgency. Callers must keep
    it when presenting several questions.
    """
    result = MissingFields()
    if intent in SUPPRESSED_INTENTS:
        return result

    checks = [
        ("customer_name", _is_blank(analysis.customer.name), "ask_customer_name"),
        ("customer_phone", _is_blank(analysis.customer.phone), "ask_customer_phone"),
        ("location_text", _is_blank(analysis.location_text), "ask_location"),
        ("job_type", analysis.job_type == JobType.UNKNOWN, "ask_job_type"),
        ("urgency", analysis.urgency == Urgency.UNKNOWN, "ask_urgency"),
    ]
    for field_name, is_missing, question_key in checks:
        if is_missing:
            result.missing[field_name] = True
            result.questions.append(get_caller_text(question_key))

    return result


def build_confirmation(analysis: LeadAnalysis) -> str:
    """Recap message asking the user to confirm the captured lead.

    Unknown fields are left out of the recap.
    """
    parts = []
    if not _is_blank(analysis.customer.name):
        parts.append(f"Customer: {analysis.customer.name}")
    if not _is_blank(analysis.location_text):
        parts.append(f"Location: {analysis.location_text}")
    if analysis.job_type != JobType.UNKNOWN:
        parts.append(f"Job: {analysis.job_type.value}")
    if analysis.urgency != Urgency.UNKNOWN:
        parts.append(f"Urgency: {analysis.urgency.value}")

    recap = get_caller_text("lead_recap_parts", parts=", ".join(parts)) if parts else ""
    return get_caller_text("lead_recap", recap=recap)
