"""
LLM-backed intent classification and lead extraction using OpenAI API.

These are the external collaborators of the turn orchestrator. Failures never
propagate: classification degrades to None (heuristic-only turn) and
extraction to AnalysisResult(success=False).
"""

import json
import re
from typing import Optional

from openai import OpenAI
from pydantic import ValidationError

from app.config import config
from app.language.caller_hi import get_caller_text
from app.language.confirmation import detect_greeting
from app.logging_config import get_logger
from app.models import (
    AnalysisResult,
    Customer,
    HighLevelIntent,
    LeadAnalysis,
    LeadIntentResult,
    PreferredLanguage,
)

logger = get_logger(__name__)

# Initialize OpenAI client (will be None if API key not configured)
client = (
    OpenAI(api_key=config.OPENAI_API_KEY, timeout=config.OPENAI_TIMEOUT_SECONDS)
    if config.OPENAI_API_KEY
    else None
)

# Short acknowledgements / closings that never describe a job.
SHORT_NON_LEAD_PHRASES = ["ok", "okay", "thanks", "thank you", "bye", "tc"]
SHORT_NON_LEAD_MAX_CHARS = 20

# Extra greetings the classifier shortcut accepts on top of the shared list.
EXTRA_GREETINGS = ["gm", "gn", "good night", "ram ram"]

PHONE_RE = re.compile(r"(\+91[-\s]?)?[6-9]\d{9}")
DEVANAGARI_RE = re.compile(r"[\u0900-\u097F]")
ASCII_LETTER_RE = re.compile(r"[A-Za-z]")

INTENT_PROMPT = """You are an intent detection assistant for a painting contractor bot in India.

User message:
\"\"\"{text}\"\"\"

Classify the message into one of these intents:
- "GREETING" → pure greetings / pleasantries, like "hi", "hello", "namaste", "good morning", etc.
- "NEW_LEAD" → user is giving details of a new painting job (location, rooms, repainting, etc.).
- "GENERATE_QUOTE_OPTIONS" → user asks for a quote / estimate / pricing options for a job that was already discussed or visited.
- "UPDATE_EXISTING_LEAD" → user wants to change details of an already captured job (change colour, area, date, etc.).
- "LOG_MEASUREMENT" → user is dictating site measurement / technical details (BHK, sqft, paintable area, ceilings, coats, putty level, dampness, brand preference) for an existing job.
- "GENERAL_QUESTION" → user is asking a generic question (rates, paint types, process) not tied to a new or existing lead.
- "OTHER" → anything else.

Guidance:
- Prefer "LOG_MEASUREMENT" instead of "NEW_LEAD" when the text looks like measurement details and there is no clear statement that this is a completely new job.
- Put a short "lead_hint" like "HSR 2BHK Rahil" or "Whitefield villa" if the message clearly refers to a specific project.
- For GENERAL_QUESTION, summarize the question in 1 short English line in "topic".

Return ONLY valid JSON: {{"intent": "...", "lead_hint": null, "topic": null}}"""

EXTRACTION_PROMPT = """You are a construction lead intake assistant for a painting/contractor company in India.

Task:
- Read the user's utterance (Hinglish / Hindi / English / mixed).
- Use the base JSON object below.
- Fill in fields only when you are reasonably confident.
- If a field is not clear, leave it as null or "unknown" (do not guess).
- Infer job_type only from the text: "painting", "plumbing", "electrical", "civil" or "unknown".
- For urgency, use: "today", "tomorrow", "this_week", "next_week", "flexible", or "unknown".
- For preferred_language, if you are unsure, keep the base value.

Utterance:
\"\"\"{text}\"\"\"

Base JSON:
{base}

Return ONLY valid JSON matching this structure. No explanation, no markdown, no extra text."""


def detect_phone(text: str) -> Optional[str]:
    """Pull out an Indian mobile number like +91XXXXXXXXXX or 9XXXXXXXXX, normalized to +91."""
    match = PHONE_RE.search(text or "")
    if not match:
        return None
    digits = re.sub(r"\D", "", match.group(0))
    if len(digits) == 10:
        return f"+91{digits}"
    if len(digits) == 12 and digits.startswith("91"):
        return f"+{digits}"
    return None


def detect_preferred_language(text: str, hint: Optional[str] = None) -> PreferredLanguage:
    """Guess Hindi / English / mixed from the script; a valid hint wins."""
    if hint in {lang.value for lang in PreferredLanguage}:
        return PreferredLanguage(hint)

    has_devanagari = bool(DEVANAGARI_RE.search(text or ""))
    has_ascii = bool(ASCII_LETTER_RE.search(text or ""))
    if has_devanagari and has_ascii:
        return PreferredLanguage.MIXED
    if has_devanagari:
        return PreferredLanguage.HINDI
    if has_ascii:
        return PreferredLanguage.ENGLISH
    return PreferredLanguage.UNKNOWN


def detect_local_intent(text: str) -> Optional[LeadIntentResult]:
    """Cheap heuristics for obvious cases so no LLM call is needed."""
    normalized = (text or "").strip().lower()
    if not normalized:
        return None

    if detect_greeting(normalized) or any(
        normalized == g or normalized.startswith(g + " ") for g in EXTRA_GREETINGS
    ):
        return LeadIntentResult(intent=HighLevelIntent.GREETING)

    if len(normalized) <= SHORT_NON_LEAD_MAX_CHARS and any(
        normalized == w or normalized.startswith(w + " ") for w in SHORT_NON_LEAD_PHRASES
    ):
        return LeadIntentResult(intent=HighLevelIntent.OTHER)

    return None


def _complete_json(prompt: str) -> dict:
    response = client.chat.completions.create(
        model=config.OPENAI_MODEL,
        messages=[{"role": "user", "content": prompt}],
        response_format={"type": "json_object"},
        temperature=0,
    )
    content = response.choices[0].message.content or "{}"
    return json.loads(content)


def classify_intent(text: str) -> Optional[LeadIntentResult]:
    """
    Classify a user message into a high-level intent.

    Returns:
        LeadIntentResult, or None when no intent is available (no API key,
        API error, unparseable answer).
    """
    local = detect_local_intent(text)
    if local is not None:
        return local

    if client is None:
        logger.debug("intent_classification_skipped", reason="openai_not_configured")
        return None

    try:
        payload = _complete_json(INTENT_PROMPT.format(text=text))
        return LeadIntentResult.model_validate(payload)
    except (ValidationError, json.JSONDecodeError) as e:
        logger.warning("intent_classification_invalid", error=str(e))
        return None
    except Exception as e:
        logger.error("intent_classification_failed", error=str(e))
        return None


def analyze_lead(
    text: str,
    contractor_id: Optional[str] = None,
    language_hint: Optional[str] = None,
) -> AnalysisResult:
    """
    Turn free-form text (usually a voice transcript) into structured lead data.

    Args:
        text: User utterance, max MAX_TEXT_LENGTH characters
        contractor_id: Internal contractor id, copied into the record
        language_hint: "hi" | "en" | "mixed" | "unknown"

    Returns:
        AnalysisResult; success=False with an error message for invalid input,
        without one for extractor failures.
    """
    text = (text or "").strip()
    if not text or len(text) > config.MAX_TEXT_LENGTH:
        return AnalysisResult(
            success=False,
            error=get_caller_text("analysis_invalid_text", max_chars=config.MAX_TEXT_LENGTH),
        )

    base = LeadAnalysis(
        contractor_id=contractor_id,
        raw_utterance=text,
        customer=Customer(phone=detect_phone(text)),
        preferred_language=detect_preferred_language(text, language_hint),
    )

    if client is None:
        logger.warning("lead_analysis_skipped", reason="openai_not_configured")
        return AnalysisResult(success=False)

    try:
        payload = _complete_json(
            EXTRACTION_PROMPT.format(text=text, base=base.model_dump_json(indent=2))
        )
        # Nulls from the model never overwrite what the base record already detected.
        updates = {key: value for key, value in payload.items() if value is not None}
        analysis = LeadAnalysis.model_validate({**base.model_dump(mode="json"), **updates})
    except (ValidationError, json.JSONDecodeError) as e:
        logger.warning("lead_analysis_invalid", error=str(e))
        return AnalysisResult(success=False)
    except Exception as e:
        logger.error("lead_analysis_failed", error=str(e))
        return AnalysisResult(success=False)

    # The regex-detected phone is more reliable than the model's copy.
    if base.customer.phone and not analysis.customer.phone:
        analysis.customer.phone = base.customer.phone

    return AnalysisResult(success=True, data=analysis)
