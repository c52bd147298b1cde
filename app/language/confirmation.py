"""Multilingual yes/no resolution and greeting detection.

Shared by the lead conversation (pending lead confirmation) and the project
step flow (resource assignment). Coverage comes from the curated phrase lists
in caller_hi; there is no fuzzy matching.
"""

import enum

from app.language.caller_hi import (
    get_greeting_phrases,
    get_no_fragments,
    get_no_phrases,
    get_yes_fragments,
    get_yes_phrases,
)

# Whitespace plus ".", "," and the Devanagari danda.
EDGE_PUNCTUATION = " \t\r\n.,।"

# Fragment matching is only trusted on answers this short.
FRAGMENT_MAX_CHARS = 15


class Confirmation(str, enum.Enum):
    YES = "YES"
    NO = "NO"
    AMBIGUOUS = "AMBIGUOUS"


def _matches(raw: str, cleaned: str, normalized: str, phrases: list[str], fragments: list[str]) -> bool:
    if normalized in phrases or cleaned in phrases or raw in phrases:
        return True
    if len(raw) <= FRAGMENT_MAX_CHARS:
        return any(fragment in raw for fragment in fragments)
    return False


def resolve_confirmation(raw_text: str) -> Confirmation:
    """Classify a free-text answer as YES, NO or AMBIGUOUS.

    "हाँ।", "कर दो" and "haan kar do" are YES; "नहीं" and "mat karo" style
    answers are NO. Anything that matches both lists or neither is AMBIGUOUS
    and the caller should reprompt with an explicit two-choice instruction.
    """
    raw = (raw_text or "").strip()
    cleaned = raw.strip(EDGE_PUNCTUATION)
    normalized = cleaned.lower()

    is_yes = _matches(raw, cleaned, normalized, get_yes_phrases(), get_yes_fragments())
    is_no = _matches(raw, cleaned, normalized, get_no_phrases(), get_no_fragments())

    if is_yes and not is_no:
        return Confirmation.YES
    if is_no and not is_yes:
        return Confirmation.NO
    return Confirmation.AMBIGUOUS


def detect_greeting(text: str) -> bool:
    """Heuristic: is the text just a greeting ("hi", "namaste ji", "राम राम")?"""
    normalized = (text or "").strip().lower()
    if not normalized:
        return False

    return any(
        normalized == greeting or normalized.startswith(greeting + " ")
        for greeting in get_greeting_phrases()
    )
