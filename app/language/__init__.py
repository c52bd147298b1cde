"""Language layer for the painting lead assistant.

This module provides:
- Caller-facing texts and phrase lists (caller_hi.py)
- Yes/no and greeting detection (confirmation.py)
"""

from .caller_hi import get_caller_text
from .confirmation import Confirmation, detect_greeting, resolve_confirmation

__all__ = ['get_caller_text', 'Confirmation', 'detect_greeting', 'resolve_confirmation']
