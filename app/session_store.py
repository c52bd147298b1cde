"""Keyed session storage.

State is kept behind a small get/set/delete interface so the conversation
logic stays pure and storage stays pluggable. The default store is an
in-memory dict.

Notes:
- Sessions do not survive process restarts with the in-memory store.
- Values are plain dicts so a durable store (Redis, a database) can be
  dropped in without touching the callers.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Optional

from app.logging_config import get_logger
from app.models import ConversationState, LeadAnalysis, ProjectFlowState

logger = get_logger(__name__)


class SessionStore(abc.ABC):
    """Minimal keyed store contract."""

    @abc.abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the value stored under key, or None."""

    @abc.abstractmethod
    def set(self, key: str, value: Dict[str, Any]) -> None:
        """Store value under key, replacing any previous value."""

    @abc.abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""


class InMemorySessionStore(SessionStore):
    """Process-lifetime dict store. No expiry, no cross-process sync."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        return self._sessions.get(key)

    def set(self, key: str, value: Dict[str, Any]) -> None:
        self._sessions[key] = value

    def delete(self, key: str) -> None:
        self._sessions.pop(key, None)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


class ConversationSessions:
    """
    Conversation state per conversation id, on top of a SessionStore.

    Each session holds the ConversationState and, while a recap is waiting
    for the user's yes/no, the lead analysis that will be persisted on "yes".
    """

    SESSION_PREFIX = "conversation:"

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def _key(self, conversation_id: str) -> str:
        return f"{self.SESSION_PREFIX}{conversation_id}"

    def _session(self, conversation_id: str) -> Dict[str, Any]:
        return self.store.get(self._key(conversation_id)) or {}

    def get_state(self, conversation_id: str) -> ConversationState:
        """
        Load the state for a conversation.

        Args:
            conversation_id: Chat / session identifier

        Returns:
            Stored state, or a fresh NEW state on the first turn
        """
        raw = self._session(conversation_id).get("state")
        if raw is None:
            return ConversationState()
        return ConversationState.model_validate(raw)

    def save_state(self, conversation_id: str, state: ConversationState) -> None:
        session = self._session(conversation_id)
        session["state"] = state.model_dump(mode="json")
        self.store.set(self._key(conversation_id), session)

    def bind_lead(self, conversation_id: str, lead_id: str) -> ConversationState:
        """Bind the conversation to a lead.

        last_intent is cleared when the bound lead changes; it only describes
        the previous lead's conversation.
        """
        state = self.get_state(conversation_id)
        if state.lead_id != lead_id:
            state = state.model_copy(update={"lead_id": lead_id, "last_intent": None})
            logger.info("conversation_lead_bound", conversation_id=conversation_id, lead_id=lead_id)
        self.save_state(conversation_id, state)
        return state

    def set_pending_analysis(self, conversation_id: str, analysis: Optional[LeadAnalysis]) -> None:
        session = self._session(conversation_id)
        session["pending_analysis"] = analysis.model_dump(mode="json") if analysis else None
        self.store.set(self._key(conversation_id), session)

    def get_pending_analysis(self, conversation_id: str) -> Optional[LeadAnalysis]:
        raw = self._session(conversation_id).get("pending_analysis")
        if raw is None:
            return None
        return LeadAnalysis.model_validate(raw)

    def reset(self, conversation_id: str) -> None:
        self.store.delete(self._key(conversation_id))


class ProjectFlowSessions:
    """Step-flow questionnaire state per chat id."""

    SESSION_PREFIX = "project_flow:"

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def _key(self, chat_id: str) -> str:
        return f"{self.SESSION_PREFIX}{chat_id}"

    def get(self, chat_id: str) -> Optional[ProjectFlowState]:
        raw = self.store.get(self._key(chat_id))
        if raw is None:
            return None
        return ProjectFlowState.model_validate(raw)

    def save(self, chat_id: str, state: ProjectFlowState) -> None:
        self.store.set(self._key(chat_id), state.model_dump(mode="json"))

    def delete(self, chat_id: str) -> None:
        self.store.delete(self._key(chat_id))


# Process-wide default store shared by the HTTP layer.
default_store = InMemorySessionStore()
