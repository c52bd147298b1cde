"""Step-by-step project questionnaire (work location, rooms) per chat.

A start command resets the questionnaire. Each answer is stored under the
current question's key; after the last question the user is asked whether
two painting resources should be assigned, answered through the shared
yes/no resolver.
"""

from typing import Optional

from app.config import config
from app.language.caller_hi import get_caller_text
from app.language.confirmation import Confirmation, resolve_confirmation
from app.logging_config import get_logger
from app.models import ProjectFlowResult, ProjectFlowState, ProjectSavePayload
from app.session_store import ProjectFlowSessions, SessionStore

logger = get_logger(__name__)

# (answer key, question text key), asked in this order.
PROJECT_QUESTIONS = [
    ("work_location", "project_ask_work_location"),
    ("rooms_count", "project_ask_rooms_count"),
]


class ProjectFlow:
    """Per-chat question/answer sequencer."""

    def __init__(self, store: SessionStore, start_command: Optional[str] = None):
        self.sessions = ProjectFlowSessions(store)
        self.start_command = start_command or config.PROJECT_FLOW_START_COMMAND

    def handle(self, chat_id: str, raw_text: Optional[str]) -> ProjectFlowResult:
        """
        Process one message of the questionnaire.

        Returns:
            ProjectFlowResult with the reply (None when the message is not
            part of a questionnaire) and, on completion, the save payload.
        """
        text = (raw_text or "").strip()
        if not text:
            return ProjectFlowResult()

        if text == self.start_command:
            self.sessions.save(chat_id, ProjectFlowState())
            logger.info("project_flow_started", chat_id=chat_id)
            return ProjectFlowResult(reply_text=get_caller_text(PROJECT_QUESTIONS[0][1]))

        state = self.sessions.get(chat_id)
        if state is None:
            return ProjectFlowResult()

        if state.waiting_for_assign_confirm:
            return self._handle_assign_answer(chat_id, state, text)

        if state.step >= len(PROJECT_QUESTIONS):
            # No more steps configured.
            self.sessions.delete(chat_id)
            logger.warning("project_flow_step_out_of_range", chat_id=chat_id, step=state.step)
            return ProjectFlowResult()

        answer_key, _ = PROJECT_QUESTIONS[state.step]
        state.answers[answer_key] = text
        state.step += 1

        if state.step < len(PROJECT_QUESTIONS):
            self.sessions.save(chat_id, state)
            return ProjectFlowResult(reply_text=get_caller_text(PROJECT_QUESTIONS[state.step][1]))

        state.waiting_for_assign_confirm = True
        self.sessions.save(chat_id, state)
        rooms = state.answers.get("rooms_count") or get_caller_text("project_rooms_default")
        return ProjectFlowResult(reply_text=get_caller_text("project_assign_ask", rooms=rooms))

    def _handle_assign_answer(self, chat_id: str, state: ProjectFlowState, text: str) -> ProjectFlowResult:
        answer = resolve_confirmation(text)
        if answer == Confirmation.AMBIGUOUS:
            return ProjectFlowResult(reply_text=get_caller_text("project_assign_reprompt"))

        assign = answer == Confirmation.YES
        payload = ProjectSavePayload(
            work_location=state.answers.get("work_location"),
            rooms_count=state.answers.get("rooms_count"),
            assign_resources=assign,
        )
        self.sessions.delete(chat_id)
        logger.info("project_flow_completed", chat_id=chat_id, assign_resources=assign)

        reply_key = "project_assign_yes" if assign else "project_assign_no"
        return ProjectFlowResult(reply_text=get_caller_text(reply_key), save_payload=payload)
