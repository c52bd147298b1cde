"""
Service layer: runs one lead-conversation turn end to end.

The orchestrator in agent_logic only decides; this layer calls the
collaborators around it and applies the decision's side effects.
"""

from typing import Optional

from prometheus_client import Counter

from app import agent_logic, lead_analysis, leads_store, measurement_store, quote_generator
from app.logging_config import conversation_context, conversation_text_for_log, get_logger
from app.models import (
    AnalysisResult,
    ConversationIntent,
    HighLevelIntent,
    LeadStatus,
    LeadTurnResponse,
    QuoteResponse,
)
from app.quote_gate import QUOTE_TOOL_NAME
from app.session_store import ConversationSessions, SessionStore

logger = get_logger(__name__)

turns_total = Counter("lead_turns_total", "Lead conversation turns", ["rule"])
leads_captured = Counter("leads_captured_total", "Leads confirmed by users")
quote_tool_calls = Counter("quote_tool_calls_total", "generate_quote_options executions", ["status"])

# Intents whose rule never looks at the lead extraction.
SKIP_EXTRACTION_INTENTS = {HighLevelIntent.GREETING, HighLevelIntent.GENERAL_QUESTION}


class LeadTurnService:
    """Runs lead-conversation turns against a session store."""

    def __init__(self, store: SessionStore):
        self.sessions = ConversationSessions(store)

    def _analysis_for_turn(
        self,
        text: str,
        intent: Optional[HighLevelIntent],
        lead_id: Optional[str],
        contractor_id: Optional[str],
        language_hint: Optional[str],
    ) -> AnalysisResult:
        if intent in SKIP_EXTRACTION_INTENTS:
            return AnalysisResult(success=True)

        if intent == HighLevelIntent.GENERATE_QUOTE_OPTIONS:
            # Job context comes from the bound lead, not from the quote request.
            lead = leads_store.get_lead_by_id(lead_id) if lead_id else None
            return AnalysisResult(success=True, data=lead.analysis if lead else None)

        return lead_analysis.analyze_lead(text, contractor_id=contractor_id, language_hint=language_hint)

    def process_turn(
        self,
        conversation_id: str,
        text: str,
        contractor_id: Optional[str] = None,
        language_hint: Optional[str] = None,
    ) -> LeadTurnResponse:
        """
        Process one user message for a conversation.

        Steps: load state, classify, extract, look up measurements, decide,
        then persist the lead on confirmation, run any quote tool call and
        store the new state.
        """
        with conversation_context(conversation_id):
            return self._run_turn(conversation_id, text, contractor_id, language_hint)

    def _run_turn(
        self,
        conversation_id: str,
        text: str,
        contractor_id: Optional[str],
        language_hint: Optional[str],
    ) -> LeadTurnResponse:
        state = self.sessions.get_state(conversation_id)

        intent = lead_analysis.classify_intent(text)
        analysis = self._analysis_for_turn(
            text,
            intent.intent if intent else None,
            state.lead_id,
            contractor_id,
            language_hint,
        )
        measurements = measurement_store.get_measurements(state.lead_id)

        decision = agent_logic.decide_next_turn(
            text=text,
            state=state,
            analysis=analysis,
            intent=intent,
            measurements=measurements,
        )
        new_state = decision.new_state
        reply = decision.reply

        # Recap sent: remember what the user is being asked to confirm.
        if decision.rule == "lead_details" and new_state.last_intent == ConversationIntent.LEAD_CAPTURED:
            self.sessions.set_pending_analysis(conversation_id, analysis.data)

        if state.lead_status == LeadStatus.NEW and new_state.lead_status == LeadStatus.LEAD_CAPTURED:
            pending = self.sessions.get_pending_analysis(conversation_id)
            if pending is not None:
                lead = leads_store.create_lead(pending, contractor_id=contractor_id)
                new_state = new_state.model_copy(update={"lead_id": lead.id})
                leads_captured.inc()
                logger.info("lead_captured", lead_id=lead.id)
            else:
                logger.warning("lead_confirmed_without_pending_analysis")
            self.sessions.set_pending_analysis(conversation_id, None)

        quote: Optional[QuoteResponse] = None
        if decision.tool_call and decision.tool_call.name == QUOTE_TOOL_NAME:
            quote = quote_generator.generate_quote_options(decision.tool_call.arguments)
            quote_tool_calls.labels(status="success" if quote.success else "error").inc()
            if quote.success:
                reply = f"{reply}\n\n{quote_generator.format_quote_options(quote.options)}"

        self.sessions.save_state(conversation_id, new_state)
        turns_total.labels(rule=decision.rule).inc()

        logger.info(
            "lead_turn_processed",
            rule=decision.rule,
            intent=intent.intent.value if intent else None,
            lead_status=new_state.lead_status.value,
            last_intent=new_state.last_intent.value if new_state.last_intent else None,
            lead_id=new_state.lead_id,
            user_text=conversation_text_for_log(text),
            reply_text=conversation_text_for_log(reply),
        )

        return LeadTurnResponse(
            reply=reply,
            rule=decision.rule,
            state=new_state,
            intent=intent,
            tool_call=decision.tool_call,
            dependencies=decision.dependencies,
            missing=decision.missing,
            quote=quote,
        )

    def bind_lead(self, conversation_id: str, lead_id: str):
        """Attach an existing lead to a conversation (e.g. after the user named the project)."""
        return self.sessions.bind_lead(conversation_id, lead_id)
