"""Turn orchestration for the lead-capture conversation.

decide_next_turn() is pure: it never persists data, calls the classifier or
extractor, or sends messages. The caller applies the returned decision
(persist the lead on NEW -> LEAD_CAPTURED, run the tool call, store the new
state).

Rules are tried in order and the first one returning a decision wins.
"""

from typing import Callable, Optional

from app.language.caller_hi import get_caller_text
from app.language.confirmation import Confirmation, detect_greeting, resolve_confirmation
from app.missing_fields import build_confirmation, compute_missing_fields
from app.models import (
    AnalysisResult,
    ConversationIntent,
    ConversationState,
    HighLevelIntent,
    LeadStatus,
    LeadIntentResult,
    MeasurementData,
    TurnContext,
    TurnDecision,
)
from app.quote_gate import build_quote_tool_call, check_quote_dependencies


Rule = Callable[[TurnContext], Optional[TurnDecision]]


def _intent_is(ctx: TurnContext, *intents: HighLevelIntent) -> bool:
    return ctx.intent is not None and ctx.intent.intent in intents


def _with_state(state: ConversationState, **updates) -> ConversationState:
    return state.model_copy(update=updates)


def _greeting(ctx: TurnContext, rule: str, text_key: str = "greeting") -> TurnDecision:
    return TurnDecision(
        reply=get_caller_text(text_key),
        new_state=_with_state(ctx.state, last_intent=ConversationIntent.GREETING),
        rule=rule,
    )


def _rule_intent_greeting(ctx: TurnContext) -> Optional[TurnDecision]:
    if _intent_is(ctx, HighLevelIntent.GREETING):
        return _greeting(ctx, "intent_greeting")
    if _intent_is(ctx, HighLevelIntent.GENERAL_QUESTION):
        return _greeting(ctx, "intent_greeting", text_key="general_question")
    return None


def _rule_generate_quote(ctx: TurnContext) -> Optional[TurnDecision]:
    if not _intent_is(ctx, HighLevelIntent.GENERATE_QUOTE_OPTIONS):
        return None

    new_state = _with_state(ctx.state, last_intent=ConversationIntent.NEW)
    dependencies = check_quote_dependencies(ctx.state, ctx.measurements)
    if dependencies:
        lines = [get_caller_text("quote_dependencies_header")]
        lines.extend(dep.message for dep in dependencies)
        return TurnDecision(
            reply="\n".join(lines),
            new_state=new_state,
            rule="generate_quote",
            dependencies=dependencies,
        )

    return TurnDecision(
        reply=get_caller_text("quote_generating"),
        new_state=new_state,
        rule="generate_quote",
        tool_call=build_quote_tool_call(ctx.state.lead_id, ctx.text, ctx.analysis.data),
    )


def _rule_project_binding_required(ctx: TurnContext) -> Optional[TurnDecision]:
    if not _intent_is(ctx, HighLevelIntent.UPDATE_EXISTING_LEAD, HighLevelIntent.LOG_MEASUREMENT):
        return None
    if ctx.state.lead_id:
        return None

    hint_part = ""
    if ctx.intent.lead_hint:
        hint_part = get_caller_text("lead_hint_echo", lead_hint=ctx.intent.lead_hint)

    if ctx.intent.intent == HighLevelIntent.LOG_MEASUREMENT:
        action_label = get_caller_text("action_label_measurement")
    else:
        action_label = get_caller_text("action_label_update")

    return TurnDecision(
        reply=hint_part + get_caller_text("project_binding_required", action_label=action_label),
        new_state=_with_state(ctx.state, last_intent=ConversationIntent.NEW),
        rule="project_binding_required",
    )


def _rule_measurement_logged(ctx: TurnContext) -> Optional[TurnDecision]:
    if not (_intent_is(ctx, HighLevelIntent.LOG_MEASUREMENT) and ctx.state.lead_id):
        return None
    # Measurement persistence happens outside; keep the conversation moving.
    return TurnDecision(
        reply=get_caller_text("measurement_logged"),
        new_state=_with_state(ctx.state, last_intent=ConversationIntent.NEW),
        rule="measurement_logged",
    )


def _rule_heuristic_greeting(ctx: TurnContext) -> Optional[TurnDecision]:
    if detect_greeting(ctx.text):
        return _greeting(ctx, "heuristic_greeting")
    return None


def _rule_pending_confirmation(ctx: TurnContext) -> Optional[TurnDecision]:
    state = ctx.state
    if not (state.last_intent == ConversationIntent.LEAD_CAPTURED and state.lead_status == LeadStatus.NEW):
        return None

    answer = resolve_confirmation(ctx.text)
    if answer == Confirmation.YES:
        # The caller persists the lead on this transition.
        return TurnDecision(
            reply=get_caller_text("lead_confirm_yes"),
            new_state=_with_state(
                state,
                lead_status=LeadStatus.LEAD_CAPTURED,
                last_intent=ConversationIntent.SCHEDULE_SITE_VISIT,
            ),
            rule="pending_confirmation",
        )
    if answer == Confirmation.NO:
        return TurnDecision(
            reply=get_caller_text("lead_confirm_no"),
            new_state=_with_state(state, last_intent=ConversationIntent.LEAD_MODIFICATION),
            rule="pending_confirmation",
        )
    return None


def _rule_analysis_failed(ctx: TurnContext) -> Optional[TurnDecision]:
    if ctx.analysis.success:
        return None
    return TurnDecision(
        reply=ctx.analysis.error or get_caller_text("analysis_failed"),
        new_state=ctx.state,
        rule="analysis_failed",
    )


def _rule_lead_details(ctx: TurnContext) -> Optional[TurnDecision]:
    data = ctx.analysis.data
    if data is None:
        return None

    intent = ctx.intent.intent if ctx.intent else None
    missing = compute_missing_fields(data, intent)
    if missing.missing:
        # lead_status never reverts, so a captured lead stays captured here.
        return TurnDecision(
            reply="\n".join(missing.questions),
            new_state=_with_state(ctx.state, last_intent=ConversationIntent.NEW),
            rule="lead_details",
            missing=missing.missing,
        )

    if ctx.state.lead_status == LeadStatus.NEW:
        return TurnDecision(
            reply=build_confirmation(data),
            new_state=_with_state(ctx.state, last_intent=ConversationIntent.LEAD_CAPTURED),
            rule="lead_details",
        )
    return None


def _rule_site_visit_followup(ctx: TurnContext) -> Optional[TurnDecision]:
    state = ctx.state
    if state.last_intent == ConversationIntent.SCHEDULE_SITE_VISIT and state.lead_status == LeadStatus.LEAD_CAPTURED:
        return TurnDecision(
            reply=get_caller_text("site_visit_followup"),
            new_state=state,
            rule="site_visit_followup",
        )
    return None


def _rule_fallback(ctx: TurnContext) -> Optional[TurnDecision]:
    return TurnDecision(
        reply=get_caller_text("fallback"),
        new_state=ctx.state,
        rule="fallback",
    )


# Precedence order, first match wins.
RULES: list[tuple[str, Rule]] = [
    ("intent_greeting", _rule_intent_greeting),
    ("generate_quote", _rule_generate_quote),
    ("project_binding_required", _rule_project_binding_required),
    ("measurement_logged", _rule_measurement_logged),
    ("heuristic_greeting", _rule_heuristic_greeting),
    ("pending_confirmation", _rule_pending_confirmation),
    ("analysis_failed", _rule_analysis_failed),
    ("lead_details", _rule_lead_details),
    ("site_visit_followup", _rule_site_visit_followup),
    ("fallback", _rule_fallback),
]


def decide_next_turn(
    text: str,
    state: ConversationState,
    analysis: AnalysisResult,
    intent: Optional[LeadIntentResult] = None,
    measurements: Optional[MeasurementData] = None,
) -> TurnDecision:
    """
    Decide the reply and the next conversation state for one user utterance.

    Args:
        text: Raw user utterance
        state: Conversation state stored after the previous turn
        analysis: Lead extractor outcome for this utterance
        intent: Classifier output, or None when classification failed
        measurements: Measurements recorded for the bound lead, if any

    Returns:
        TurnDecision with reply, new_state, the name of the rule that fired,
        and optional tool_call / dependencies / missing map.
    """
    ctx = TurnContext(
        text=(text or "").strip(),
        state=state,
        analysis=analysis,
        intent=intent,
        measurements=measurements,
    )

    for _name, rule in RULES:
        decision = rule(ctx)
        if decision is not None:
            return decision

    return _rule_fallback(ctx)
