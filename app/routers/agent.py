from fastapi import APIRouter, HTTPException

from app.models import (
    ConversationState,
    LeadAnalyzeRequest,
    LeadAnalyzeResponse,
    LeadIntentRequest,
    LeadIntentResult,
    LeadTurnRequest,
    LeadTurnResponse,
)
from app import lead_analysis, leads_store
from app.missing_fields import build_confirmation, compute_missing_fields
from app.services import LeadTurnService
from app.session_store import default_store

router = APIRouter(prefix="/lead", tags=["Lead"])

lead_turn_service = LeadTurnService(default_store)


# POST /lead/turn
# Gets: JSON body {conversation_id: str, text: str, contractor_id?: str, language_hint?: str}
# Returns: LeadTurnResponse {reply, rule, state, intent?, tool_call?, dependencies?, missing?, quote?}
# Example:
#   curl -X POST http://localhost:8000/lead/turn \
#     -H 'Content-Type: application/json' \
#     -d '{"conversation_id": "chat-42", "text": "2BHK interior repaint HSR, customer Rahil 9876543210, next week"}'
@router.post("/turn", response_model=LeadTurnResponse)
def lead_turn(request: LeadTurnRequest):
    """Process one user message of the lead-capture conversation."""
    return lead_turn_service.process_turn(
        conversation_id=request.conversation_id,
        text=request.text,
        contractor_id=request.contractor_id,
        language_hint=request.language_hint,
    )


# POST /lead/analyze
# Gets: JSON body {text: str, contractor_id?: str, language_hint?: "hi"|"en"|"mixed"|"unknown"}
# Returns: LeadAnalyzeResponse {success, data?, missing?, followup_questions?, confirmation?, error?}
# Example:
#   curl -X POST http://localhost:8000/lead/analyze \
#     -H 'Content-Type: application/json' \
#     -d '{"text": "New lead add karo. 2BHK interior repaint. Location: HSR, 27th Main. Customer: Rahil."}'
@router.post("/analyze", response_model=LeadAnalyzeResponse)
def analyze(request: LeadAnalyzeRequest):
    """Extract structured lead data plus missing fields and follow-up questions."""
    result = lead_analysis.analyze_lead(
        request.text,
        contractor_id=request.contractor_id,
        language_hint=request.language_hint,
    )
    if not result.success or result.data is None:
        raise HTTPException(
            status_code=400 if result.error else 502,
            detail=result.error or "Lead analysis request could not be processed.",
        )

    missing = compute_missing_fields(result.data)
    return LeadAnalyzeResponse(
        success=True,
        data=result.data,
        missing=missing.missing or None,
        followup_questions=missing.questions or None,
        confirmation=None if missing.missing else build_confirmation(result.data),
    )


# POST /lead/intent
# Gets: JSON body {text: str}
# Returns: LeadIntentResult {intent, lead_hint?, topic?}
# Example:
#   curl -X POST http://localhost:8000/lead/intent -H 'Content-Type: application/json' -d '{"text": "namaste"}'
@router.post("/intent", response_model=LeadIntentResult)
def intent(request: LeadIntentRequest):
    """Classify a message into a high-level intent."""
    if not request.text.strip():
        raise HTTPException(status_code=400, detail='Send JSON with non-empty "text" field.')

    result = lead_analysis.classify_intent(request.text)
    if result is None:
        raise HTTPException(status_code=502, detail="Could not detect intent for this message.")
    return result


# PUT /lead/conversations/{conversation_id}/lead/{lead_id}
# Gets: path params conversation_id, lead_id
# Returns: ConversationState after binding
# Example:
#   curl -X PUT http://localhost:8000/lead/conversations/chat-42/lead/lead_1
@router.put("/conversations/{conversation_id}/lead/{lead_id}", response_model=ConversationState)
async def bind_conversation_lead(conversation_id: str, lead_id: str):
    """Bind a conversation to an existing lead (project)."""
    if not leads_store.get_lead_by_id(lead_id):
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    return lead_turn_service.bind_lead(conversation_id, lead_id)
