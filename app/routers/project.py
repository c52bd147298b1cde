from fastapi import APIRouter

from app.models import ProjectFlowResult, ProjectTurnRequest
from app.project_flow import ProjectFlow
from app.session_store import default_store

router = APIRouter(prefix="/project", tags=["Project"])

project_flow = ProjectFlow(default_store)


# POST /project/turn
# Gets: JSON body {chat_id: str, text?: str}
# Returns: ProjectFlowResult {reply_text?, save_payload?}
# Example:
#   curl -X POST http://localhost:8000/project/turn \
#     -H 'Content-Type: application/json' \
#     -d '{"chat_id": "chat-42", "text": "/project"}'
@router.post("/turn", response_model=ProjectFlowResult)
async def project_turn(request: ProjectTurnRequest):
    """Advance the step-by-step project questionnaire for a chat."""
    return project_flow.handle(request.chat_id, request.text)
