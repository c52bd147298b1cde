from fastapi import APIRouter, Depends, HTTPException

from app.models import CapturedLead, MeasurementData
from app import leads_store, measurement_store
from app.security import verify_api_key

router = APIRouter(tags=["Core"])


# GET /
# Gets: nothing
# Returns: basic API metadata and a map of key endpoints
# Example:
#   curl http://localhost:8000/
@router.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Painting Lead Assistant API",
        "version": "1.0.0",
        "description": "Lead-capture chat assistant for painting contractors - captures leads, schedules site visits, prepares quote options",
        "endpoints": {
            "lead_turn": "/lead/turn",
            "lead_analyze": "/lead/analyze",
            "lead_intent": "/lead/intent",
            "project_turn": "/project/turn",
            "leads": "/leads",
            "measurements": "/leads/{lead_id}/measurements",
        },
        "features": [
            "Hinglish / Hindi / Gujarati / Kannada yes-no handling",
            "Lead capture with follow-up questions",
            "Quote generation with dependency checks",
            "Step-by-step project questionnaire",
        ],
    }


# GET /leads
# Gets: nothing
# Returns: JSON array of captured leads
# Example:
#   curl http://localhost:8000/leads
@router.get("/leads", response_model=list[CapturedLead])
async def list_leads():
    """List all captured leads."""
    return leads_store.list_leads()


# GET /leads/{lead_id}
# Gets: path param lead_id
# Returns: CapturedLead
# Example:
#   curl http://localhost:8000/leads/lead_1
@router.get("/leads/{lead_id}", response_model=CapturedLead)
async def get_lead(lead_id: str):
    """Get one captured lead."""
    lead = leads_store.get_lead_by_id(lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    return lead


# PUT /leads/{lead_id}/measurements
# Gets: JSON body MeasurementData (all fields optional); X-API-Key header when API_KEY is set
# Returns: merged MeasurementData
# Example:
#   curl -X PUT http://localhost:8000/leads/lead_1/measurements \
#     -H 'Content-Type: application/json' -d '{"bhk": 2, "sqft": 850}'
@router.put("/leads/{lead_id}/measurements", response_model=MeasurementData)
async def put_measurements(lead_id: str, data: MeasurementData, api_key: str = Depends(verify_api_key)):
    """Record site measurements for a lead."""
    if not leads_store.get_lead_by_id(lead_id):
        raise HTTPException(status_code=404, detail=f"Lead {lead_id} not found")
    return measurement_store.save_measurements(lead_id, data)
