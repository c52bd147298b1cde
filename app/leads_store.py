"""In-memory storage for captured leads."""

from datetime import datetime
from typing import Optional
from app.models import CapturedLead, LeadAnalysis

# In-memory storage
_leads_db: dict[str, CapturedLead] = {}
_next_lead_number = 1


def create_lead(analysis: LeadAnalysis, contractor_id: Optional[str] = None) -> CapturedLead:
    """Persist a confirmed lead and return it with its new id."""
    global _next_lead_number

    lead = CapturedLead(
        id=f"lead_{_next_lead_number}",
        contractor_id=contractor_id or analysis.contractor_id,
        analysis=analysis,
        created_at=datetime.now(),
    )

    _leads_db[lead.id] = lead
    _next_lead_number += 1

    return lead


def get_lead_by_id(lead_id: str) -> Optional[CapturedLead]:
    """Get a lead by ID."""
    return _leads_db.get(lead_id)


def list_leads() -> list[CapturedLead]:
    """List all leads."""
    return list(_leads_db.values())


def clear_leads() -> None:
    """Drop all leads (tests / local resets)."""
    global _next_lead_number
    _leads_db.clear()
    _next_lead_number = 1
