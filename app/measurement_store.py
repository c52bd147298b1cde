"""In-memory storage for site measurements, keyed by lead id."""

from typing import Optional
from app.models import MeasurementData

# In-memory storage
_measurements_db: dict[str, MeasurementData] = {}


def save_measurements(lead_id: str, data: MeasurementData) -> MeasurementData:
    """
    Record measurements for a lead.

    Fields that are None in `data` keep their previously recorded value, so
    measurements can be dictated over several messages.
    """
    current = _measurements_db.get(lead_id) or MeasurementData()
    merged = current.model_copy(update=data.model_dump(exclude_none=True))
    _measurements_db[lead_id] = merged
    return merged


def get_measurements(lead_id: Optional[str]) -> Optional[MeasurementData]:
    """Get measurements recorded for a lead, if any."""
    if not lead_id:
        return None
    return _measurements_db.get(lead_id)


def clear_measurements() -> None:
    _measurements_db.clear()
