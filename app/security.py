"""
API key authentication for write endpoints (measurement logging).
"""

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader
from app.config import config
from app.logging_config import get_logger

logger = get_logger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: str = Security(api_key_header)) -> str:
    """
    Verify the X-API-Key header.

    Usage:
        @router.put("/leads/{lead_id}/measurements")
        async def put_measurements(..., api_key: str = Depends(verify_api_key)):
            ...
    """
    if not config.API_KEY:
        # No key configured: open access (development mode)
        return "development"

    if api_key != config.API_KEY:
        logger.warning("api_key_rejected", provided_prefix=api_key[:4] if api_key else None)
        raise HTTPException(status_code=403, detail="Invalid or missing API key")

    return api_key
