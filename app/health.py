"""
Health check and monitoring endpoints.
"""

from fastapi import APIRouter

from app import lead_analysis
from app.config import config
from app.logging_config import logger
from app.session_store import InMemorySessionStore, default_store

router = APIRouter(tags=["Health & Monitoring"])

SERVICE_NAME = "painting-lead-assistant"
SERVICE_VERSION = "1.0.0"


# GET /health
# Gets: nothing
# Returns: {status, service, version}
# Example:
#   curl http://localhost:8000/health
@router.get("/health")
async def health_check():
    """
    Basic health check - returns 200 if service is running.
    Use this for basic liveness probes.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


# GET /health/ready
# Gets: nothing
# Returns: dependency readiness checks
# Example:
#   curl http://localhost:8000/health/ready
@router.get("/health/ready")
async def readiness_check():
    """
    Readiness check.

    The service answers without OpenAI (heuristic intents, retry prompts on
    extraction), so it is always ready; the checks only report what is wired.
    """
    checks = {
        "session_store": type(default_store).__name__,
        "openai": lead_analysis.client is not None,
        "ready": True,
    }
    logger.debug("readiness_check", **checks)
    return checks


# GET /health/info
# Gets: nothing
# Returns: service configuration summary
# Example:
#   curl http://localhost:8000/health/info
@router.get("/health/info")
async def system_info():
    """
    System information and configuration status.
    """
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "configuration": {
            "openai_configured": config.has_openai_key(),
            "openai_model": config.OPENAI_MODEL if config.has_openai_key() else None,
            "debug_mode": config.DEBUG,
            "project_flow_start_command": config.PROJECT_FLOW_START_COMMAND,
        },
        "features": {
            "llm_intent_classification": config.has_openai_key(),
            "llm_lead_extraction": config.has_openai_key(),
            "durable_sessions": not isinstance(default_store, InMemorySessionStore),
        },
    }
