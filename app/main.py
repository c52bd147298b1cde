"""Main FastAPI application."""

from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from app.config import config
from app.health import router as health_router, SERVICE_VERSION
from app.logging_config import logger
from app.routers.agent import router as lead_router
from app.routers.core import router as core_router
from app.routers.project import router as project_router

# Prometheus metrics
api_requests_total = Counter('api_requests_total', 'Total API requests', ['method', 'endpoint', 'status'])
api_request_duration = Histogram('api_request_duration_seconds', 'API request duration')


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    # Startup
    logger.info("application_starting", version=SERVICE_VERSION)
    logger.info("openai_configured", configured=config.has_openai_key())

    yield

    # Shutdown
    logger.info("application_shutting_down")


app = FastAPI(
    title="Painting Lead Assistant API",
    description="Lead-capture chat assistant for painting contractors",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def record_request_metrics(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    api_request_duration.observe(time.perf_counter() - start)

    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    api_requests_total.labels(method=request.method, endpoint=endpoint, status=response.status_code).inc()
    return response


app.include_router(health_router)
app.include_router(core_router)
app.include_router(lead_router)
app.include_router(project_router)


# GET /metrics
# Gets: nothing
# Returns: Prometheus text exposition
# Example:
#   curl http://localhost:8000/metrics
@app.get("/metrics")
async def metrics():
    """Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
