import asyncio
import logging

from fastapi import APIRouter

from kigaers.dependencies import LLMDep, SettingsDep
from kigaers.exceptions import GenerationError
from kigaers.schemas.api.health import HealthResponse, PingResponse, ServiceStatus

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/ping", response_model=PingResponse)
async def ping(settings: SettingsDep):
    """Liveness probe."""
    return PingResponse(status="ok", version=settings.app_version)


@router.get("/health", response_model=HealthResponse)
async def health(settings: SettingsDep, llm: LLMDep):
    """Report whether the generation endpoint is reachable."""
    services = {}
    try:
        result = await asyncio.get_running_loop().run_in_executor(None, llm.health_check)
        services["llm"] = ServiceStatus(status="healthy", message=result.get("message"))
    except GenerationError as e:
        logger.warning(f"LLM health check failed: {e}")
        services["llm"] = ServiceStatus(status="unhealthy", message=str(e))

    overall = "ok" if all(s.status == "healthy" for s in services.values()) else "degraded"
    return HealthResponse(status=overall, version=settings.app_version, services=services)
