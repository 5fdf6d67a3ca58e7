from typing import Dict, Optional

from pydantic import BaseModel, Field


class PingResponse(BaseModel):
    status: str
    version: str


class ServiceStatus(BaseModel):
    status: str = Field(..., description="healthy or unhealthy")
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = Field(..., description="ok when every service is healthy, otherwise degraded")
    version: str
    services: Dict[str, ServiceStatus] = Field(default_factory=dict)
