from kigaers.schemas.api.ask import AskRequest, AskResponse
from kigaers.schemas.api.health import HealthResponse, PingResponse, ServiceStatus
from kigaers.schemas.api.summarize import SummarizeRequest, SummarizeResponse

__all__ = [
    "HealthResponse",
    "PingResponse",
    "ServiceStatus",
    "AskRequest",
    "AskResponse",
    "SummarizeRequest",
    "SummarizeResponse",
]
