from functools import lru_cache

from kigaers.config import get_settings
from kigaers.services.backend.client import BackendClient


@lru_cache(maxsize=1)
def make_backend_client() -> BackendClient:
    settings = get_settings()
    return BackendClient(base_url=settings.backend_api_base_url, timeout=settings.request_timeout)
