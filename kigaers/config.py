from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # arXiv search API
    arxiv_base_url: str = "http://export.arxiv.org/api/query"
    arxiv_default_category: str = "cat:cs.AI"
    arxiv_page_size: int = Field(10, ge=1, le=50)
    arxiv_timeout: float = 30.0

    # OpenAI-compatible generation endpoint
    llm_api_key: str = ""
    llm_base_url: str = "https://integrate.api.nvidia.com/v1"
    llm_model: str = "meta/llama-3.3-70b-instruct"
    llm_timeout: float = 120.0
    llm_temperature: float = 0.4
    llm_max_tokens: int = 2048

    # PDF download / extraction
    pdf_timeout: float = 60.0
    pdf_max_chars: int = 60000

    # Search page cache
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_search_ttl_seconds: int = 3600
    redis_cache_version: int = 1

    # Frontend
    backend_api_base_url: str = "http://localhost:8000/api/v1"
    liked_store_path: Path = Path.home() / ".kigaers" / "liked_papers.json"
    request_timeout: float = 180.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
