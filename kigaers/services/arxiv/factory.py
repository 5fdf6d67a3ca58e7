from functools import lru_cache

from kigaers.config import get_settings
from kigaers.db.redis.redis import get_redis_client
from kigaers.services.arxiv.cache import SearchPageCache
from kigaers.services.arxiv.client import ArxivClient


@lru_cache(maxsize=1)
def make_arxiv_client() -> ArxivClient:
    """
    Create and return a singleton arXiv client, with the Redis page cache
    attached when it is enabled in settings.
    """
    settings = get_settings()
    cache = None
    if settings.redis_enabled:
        cache = SearchPageCache(
            redis_client=get_redis_client(),
            ttl_seconds=settings.redis_search_ttl_seconds,
            version=settings.redis_cache_version,
        )
    return ArxivClient(
        base_url=settings.arxiv_base_url,
        default_category=settings.arxiv_default_category,
        timeout=settings.arxiv_timeout,
        cache=cache,
    )
