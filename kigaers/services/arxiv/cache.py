import logging
from datetime import datetime, timedelta, timezone
from typing import List

from pydantic import BaseModel
from redis.asyncio import Redis
from redis.exceptions import RedisError

from kigaers.schemas.paper import Paper

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "papers"


class SearchPageCacheEntry(BaseModel):
    papers: List[Paper]
    cached_at: datetime
    expires_at: datetime


class SearchPageCache:
    """Best-effort Redis cache for parsed search pages.

    Any Redis failure is logged and treated as a miss; callers never see it.
    """

    def __init__(self, redis_client: Redis, ttl_seconds: int = 3600, version: int = 1):
        self._redis = redis_client
        self._ttl = ttl_seconds
        self._version = version

    def key(self, query: str, offset: int, page_size: int) -> str:
        return f"{CACHE_KEY_PREFIX}:v{self._version}:{query.strip().lower()}:{offset}:{page_size}"

    async def get(self, query: str, offset: int, page_size: int) -> List[Paper] | None:
        key = self.key(query, offset, page_size)
        try:
            raw = await self._redis.get(key)
        except RedisError as e:
            logger.warning(f"Search cache read failed for {key}: {e}")
            return None

        if raw is None:
            return None

        try:
            entry = SearchPageCacheEntry.model_validate_json(raw)
        except ValueError as e:
            logger.warning(f"Dropping unreadable search cache entry {key}: {e}")
            await self.invalidate(query, offset, page_size)
            return None
        return entry.papers

    async def set(self, query: str, offset: int, page_size: int, papers: List[Paper]) -> None:
        key = self.key(query, offset, page_size)
        now = datetime.now(timezone.utc)
        entry = SearchPageCacheEntry(
            papers=papers,
            cached_at=now,
            expires_at=now + timedelta(seconds=self._ttl),
        )
        try:
            await self._redis.set(key, entry.model_dump_json(), ex=self._ttl)
        except RedisError as e:
            logger.warning(f"Search cache write failed for {key}: {e}")

    async def invalidate(self, query: str, offset: int, page_size: int) -> None:
        try:
            await self._redis.delete(self.key(query, offset, page_size))
        except RedisError as e:
            logger.warning(f"Search cache invalidation failed: {e}")
