import logging
from typing import List, Optional

import httpx

from kigaers.exceptions import FetchError
from kigaers.schemas.paper import Paper
from kigaers.services.arxiv.cache import SearchPageCache
from kigaers.services.arxiv.parser import parse_feed

logger = logging.getLogger(__name__)


class ArxivClient:
    """Paginated search against the arXiv Atom API."""

    def __init__(
        self,
        base_url: str,
        default_category: str = "cat:cs.AI",
        timeout: float = 30.0,
        cache: Optional[SearchPageCache] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        self.default_category = default_category
        self.timeout = timeout
        self.cache = cache
        self._http = http_client

    def build_params(self, query: str, offset: int, page_size: int) -> dict:
        """Empty query browses the default category by recency, otherwise search by relevance."""
        query = query.strip()
        if query:
            search_query, sort_by = f"all:{query}", "relevance"
        else:
            search_query, sort_by = self.default_category, "submittedDate"
        return {
            "search_query": search_query,
            "sortBy": sort_by,
            "sortOrder": "descending",
            "start": offset,
            "max_results": page_size,
        }

    async def fetch(self, query: str, offset: int, page_size: int) -> List[Paper]:
        """Fetch one page. A single attempt, no retries.

        :raises FetchError: on transport failure, non-2xx status, or a malformed feed
        """
        if offset < 0:
            raise ValueError("offset must be >= 0")
        if page_size <= 0:
            raise ValueError("page_size must be > 0")

        if self.cache is not None:
            cached = await self.cache.get(query, offset, page_size)
            if cached is not None:
                logger.info(f"Search cache hit: query={query!r} offset={offset}")
                return cached

        params = self.build_params(query, offset, page_size)
        logger.info(f"Fetching papers from arXiv: {params}")

        try:
            if self._http is not None:
                response = await self._http.get(self.base_url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.base_url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise FetchError(f"arXiv API timeout: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Cannot reach arXiv API: {e}") from e

        if response.is_error:
            logger.error(f"arXiv API error {response.status_code}: {response.text[:300]}")
            raise FetchError(
                f"arXiv API Error: {response.status_code} {response.reason_phrase} {response.text[:500]}".strip(),
                status_code=response.status_code,
            )

        papers = parse_feed(response.text)
        logger.info(f"arXiv returned {len(papers)} papers (offset={offset}, page_size={page_size})")

        if self.cache is not None:
            await self.cache.set(query, offset, page_size, papers)
        return papers

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
