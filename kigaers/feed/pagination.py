"""When to fetch, and what to do with each page.

``FetchState`` is immutable and only changes through the transition functions
below; ``PaginationController`` runs them around the awaited fetch calls.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Protocol

from kigaers.exceptions import FetchError
from kigaers.feed.results import ResultSet
from kigaers.schemas.paper import Paper

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_STACK_SIZE = 2


class PaperFetcher(Protocol):
    async def fetch_papers(self, query: str, offset: int, page_size: int) -> List[Paper]: ...


class FetchPhase(str, Enum):
    IDLE = "idle"
    FETCHING_INITIAL = "fetching_initial"
    FETCHING_MORE = "fetching_more"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class FetchState:
    phase: FetchPhase = FetchPhase.IDLE
    query: str = ""
    error: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self.phase in (FetchPhase.FETCHING_INITIAL, FetchPhase.FETCHING_MORE)

    @property
    def exhausted(self) -> bool:
        return self.phase is FetchPhase.EXHAUSTED


def begin_search(state: FetchState, query: str) -> Optional[FetchState]:
    """Idle/Exhausted -> FetchingInitial. None when a fetch is already running."""
    if state.in_flight:
        return None
    return FetchState(phase=FetchPhase.FETCHING_INITIAL, query=query.strip())


def begin_more(state: FetchState) -> Optional[FetchState]:
    """Idle -> FetchingMore. None when fetching or exhausted."""
    if state.phase is not FetchPhase.IDLE:
        return None
    return replace(state, phase=FetchPhase.FETCHING_MORE, error=None)


def complete(state: FetchState, received: int, page_size: int) -> FetchState:
    """A short page means the source has nothing more for this query."""
    phase = FetchPhase.EXHAUSTED if received < page_size else FetchPhase.IDLE
    return replace(state, phase=phase, error=None)


def fail(state: FetchState, message: str) -> FetchState:
    """Stop paging. Only a failed new search is reported to the user."""
    error = message if state.phase is FetchPhase.FETCHING_INITIAL else None
    return replace(state, phase=FetchPhase.EXHAUSTED, error=error)


class PaginationController:
    """Drives the fetch client so the reader does not run out of cards."""

    def __init__(
        self,
        fetcher: PaperFetcher,
        results: ResultSet,
        page_size: int = DEFAULT_PAGE_SIZE,
        stack_size: int = DEFAULT_STACK_SIZE,
    ):
        if page_size <= 0:
            raise ValueError("page_size must be > 0")
        if stack_size < 1:
            raise ValueError("stack_size must be >= 1")
        self.fetcher = fetcher
        self.results = results
        self.page_size = page_size
        self.stack_size = stack_size
        self._state = FetchState()
        self._detached = False

    @property
    def state(self) -> FetchState:
        return self._state

    def detach(self) -> None:
        """Ignore results of fetches that complete after the owner went away."""
        self._detached = True

    def needs_more(self) -> bool:
        real = self.results.real_count
        return (
            real > 0
            and self._state.phase is FetchPhase.IDLE
            and not self.results.has_placeholder
            and self.results.cursor >= real - self.stack_size
        )

    async def search(self, query: str) -> bool:
        """Start a new search, replacing the result set. False if dropped."""
        next_state = begin_search(self._state, query)
        if next_state is None:
            logger.info(f"Search for {query!r} dropped: a fetch is already in flight")
            return False

        self._state = next_state
        self.results.replace([])
        logger.info(f"New search: query={self._state.query!r}")

        try:
            page = await self.fetcher.fetch_papers(self._state.query, 0, self.page_size)
        except FetchError as e:
            if self._detached:
                return True
            logger.error(f"Initial fetch failed: {e}")
            self.results.replace([])
            self._state = fail(self._state, f"Failed to load papers: {e}")
            return True

        if self._detached:
            return True
        self.results.replace(page)
        self._finish(len(page))
        return True

    async def fetch_more(self) -> bool:
        """Fetch the next page. False if dropped by the in-flight/exhausted guard."""
        next_state = begin_more(self._state)
        if next_state is None:
            logger.debug(f"Fetch-more dropped in phase {self._state.phase.value}")
            return False

        self._state = next_state
        offset = self.results.real_count
        logger.info(f"Fetching more: query={self._state.query!r} offset={offset}")

        try:
            page = await self.fetcher.fetch_papers(self._state.query, offset, self.page_size)
        except FetchError as e:
            if self._detached:
                return True
            logger.warning(f"Fetch-more failed, keeping current results: {e}")
            self._state = fail(self._state, str(e))
            return True

        if self._detached:
            return True
        added = self.results.append(page)
        logger.info(f"Appended {added} new papers ({len(page) - added} duplicates)")
        self._finish(len(page))
        return True

    async def maybe_fetch_more(self) -> bool:
        if not self.needs_more():
            return False
        return await self.fetch_more()

    def _finish(self, received: int) -> None:
        self._state = complete(self._state, received, self.page_size)
        if self._state.exhausted:
            self.results.close(self._state.query)
            logger.info(f"Results exhausted for query={self._state.query!r}")
