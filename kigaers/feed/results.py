import logging
from typing import Iterable, List, Optional, Tuple

from kigaers.schemas.paper import Paper, make_end_of_feed_card

logger = logging.getLogger(__name__)


class ResultSet:
    """Ordered, de-duplicated papers for the current search plus the read cursor.

    The cursor indexes the next unseen card. It only ever moves forward, one
    step at a time, and never past the end of the list.
    """

    def __init__(self) -> None:
        self._papers: List[Paper] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._papers)

    @property
    def papers(self) -> Tuple[Paper, ...]:
        return tuple(self._papers)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def real_papers(self) -> List[Paper]:
        return [p for p in self._papers if not p.is_end_of_feed]

    @property
    def real_count(self) -> int:
        return sum(1 for p in self._papers if not p.is_end_of_feed)

    @property
    def has_placeholder(self) -> bool:
        return any(p.is_end_of_feed for p in self._papers)

    @property
    def current(self) -> Optional[Paper]:
        if self._cursor < len(self._papers):
            return self._papers[self._cursor]
        return None

    def window(self, size: int) -> List[Paper]:
        return self._papers[self._cursor : self._cursor + size]

    def get(self, paper_id: str) -> Optional[Paper]:
        for paper in self._papers:
            if paper.id == paper_id:
                return paper
        return None

    def replace(self, papers: Iterable[Paper]) -> None:
        """Discard everything (a new search) and reset the cursor."""
        self._papers = []
        self._cursor = 0
        self.append(papers)

    def append(self, papers: Iterable[Paper]) -> int:
        """Append papers whose id is not already present. Returns how many were new."""
        placeholder_index = next(
            (i for i, p in enumerate(self._papers) if p.is_end_of_feed), None
        )
        # More data after the end marker: drop it unless the reader is already past it.
        if placeholder_index is not None and self._cursor <= placeholder_index:
            del self._papers[placeholder_index]

        seen = {p.id for p in self._papers}
        added = 0
        for paper in papers:
            if paper.is_end_of_feed or paper.id in seen:
                continue
            seen.add(paper.id)
            self._papers.append(paper)
            added += 1
        return added

    def close(self, term: str = "") -> bool:
        """Append the end-of-results placeholder, if there is anything to close."""
        if not self._papers or self.has_placeholder:
            return False
        self._papers.append(make_end_of_feed_card(term))
        return True

    def advance(self) -> bool:
        if self._cursor >= len(self._papers):
            logger.debug("Cursor already at the end of the result set")
            return False
        self._cursor += 1
        return True
