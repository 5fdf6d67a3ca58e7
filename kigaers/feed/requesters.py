"""Summary and question requests on behalf of the UI.

Each requester keeps a per-paper in-progress set so a second click while a
request is running is ignored rather than sent twice.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Set

from kigaers.exceptions import GenerationError
from kigaers.feed.liked import LikedPaperStore
from kigaers.schemas.paper import Paper

logger = logging.getLogger(__name__)

USER_ROLE = "user"
AI_ROLE = "ai"


class SummaryTransport(Protocol):
    async def summarize(
        self, *, text: Optional[str] = None, pdf_url: Optional[str] = None, title: Optional[str] = None
    ) -> str: ...


class QuestionTransport(Protocol):
    async def ask(self, pdf_url: str, question: str, title: Optional[str] = None) -> str: ...


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str


class SummaryRequester:
    def __init__(self, transport: SummaryTransport, liked: Optional[LikedPaperStore] = None):
        self.transport = transport
        self.liked = liked
        self._pending: Set[str] = set()

    def in_progress(self, paper_id: str) -> bool:
        return paper_id in self._pending

    async def summarize(self, paper: Paper, source: Optional[str] = None) -> Optional[str]:
        """Summarize ``paper`` from its PDF (the default when it has a link) or its abstract.

        Returns None when a summary for this paper is already being generated.

        :raises GenerationError: when the paper has nothing to summarize or the service fails
        """
        if paper.is_end_of_feed:
            raise GenerationError("Nothing to summarize for this card")
        if source is None:
            source = "pdf" if paper.pdf_link else "abstract"
        if source not in ("pdf", "abstract"):
            raise ValueError(f"Unknown summary source: {source}")
        if source == "pdf" and not paper.pdf_link:
            raise GenerationError(f'"{paper.title}" has no PDF link')
        if source == "abstract" and not paper.abstract.strip():
            raise GenerationError(f'"{paper.title}" has no PDF link or abstract to summarize')
        if self.in_progress(paper.id):
            logger.debug(f"Summary already in progress for {paper.id}")
            return None

        self._pending.add(paper.id)
        try:
            if source == "pdf":
                summary = await self.transport.summarize(pdf_url=paper.pdf_link, title=paper.title)
            else:
                summary = await self.transport.summarize(text=paper.abstract, title=paper.title)
        except GenerationError as e:
            logger.error(f"Summary failed for {paper.id}: {e}")
            raise
        finally:
            self._pending.discard(paper.id)

        paper.ai_summary = summary
        if self.liked is not None:
            self.liked.update_summary(paper.id, summary)
        logger.info(f"Summary ready for {paper.id} ({len(summary)} chars)")
        return summary


class ChatRequester:
    """Question answering with a per-paper conversation history."""

    def __init__(self, transport: QuestionTransport):
        self.transport = transport
        self._history: Dict[str, List[ChatMessage]] = {}
        self._pending: Set[str] = set()

    def in_progress(self, paper_id: str) -> bool:
        return paper_id in self._pending

    def history(self, paper_id: str) -> List[ChatMessage]:
        return list(self._history.get(paper_id, []))

    def clear(self, paper_id: str) -> None:
        self._history.pop(paper_id, None)

    async def ask(self, paper: Paper, question: str) -> Optional[str]:
        """Ask about ``paper``. Returns None when a question is already pending for it.

        Failures are recorded in the history as an ``ai`` message and re-raised.
        """
        question = question.strip()
        if not question:
            raise GenerationError("Please enter a question.")
        if paper.is_end_of_feed or not paper.pdf_link:
            raise GenerationError(f'"{paper.title}" has no PDF link')
        if self.in_progress(paper.id):
            logger.debug(f"Question already in progress for {paper.id}")
            return None

        history = self._history.setdefault(paper.id, [])
        history.append(ChatMessage(USER_ROLE, question))
        self._pending.add(paper.id)
        try:
            answer = await self.transport.ask(paper.pdf_link, question, paper.title)
        except GenerationError as e:
            logger.error(f"Question failed for {paper.id}: {e}")
            history.append(ChatMessage(AI_ROLE, f"Error: {e}"))
            raise
        finally:
            self._pending.discard(paper.id)

        history.append(ChatMessage(AI_ROLE, answer))
        return answer
