import asyncio
import logging
from typing import Awaitable, Callable, Optional

from kigaers.feed import gesture as gestures
from kigaers.feed.gesture import DEFAULT_CONFIG, Direction, GesturePhase, GestureState, SwipeConfig
from kigaers.feed.liked import LikedPaperStore
from kigaers.feed.pagination import DEFAULT_PAGE_SIZE, FetchPhase, PaginationController, PaperFetcher
from kigaers.feed.requesters import SummaryRequester
from kigaers.feed.results import ResultSet
from kigaers.feed.stack import DEFAULT_STACK_DEPTH, StackView, present_stack
from kigaers.schemas.paper import Paper

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Swipe right to save a paper, left to skip it."
NO_PAPERS_MESSAGE = "No papers to show."


class FeedSession:
    """One reader's swipe feed: results, paging, the top-card gesture and the library.

    The UI feeds pointer events and button presses in; ``stack()`` gives back
    what to draw.
    """

    def __init__(
        self,
        fetcher: PaperFetcher,
        liked: Optional[LikedPaperStore] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        stack_depth: int = DEFAULT_STACK_DEPTH,
        config: SwipeConfig = DEFAULT_CONFIG,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        summaries: Optional[SummaryRequester] = None,
    ):
        self.results = ResultSet()
        self.pagination = PaginationController(fetcher, self.results, page_size, stack_size=stack_depth)
        self.liked = liked if liked is not None else LikedPaperStore()
        self.summaries = summaries
        self.stack_depth = stack_depth
        self.config = config
        self.gesture: GestureState = gestures.NEUTRAL
        self._sleep = sleep
        self._started = False

    @property
    def current(self) -> Optional[Paper]:
        return self.results.current

    @property
    def message(self) -> Optional[str]:
        """Status line for when there is no card to show, or an error to report."""
        state = self.pagination.state
        if state.error:
            return state.error
        if state.phase is FetchPhase.FETCHING_INITIAL:
            if state.query:
                return f'Searching for "{state.query}"...'
            return "Loading papers..."
        if not self._started:
            return WELCOME_MESSAGE
        if len(self.results) == 0 and state.exhausted:
            return NO_PAPERS_MESSAGE
        return None

    async def start(self) -> None:
        """Load the library and the default feed."""
        if not self.liked.loaded:
            self.liked.load()
        await self.search("")

    async def search(self, term: str) -> bool:
        self._started = True
        accepted = await self.pagination.search(term)
        if accepted:
            self.gesture = gestures.NEUTRAL
        return accepted

    async def retry(self) -> bool:
        return await self.search(self.pagination.state.query)

    @property
    def can_clear_search(self) -> bool:
        return bool(self.pagination.state.query)

    async def clear_search(self) -> bool:
        """Drop the keywords and go back to the default feed."""
        return await self.search("")

    def detach(self) -> None:
        self.pagination.detach()

    def stack(self) -> StackView:
        return present_stack(self.results, self.gesture, self.pagination.state, self.stack_depth)

    def press(self, x: float, y: float, card_width: float) -> None:
        if self.current is None:
            return
        self.gesture = gestures.press(self.gesture, x, y, card_width)

    def drag(self, x: float, y: float) -> None:
        self.gesture = gestures.drag(self.gesture, x, y, self.config)

    def release(self) -> Optional[Direction]:
        """Pointer up. Returns the committed direction, or None if the card snapped back."""
        self.gesture = gestures.release(self.gesture, self.config)
        if self.gesture.phase is GesturePhase.SNAPPING_BACK:
            self.gesture = gestures.settle(self.gesture)
            return None
        if self.gesture.phase is GesturePhase.COMMITTED:
            self._apply(self.gesture.direction)
            return self.gesture.direction
        return None

    cancel = release

    def commit(self, direction: Direction) -> bool:
        """Explicit accept/reject control. False while another card is still flying out."""
        if self.current is None or self.gesture.locked:
            return False
        self.gesture = gestures.commit(self.gesture, direction)
        self._apply(direction)
        return True

    def _apply(self, direction: Direction) -> None:
        paper = self.current
        if direction is Direction.ACCEPT and paper is not None and not paper.is_end_of_feed:
            if self.liked.add(paper):
                logger.info(f"Liked paper {paper.id}")
        self.gesture = gestures.fly_out(self.gesture)

    async def complete_fly_out(self) -> None:
        """The fly-out animation ended: move past the card and top up the results."""
        if self.gesture.phase is not GesturePhase.FLYING_OUT:
            return
        direction = self.gesture.direction
        paper = self.current
        self.gesture = gestures.settle(self.gesture)

        if (
            paper is not None
            and paper.is_end_of_feed
            and direction is Direction.ACCEPT
            and not self.pagination.state.exhausted
        ):
            # New papers replace the placeholder in place.
            await self.pagination.fetch_more()
            return

        self.results.advance()
        await self.pagination.maybe_fetch_more()

    async def _fly_out(self) -> None:
        await self._sleep(self.config.fly_out_ms / 1000)
        await self.complete_fly_out()

    async def swipe(self, direction: Direction) -> bool:
        if not self.commit(direction):
            return False
        await self._fly_out()
        return True

    async def accept(self) -> bool:
        return await self.swipe(Direction.ACCEPT)

    async def reject(self) -> bool:
        return await self.swipe(Direction.REJECT)

    async def end_drag(self) -> Optional[Direction]:
        """Release the drag and, if it committed, play out the fly-out."""
        direction = self.release()
        if direction is not None:
            await self._fly_out()
        return direction

    async def summarize_current(self, source: str = "abstract") -> Optional[str]:
        paper = self.current
        if paper is None or self.summaries is None:
            return None
        return await self.summaries.summarize(paper, source=source)
