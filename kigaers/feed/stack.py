from dataclasses import dataclass
from typing import Optional, Tuple

from kigaers.feed.gesture import GesturePhase, GestureState
from kigaers.feed.pagination import FetchState
from kigaers.feed.results import ResultSet
from kigaers.schemas.paper import Paper

DEFAULT_STACK_DEPTH = 2

MORE_HINT = "Swipe right to look for more, or search again."
END_HINT = "Search again or clear the search to start over."


@dataclass(frozen=True)
class StackCard:
    paper: Paper
    position: int
    scale: float
    offset_y: float
    opacity: float
    rotation_deg: float
    interactive: bool
    transform: str = ""
    flying: Optional[str] = None
    entering: bool = False


@dataclass(frozen=True)
class StackView:
    cards: Tuple[StackCard, ...]
    preparing_next: bool
    finished: bool
    has_more: bool = False

    @property
    def top(self) -> Optional[StackCard]:
        return self.cards[0] if self.cards else None

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def end_of_feed_hint(self) -> str:
        """What the placeholder card invites the user to do next."""
        return MORE_HINT if self.has_more else END_HINT


def _card(paper: Paper, position: int, gesture: GestureState) -> StackCard:
    if position == 0:
        flying = gesture.direction.value if gesture.phase is GesturePhase.FLYING_OUT else None
        return StackCard(
            paper=paper,
            position=0,
            scale=1.0,
            offset_y=0.0,
            opacity=1.0,
            rotation_deg=0.0,
            interactive=True,
            transform=gesture.transform,
            flying=flying,
        )
    sign = -1 if position % 2 == 0 else 1
    return StackCard(
        paper=paper,
        position=position,
        scale=round(1 - position * 0.04, 4),
        offset_y=position * 8.0,
        opacity=max(round(1 - position * 0.4, 4), 0.0),
        rotation_deg=float(position * sign),
        interactive=False,
        entering=position == 1 and gesture.phase is GesturePhase.FLYING_OUT,
    )


def present_stack(
    results: ResultSet,
    gesture: GestureState,
    fetch_state: FetchState,
    depth: int = DEFAULT_STACK_DEPTH,
) -> StackView:
    """Visible cards, top first. Pure: same inputs, same view."""
    if depth < 1:
        raise ValueError("depth must be >= 1")

    window = results.window(depth)
    cards = tuple(_card(paper, position, gesture) for position, paper in enumerate(window))

    preparing_next = False
    finished = False
    if not cards:
        # Out of cards but the controller has more coming: a transient state.
        preparing_next = fetch_state.in_flight or (results.real_count > 0 and not fetch_state.exhausted)
        finished = not preparing_next and fetch_state.exhausted and len(results) > 0
    return StackView(
        cards=cards,
        preparing_next=preparing_next,
        finished=finished,
        has_more=not fetch_state.exhausted,
    )
