"""Swipe recognition for the top card.

Every function takes a ``GestureState`` and returns a new one; nothing here
touches the result set or the liked store. Coordinates are in whatever unit
the input uses (pixels for a browser).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class Feedback(str, Enum):
    NONE = "none"
    ACCEPT = "accept"
    REJECT = "reject"


class GesturePhase(str, Enum):
    NEUTRAL = "neutral"
    DRAGGING = "dragging"
    SNAPPING_BACK = "snapping_back"
    COMMITTED = "committed"
    FLYING_OUT = "flying_out"


@dataclass(frozen=True)
class SwipeConfig:
    commit_threshold: float = 70.0
    max_rotation_deg: float = 12.0
    translate_scale: float = 1.1
    vertical_ratio: float = 1.8
    vertical_min: float = 15.0
    fly_out_ms: int = 600


DEFAULT_CONFIG = SwipeConfig()


@dataclass(frozen=True)
class GestureState:
    phase: GesturePhase = GesturePhase.NEUTRAL
    start_x: float = 0.0
    start_y: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    card_width: float = 1.0
    translate_x: float = 0.0
    rotation_deg: float = 0.0
    feedback: Feedback = Feedback.NONE
    direction: Optional[Direction] = None

    @property
    def locked(self) -> bool:
        """A committed card ignores further input until it has flown out."""
        return self.direction is not None

    @property
    def transform(self) -> str:
        if self.phase is not GesturePhase.DRAGGING:
            return ""
        return f"translateX({self.translate_x:g}px) rotate({self.rotation_deg:g}deg)"


NEUTRAL = GestureState()


def press(state: GestureState, x: float, y: float, card_width: float) -> GestureState:
    """Pointer down on the top card."""
    if state.locked:
        return state
    return GestureState(
        phase=GesturePhase.DRAGGING,
        start_x=x,
        start_y=y,
        card_width=card_width if card_width > 0 else 1.0,
    )


def drag(state: GestureState, x: float, y: float, config: SwipeConfig = DEFAULT_CONFIG) -> GestureState:
    """Pointer moved. A mostly vertical move hands control back to scrolling."""
    if state.phase is not GesturePhase.DRAGGING:
        return state

    dx = x - state.start_x
    dy = y - state.start_y
    if abs(dy) > config.vertical_ratio * abs(dx) and abs(dy) > config.vertical_min:
        return NEUTRAL

    feedback = Feedback.NONE
    if dx > config.commit_threshold / 2:
        feedback = Feedback.ACCEPT
    elif dx < -config.commit_threshold / 2:
        feedback = Feedback.REJECT

    return replace(
        state,
        dx=dx,
        dy=dy,
        translate_x=dx * config.translate_scale,
        rotation_deg=(dx / state.card_width) * config.max_rotation_deg,
        feedback=feedback,
    )


def commit(state: GestureState, direction: Direction) -> GestureState:
    """Decide the swipe. Also the entry point for explicit accept/reject buttons."""
    if state.locked:
        return state
    feedback = Feedback.ACCEPT if direction is Direction.ACCEPT else Feedback.REJECT
    return replace(state, phase=GesturePhase.COMMITTED, direction=direction, feedback=feedback)


def release(state: GestureState, config: SwipeConfig = DEFAULT_CONFIG) -> GestureState:
    """Pointer up (or cancelled) with the last known displacement."""
    if state.phase is not GesturePhase.DRAGGING:
        return state
    if abs(state.dx) > config.commit_threshold:
        return commit(state, Direction.ACCEPT if state.dx > 0 else Direction.REJECT)
    return GestureState(phase=GesturePhase.SNAPPING_BACK)


cancel = release


def fly_out(state: GestureState) -> GestureState:
    if state.phase is not GesturePhase.COMMITTED:
        return state
    return replace(state, phase=GesturePhase.FLYING_OUT)


def settle(state: GestureState) -> GestureState:
    """Back to neutral once the card is gone or has snapped back."""
    return NEUTRAL
