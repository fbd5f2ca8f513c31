"""Wash cycle states and transition rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class WashState(Enum):
    """Steps of a single wash request.

    States are strictly linear:
    CHECK_DOOR -> LOCKED_CHECK_FILTER -> FILLING -> WASHING -> DRAINING -> DONE

    Any state may jump straight to DONE when a step aborts the wash.

    CHECK_DOOR: Verifying the door is closed, door not yet locked.
    LOCKED_CHECK_FILTER: Door locked, checking the dirt filter if tablets are used.
    FILLING: Pouring water.
    WASHING: Engine running the selected program.
    DRAINING: Pumping water out.
    DONE: Terminal, a status has been decided.
    """

    CHECK_DOOR = auto()
    LOCKED_CHECK_FILTER = auto()
    FILLING = auto()
    WASHING = auto()
    DRAINING = auto()
    DONE = auto()


@dataclass(frozen=True)
class StateConfig:
    """Configuration for a specific state.

    Attributes:
        door_locked: Whether the door is locked while in this state.
        next_state: State reached when the step completes, or None if terminal.
    """

    door_locked: bool
    next_state: Optional[WashState]


TRANSITIONS: dict[WashState, StateConfig] = {
    WashState.CHECK_DOOR: StateConfig(
        door_locked=False,
        next_state=WashState.LOCKED_CHECK_FILTER,
    ),
    WashState.LOCKED_CHECK_FILTER: StateConfig(
        door_locked=True,
        next_state=WashState.FILLING,
    ),
    WashState.FILLING: StateConfig(door_locked=True, next_state=WashState.WASHING),
    WashState.WASHING: StateConfig(door_locked=True, next_state=WashState.DRAINING),
    WashState.DRAINING: StateConfig(door_locked=True, next_state=WashState.DONE),
    WashState.DONE: StateConfig(door_locked=False, next_state=None),
}


def can_transition(from_state: WashState, to_state: WashState) -> bool:
    """Check if a state transition is valid.

    Args:
        from_state: Current state.
        to_state: Desired target state.

    Returns:
        True if the transition is allowed, False otherwise.
    """
    return to_state in get_allowed_transitions(from_state)


def get_allowed_transitions(state: WashState) -> frozenset[WashState]:
    """Get the set of states that can be transitioned to from the given state.

    Args:
        state: Current state.

    Returns:
        Set of allowed target states. Empty for the terminal state.
    """
    config = TRANSITIONS.get(state)
    if config is None or config.next_state is None:
        return frozenset()
    return frozenset({config.next_state, WashState.DONE})
