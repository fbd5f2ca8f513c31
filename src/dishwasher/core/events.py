"""Events emitted by the dishwasher controller."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Optional


class EventType(Enum):
    """Types of events in the dishwasher system."""

    WASH_STARTED = auto()
    STATE_ENTER = auto()
    HARDWARE_FAULT = auto()
    WASH_FINISHED = auto()


@dataclass
class Event:
    """Event data structure.

    Attributes:
        type: The type of event.
        timestamp: When the event occurred.
        data: Optional dictionary of event-specific data.
        source: Optional identifier for the event source.
    """

    type: EventType
    timestamp: datetime = field(default_factory=datetime.now)
    data: Optional[dict[str, Any]] = None
    source: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "type": self.type.name,
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
            "source": self.source,
        }


def wash_started_event(configuration: dict[str, Any]) -> Event:
    """Create a WASH_STARTED event.

    Args:
        configuration: Serialized program configuration.

    Returns:
        Wash started event.
    """
    return Event(
        type=EventType.WASH_STARTED,
        data={"configuration": configuration},
        source="controller",
    )


def state_enter_event(
    state_name: str,
    from_state: Optional[str] = None,
) -> Event:
    """Create a STATE_ENTER event.

    Args:
        state_name: Name of the state being entered.
        from_state: Name of the previous state, if any.

    Returns:
        State enter event.
    """
    return Event(
        type=EventType.STATE_ENTER,
        data={"state": state_name, "from_state": from_state},
        source="controller",
    )


def hardware_fault_event(component: str, message: str) -> Event:
    """Create a HARDWARE_FAULT event.

    Args:
        component: Name of the failing component ("pump", "engine").
        message: Failure message reported by the component.

    Returns:
        Hardware fault event.
    """
    return Event(
        type=EventType.HARDWARE_FAULT,
        data={"component": component, "message": message},
        source="hal",
    )


def wash_finished_event(result: dict[str, Any]) -> Event:
    """Create a WASH_FINISHED event.

    Args:
        result: Serialized run result.

    Returns:
        Wash finished event.
    """
    return Event(
        type=EventType.WASH_FINISHED,
        data=result,
        source="controller",
    )
