"""Core dishwasher control logic."""

from .controller import MAXIMAL_FILTER_CAPACITY, DishwasherController
from .events import Event, EventType
from .program import (
    ConfigurationError,
    FillLevel,
    ProgramConfiguration,
    RunResult,
    Status,
    WashingProgram,
)
from .states import WashState

__all__ = [
    "MAXIMAL_FILTER_CAPACITY",
    "DishwasherController",
    "Event",
    "EventType",
    "ConfigurationError",
    "FillLevel",
    "ProgramConfiguration",
    "RunResult",
    "Status",
    "WashingProgram",
    "WashState",
]
