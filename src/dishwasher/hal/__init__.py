"""Hardware abstraction layer for the door, filter, pump and engine."""

from .base import (
    DirtFilter,
    Door,
    Engine,
    EngineError,
    HardwareError,
    PumpError,
    WaterPump,
)
from .factory import HardwareBundle, create_hal

__all__ = [
    "DirtFilter",
    "Door",
    "Engine",
    "EngineError",
    "HardwareError",
    "PumpError",
    "WaterPump",
    "HardwareBundle",
    "create_hal",
]
