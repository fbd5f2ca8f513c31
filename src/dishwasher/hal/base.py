"""Abstract interfaces for the dishwasher hardware abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.program import FillLevel, WashingProgram


class HardwareError(Exception):
    """Base class for failures reported by hardware collaborators."""


class PumpError(HardwareError):
    """Water pump failed to pour or drain."""


class EngineError(HardwareError):
    """Wash engine failed to run a program."""


class Door(ABC):
    """Door latch of the washing chamber.

    Locking and unlocking are assumed to always succeed.
    """

    @abstractmethod
    def closed(self) -> bool:
        """Report whether the door is closed.

        Returns:
            True if the door is closed, False if open.
        """

    @abstractmethod
    def lock(self) -> None:
        """Lock the door."""

    @abstractmethod
    def unlock(self) -> None:
        """Unlock the door."""


class DirtFilter(ABC):
    """Dirt filter contamination sensor."""

    @abstractmethod
    def capacity(self) -> float:
        """Read the remaining filter capacity.

        Returns:
            Capacity as a percentage (0-100). Low values mean a dirty filter.
        """


class WaterPump(ABC):
    """Pump that fills and empties the washing chamber."""

    @abstractmethod
    def pour(self, fill_level: FillLevel) -> None:
        """Fill the chamber to the requested level.

        Args:
            fill_level: Amount of water to pour.

        Raises:
            PumpError: If the chamber could not be filled.
        """

    @abstractmethod
    def drain(self) -> None:
        """Empty the chamber.

        Raises:
            PumpError: If the chamber could not be drained.
        """


class Engine(ABC):
    """Wash engine running the spray arms and heater."""

    @abstractmethod
    def run_program(self, program: WashingProgram) -> None:
        """Run a wash program to completion.

        Args:
            program: Program to run.

        Raises:
            EngineError: If the program could not be run.
        """
