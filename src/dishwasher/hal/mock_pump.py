"""Mock water pump and wash engine for testing and development."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .base import Engine, EngineError, PumpError, WaterPump

if TYPE_CHECKING:
    from ..core.program import FillLevel, WashingProgram

logger = logging.getLogger(__name__)


class MockWaterPump(WaterPump):
    """Mock water pump.

    Tracks the current water level and supports failure injection for
    the pour and drain operations.
    """

    def __init__(
        self,
        fail_pour: bool = False,
        fail_drain: bool = False,
        call_log: Optional[list[str]] = None,
    ) -> None:
        self.fail_pour = fail_pour
        self.fail_drain = fail_drain
        self._level: Optional[FillLevel] = None
        self._call_log = call_log if call_log is not None else []
        self.pour_calls = 0
        self.drain_calls = 0
        self.poured_levels: list[FillLevel] = []

    @property
    def level(self) -> Optional[FillLevel]:
        """Current water level, None when empty."""
        return self._level

    def pour(self, fill_level: FillLevel) -> None:
        """Fill the chamber.

        Args:
            fill_level: Amount of water to pour.

        Raises:
            PumpError: If pour failure is injected.
        """
        self.pour_calls += 1
        self._call_log.append("pump.pour")
        self.poured_levels.append(fill_level)
        if self.fail_pour:
            raise PumpError(f"Failed to pour water to {fill_level.name}")
        self._level = fill_level
        logger.debug("[MOCK] Poured water: %s", fill_level.name)

    def drain(self) -> None:
        """Empty the chamber.

        Raises:
            PumpError: If drain failure is injected.
        """
        self.drain_calls += 1
        self._call_log.append("pump.drain")
        if self.fail_drain:
            raise PumpError("Failed to drain water")
        self._level = None
        logger.debug("[MOCK] Drained water")


class MockEngine(Engine):
    """Mock wash engine recording the programs it was asked to run."""

    def __init__(
        self,
        fail_program: bool = False,
        call_log: Optional[list[str]] = None,
    ) -> None:
        self.fail_program = fail_program
        self._call_log = call_log if call_log is not None else []
        self.run_program_calls = 0
        self.programs_run: list[WashingProgram] = []

    def run_program(self, program: WashingProgram) -> None:
        """Run a wash program.

        Args:
            program: Program to run.

        Raises:
            EngineError: If program failure is injected.
        """
        self.run_program_calls += 1
        self._call_log.append("engine.run_program")
        if self.fail_program:
            raise EngineError(f"Engine failed to run {program.name}")
        self.programs_run.append(program)
        logger.debug("[MOCK] Ran program %s", program.name)
