"""Wash program value types: configuration in, run result out."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional


class ConfigurationError(ValueError):
    """Raised when a program configuration is incomplete or invalid."""


class WashingProgram(Enum):
    """Wash programs selectable by the user.

    The value of each member is the nominal program duration in minutes.
    """

    ECO = 90
    INTENSIVE = 120
    NIGHT = 180
    RINSE = 15

    @property
    def minutes(self) -> int:
        """Nominal program duration in minutes."""
        return self.value


class FillLevel(Enum):
    """Amount of water poured into the chamber."""

    HALF = auto()
    FULL = auto()


class Status(Enum):
    """Terminal outcome of a wash request."""

    SUCCESS = auto()
    DOOR_OPEN = auto()
    ERROR_FILTER = auto()
    ERROR_PUMP = auto()
    ERROR_PROGRAM = auto()


@dataclass(frozen=True)
class ProgramConfiguration:
    """Immutable description of a requested wash.

    Use ``ProgramConfiguration.builder()`` to construct instances; the
    builder refuses to produce a configuration with missing fields.

    Attributes:
        program: Wash program to run.
        tablets_used: Whether detergent tablets were loaded.
        fill_level: Water level to fill the chamber to.
    """

    program: WashingProgram
    tablets_used: bool
    fill_level: FillLevel

    @staticmethod
    def builder() -> "ProgramConfigurationBuilder":
        """Start building a new configuration."""
        return ProgramConfigurationBuilder()

    def to_dict(self) -> dict[str, Any]:
        return {
            "program": self.program.name,
            "tablets_used": self.tablets_used,
            "fill_level": self.fill_level.name,
        }


class ProgramConfigurationBuilder:
    """Step-by-step builder for ProgramConfiguration.

    Example:
        config = (
            ProgramConfiguration.builder()
            .with_program(WashingProgram.ECO)
            .with_tablets_used(True)
            .with_fill_level(FillLevel.FULL)
            .build()
        )
    """

    def __init__(self) -> None:
        self._program: Optional[WashingProgram] = None
        self._tablets_used: Optional[bool] = None
        self._fill_level: Optional[FillLevel] = None

    def with_program(self, program: WashingProgram) -> "ProgramConfigurationBuilder":
        self._program = program
        return self

    def with_tablets_used(self, tablets_used: bool) -> "ProgramConfigurationBuilder":
        self._tablets_used = tablets_used
        return self

    def with_fill_level(self, fill_level: FillLevel) -> "ProgramConfigurationBuilder":
        self._fill_level = fill_level
        return self

    def build(self) -> ProgramConfiguration:
        """Produce the configuration.

        Returns:
            Fully initialized ProgramConfiguration.

        Raises:
            ConfigurationError: If a field is missing or has the wrong type.
        """
        missing = [
            name
            for name, value in (
                ("program", self._program),
                ("tablets_used", self._tablets_used),
                ("fill_level", self._fill_level),
            )
            if value is None
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration fields: {', '.join(missing)}"
            )

        if not isinstance(self._program, WashingProgram):
            raise ConfigurationError(f"Invalid program: {self._program!r}")
        if not isinstance(self._tablets_used, bool):
            raise ConfigurationError(f"Invalid tablets_used: {self._tablets_used!r}")
        if not isinstance(self._fill_level, FillLevel):
            raise ConfigurationError(f"Invalid fill level: {self._fill_level!r}")

        return ProgramConfiguration(
            program=self._program,
            tablets_used=self._tablets_used,
            fill_level=self._fill_level,
        )


@dataclass(frozen=True)
class RunResult:
    """Outcome of a single start request.

    Attributes:
        status: Terminal status of the wash.
        run_minutes: Program duration for a successful wash, 0 otherwise.
    """

    status: Status
    run_minutes: int = 0

    @classmethod
    def success(cls, program: WashingProgram) -> "RunResult":
        return cls(status=Status.SUCCESS, run_minutes=program.minutes)

    @classmethod
    def error(cls, status: Status) -> "RunResult":
        return cls(status=status)

    @property
    def succeeded(self) -> bool:
        return self.status is Status.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary for serialization."""
        return {
            "status": self.status.name,
            "run_minutes": self.run_minutes,
        }
