"""Data classes for API request/response schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class WashRequest:
    """Request to start a wash."""

    program: str
    tablets_used: bool
    fill_level: str


@dataclass
class WashResponse:
    """Outcome of a wash request."""

    status: str
    run_minutes: int
    program: str
    tablets_used: bool
    fill_level: str
    finished_at: datetime = field(default_factory=datetime.now)


@dataclass
class ProgramInfo:
    """A selectable wash program."""

    name: str
    minutes: int


@dataclass
class ProgramsResponse:
    """Available programs and fill levels."""

    programs: list[ProgramInfo]
    fill_levels: list[str]


@dataclass
class HardwareUpdate:
    """Update to the mock hardware state."""

    door_closed: Optional[bool] = None
    filter_capacity: Optional[float] = None
    fail_pour: Optional[bool] = None
    fail_drain: Optional[bool] = None
    fail_program: Optional[bool] = None

