"""Program listing API routes."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter

from ...core.program import FillLevel, WashingProgram
from ..schemas import ProgramInfo, ProgramsResponse

router = APIRouter()


@router.get("/")
async def list_programs():
    """List wash programs with their durations and the fill levels."""
    return asdict(ProgramsResponse(
        programs=[ProgramInfo(name=p.name, minutes=p.minutes) for p in WashingProgram],
        fill_levels=[level.name for level in FillLevel],
    ))
