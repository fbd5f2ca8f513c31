"""Wash API routes."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, HTTPException

from ...core.program import ConfigurationError, FillLevel, ProgramConfiguration, WashingProgram
from ..schemas import WashRequest, WashResponse

if TYPE_CHECKING:
    from ..app import AppState

router = APIRouter()


def get_app_state() -> "AppState":
    """Get app state - injected at runtime."""
    from ..app import app_state
    return app_state


def _parse_request(data: dict[str, Any]) -> ProgramConfiguration:
    """Turn a JSON body into a program configuration."""
    missing = [key for key in ("program", "tablets_used", "fill_level") if key not in data]
    if missing:
        raise HTTPException(status_code=400, detail=f"Missing fields: {', '.join(missing)}")

    req = WashRequest(
        program=str(data["program"]),
        tablets_used=data["tablets_used"],
        fill_level=str(data["fill_level"]),
    )

    try:
        program = WashingProgram[req.program.upper()]
    except KeyError:
        valid = [p.name for p in WashingProgram]
        raise HTTPException(
            status_code=400,
            detail=f"Invalid program: {req.program}. Valid programs: {valid}",
        )

    try:
        fill_level = FillLevel[req.fill_level.upper()]
    except KeyError:
        valid = [level.name for level in FillLevel]
        raise HTTPException(
            status_code=400,
            detail=f"Invalid fill level: {req.fill_level}. Valid levels: {valid}",
        )

    try:
        return (
            ProgramConfiguration.builder()
            .with_program(program)
            .with_tablets_used(req.tablets_used)
            .with_fill_level(fill_level)
            .build()
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/")
def start_wash(data: dict[str, Any] = Body(...)):
    """Run a wash and return its result.

    Only one wash runs at a time; a request arriving while another wash
    is in progress is rejected.
    """
    state = get_app_state()
    if state.controller is None:
        raise HTTPException(status_code=503, detail="Controller not initialized")

    configuration = _parse_request(data)

    if not state.wash_lock.acquire(blocking=False):
        raise HTTPException(status_code=409, detail="A wash is already in progress")
    try:
        result = state.controller.start(configuration)
        response = WashResponse(
            status=result.status.name,
            run_minutes=result.run_minutes,
            program=configuration.program.name,
            tablets_used=configuration.tablets_used,
            fill_level=configuration.fill_level.name,
        )
        payload = asdict(response)
        payload["finished_at"] = response.finished_at.isoformat()
        state.last_wash = payload
    finally:
        state.wash_lock.release()

    return payload


@router.get("/last")
async def get_last_wash():
    """Get the result of the most recent wash."""
    state = get_app_state()
    if state.last_wash is None:
        raise HTTPException(status_code=404, detail="No wash has run yet")
    return state.last_wash


@router.get("/events")
async def get_events():
    """Get recent controller events, oldest first."""
    state = get_app_state()
    return {"events": list(state.events)}
