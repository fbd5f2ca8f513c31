"""Mock hardware inspection and control API routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Body, HTTPException

from ..schemas import HardwareUpdate

if TYPE_CHECKING:
    from ..app import AppState

router = APIRouter()

# Update fields that only accept JSON booleans
BOOL_FIELDS = ("door_closed", "fail_pour", "fail_drain", "fail_program")


def get_app_state() -> "AppState":
    """Get app state - injected at runtime."""
    from ..app import app_state
    return app_state


@router.get("/")
async def get_hardware():
    """Get mock hardware state and call counts."""
    state = get_app_state()
    if state.hardware is None:
        raise HTTPException(status_code=503, detail="Hardware not initialized")
    return state.hardware.to_dict()


@router.post("/")
async def update_hardware(data: dict[str, Any] = Body(...)):
    """Change the door, filter or injected failures of the mock hardware.

    Warning: Changing hardware state while a wash is running is not
    supported.
    """
    state = get_app_state()
    if state.hardware is None:
        raise HTTPException(status_code=503, detail="Hardware not initialized")

    unknown = set(data) - set(HardwareUpdate.__dataclass_fields__)
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown fields: {sorted(unknown)}")

    update = HardwareUpdate(**data)
    hw = state.hardware

    for name in BOOL_FIELDS:
        value = getattr(update, name)
        if value is not None and not isinstance(value, bool):
            raise HTTPException(status_code=400, detail=f"Invalid {name}: {value!r}")
    capacity = update.filter_capacity
    if capacity is not None and (
        isinstance(capacity, bool) or not isinstance(capacity, (int, float))
    ):
        raise HTTPException(status_code=400, detail=f"Invalid filter_capacity: {capacity!r}")

    try:
        if update.door_closed is not None:
            hw.door.set_closed(update.door_closed)
        if capacity is not None:
            hw.dirt_filter.set_capacity(float(capacity))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if update.fail_pour is not None:
        hw.water_pump.fail_pour = update.fail_pour
    if update.fail_drain is not None:
        hw.water_pump.fail_drain = update.fail_drain
    if update.fail_program is not None:
        hw.engine.fail_program = update.fail_program

    return {"success": True, "hardware": hw.to_dict()}
