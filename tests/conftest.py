"""Pytest fixtures for dishwasher tests."""

import pytest

from dishwasher.core.controller import DishwasherController
from dishwasher.core.program import FillLevel, ProgramConfiguration, WashingProgram
from dishwasher.hal.factory import HardwareBundle, create_hal


@pytest.fixture
def hardware() -> HardwareBundle:
    """Mock hardware: door closed, clean filter, no failures."""
    return create_hal()


@pytest.fixture
def controller(hardware: HardwareBundle) -> DishwasherController:
    """Controller wired to the mock hardware."""
    return DishwasherController(
        water_pump=hardware.water_pump,
        engine=hardware.engine,
        dirt_filter=hardware.dirt_filter,
        door=hardware.door,
    )


@pytest.fixture
def eco_with_tablets() -> ProgramConfiguration:
    """ECO program with tablets and a full fill."""
    return (
        ProgramConfiguration.builder()
        .with_program(WashingProgram.ECO)
        .with_tablets_used(True)
        .with_fill_level(FillLevel.FULL)
        .build()
    )


@pytest.fixture
def eco_without_tablets() -> ProgramConfiguration:
    """ECO program without tablets and a full fill."""
    return (
        ProgramConfiguration.builder()
        .with_program(WashingProgram.ECO)
        .with_tablets_used(False)
        .with_fill_level(FillLevel.FULL)
        .build()
    )
