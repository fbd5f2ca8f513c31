"""HAL factory wiring mock hardware into a single bundle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .mock_door import MockDoor
from .mock_pump import MockEngine, MockWaterPump
from .mock_sensors import MockDirtFilter

if TYPE_CHECKING:
    from ..config import SimulatorConfig

logger = logging.getLogger(__name__)


@dataclass
class HardwareBundle:
    """The four collaborators a controller needs, sharing one call log.

    Attributes:
        door: Door latch.
        dirt_filter: Filter contamination sensor.
        water_pump: Water pump.
        engine: Wash engine.
        call_log: Ordered names of every hardware call made.
    """

    door: MockDoor
    dirt_filter: MockDirtFilter
    water_pump: MockWaterPump
    engine: MockEngine
    call_log: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Snapshot of hardware state and call counts."""
        return {
            "door": {
                "closed": self.door.is_closed,
                "locked": self.door.is_locked,
                "lock_calls": self.door.lock_calls,
                "unlock_calls": self.door.unlock_calls,
            },
            "filter": {
                "capacity": self.dirt_filter.current_capacity,
                "capacity_calls": self.dirt_filter.capacity_calls,
            },
            "pump": {
                "level": self.water_pump.level.name if self.water_pump.level else None,
                "fail_pour": self.water_pump.fail_pour,
                "fail_drain": self.water_pump.fail_drain,
                "pour_calls": self.water_pump.pour_calls,
                "drain_calls": self.water_pump.drain_calls,
            },
            "engine": {
                "fail_program": self.engine.fail_program,
                "run_program_calls": self.engine.run_program_calls,
            },
        }


def create_hal(simulator: Optional[SimulatorConfig] = None) -> HardwareBundle:
    """Create mock hardware implementations.

    Real door, filter, pump and engine drivers are provided by the
    appliance firmware; this factory only builds in-memory stand-ins.

    Args:
        simulator: Initial hardware state and injected failures. Uses a
            closed door, clean filter and no failures if None.

    Returns:
        HardwareBundle whose components all append to the same call log.
    """
    call_log: list[str] = []

    if simulator is None:
        bundle = HardwareBundle(
            door=MockDoor(call_log=call_log),
            dirt_filter=MockDirtFilter(call_log=call_log),
            water_pump=MockWaterPump(call_log=call_log),
            engine=MockEngine(call_log=call_log),
            call_log=call_log,
        )
    else:
        bundle = HardwareBundle(
            door=MockDoor(closed=simulator.door_closed, call_log=call_log),
            dirt_filter=MockDirtFilter(
                capacity=simulator.filter_capacity, call_log=call_log
            ),
            water_pump=MockWaterPump(
                fail_pour=simulator.fail_pour,
                fail_drain=simulator.fail_drain,
                call_log=call_log,
            ),
            engine=MockEngine(fail_program=simulator.fail_program, call_log=call_log),
            call_log=call_log,
        )

    logger.info("Using mock HAL implementations")
    return bundle
