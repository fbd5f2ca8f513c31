"""Tests for the dishwasher controller."""

import pytest

from dishwasher.core.controller import MAXIMAL_FILTER_CAPACITY, DishwasherController
from dishwasher.core.events import Event, EventType
from dishwasher.core.program import (
    FillLevel,
    ProgramConfiguration,
    RunResult,
    Status,
    WashingProgram,
)
from dishwasher.core.states import WashState
from dishwasher.hal.factory import HardwareBundle


class TestDoorCheck:
    """Door must be closed before anything else happens."""

    def test_door_open_returns_door_open(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """An open door should abort with DOOR_OPEN."""
        hardware.door.set_closed(False)

        result = controller.start(eco_with_tablets)

        assert result.status == Status.DOOR_OPEN
        assert result.run_minutes == 0

    def test_door_open_never_locks_or_unlocks(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """The door-open path must not touch the lock."""
        hardware.door.set_closed(False)

        controller.start(eco_with_tablets)

        assert hardware.door.lock_calls == 0
        assert hardware.door.unlock_calls == 0
        assert hardware.call_log == ["door.closed"]

    def test_door_checked_exactly_once(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """closed() should be queried once per wash."""
        controller.start(eco_with_tablets)
        assert hardware.door.closed_calls == 1


class TestFilterCheck:
    """Filter is checked only when tablets are used."""

    def test_dirty_filter_with_tablets_returns_error_filter(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """Capacity 10% with tablets should abort with ERROR_FILTER."""
        hardware.dirt_filter.set_capacity(10.0)

        result = controller.start(eco_with_tablets)

        assert result.status == Status.ERROR_FILTER

    def test_dirty_filter_skips_pump_and_engine(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """A filter abort should never reach the pump or engine."""
        hardware.dirt_filter.set_capacity(10.0)

        controller.start(eco_with_tablets)

        assert hardware.water_pump.pour_calls == 0
        assert hardware.engine.run_program_calls == 0
        assert hardware.water_pump.drain_calls == 0
        assert hardware.door.unlock_calls == 1

    def test_filter_checked_once_when_tablets_used(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """capacity() should be queried once when tablets are used."""
        hardware.dirt_filter.set_capacity(60.0)

        controller.start(eco_with_tablets)

        assert hardware.dirt_filter.capacity_calls == 1

    def test_filter_not_checked_without_tablets(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_without_tablets: ProgramConfiguration,
    ) -> None:
        """A dirty filter is irrelevant without tablets."""
        hardware.dirt_filter.set_capacity(10.0)

        result = controller.start(eco_without_tablets)

        assert result.status == Status.SUCCESS
        assert hardware.dirt_filter.capacity_calls == 0

    @pytest.mark.parametrize(
        "capacity, expected",
        [
            (0.0, Status.ERROR_FILTER),
            (49.9, Status.ERROR_FILTER),
            (MAXIMAL_FILTER_CAPACITY, Status.SUCCESS),
            (60.0, Status.SUCCESS),
            (100.0, Status.SUCCESS),
        ],
    )
    def test_threshold_boundary(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
        capacity: float,
        expected: Status,
    ) -> None:
        """Capacity below the threshold fails, at or above passes."""
        hardware.dirt_filter.set_capacity(capacity)
        assert controller.start(eco_with_tablets).status == expected

    def test_custom_threshold(
        self,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """The threshold should be configurable per controller."""
        controller = DishwasherController(
            water_pump=hardware.water_pump,
            engine=hardware.engine,
            dirt_filter=hardware.dirt_filter,
            door=hardware.door,
            filter_capacity_threshold=70.0,
        )
        hardware.dirt_filter.set_capacity(60.0)

        assert controller.start(eco_with_tablets).status == Status.ERROR_FILTER


class TestPumpAndEngine:
    """Fill, wash and drain failures."""

    def test_pour_failure_returns_error_pump(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """A failed pour should abort before the engine runs."""
        hardware.dirt_filter.set_capacity(60.0)
        hardware.water_pump.fail_pour = True

        result = controller.start(eco_with_tablets)

        assert result.status == Status.ERROR_PUMP
        assert hardware.engine.run_program_calls == 0
        assert hardware.water_pump.drain_calls == 0
        assert hardware.door.unlock_calls == 1

    def test_engine_failure_returns_error_program(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """A failed program should abort without draining."""
        hardware.dirt_filter.set_capacity(60.0)
        hardware.engine.fail_program = True

        result = controller.start(eco_with_tablets)

        assert result.status == Status.ERROR_PROGRAM
        assert hardware.water_pump.pour_calls == 1
        assert hardware.water_pump.drain_calls == 0
        assert hardware.door.unlock_calls == 1

    def test_drain_failure_returns_error_pump(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """A failed drain should report ERROR_PUMP."""
        hardware.dirt_filter.set_capacity(60.0)
        hardware.water_pump.fail_drain = True

        result = controller.start(eco_with_tablets)

        assert result.status == Status.ERROR_PUMP
        assert hardware.water_pump.pour_calls == 1
        assert hardware.engine.run_program_calls == 1
        assert hardware.water_pump.drain_calls == 1
        assert hardware.door.unlock_calls == 1

    def test_rinse_calls_each_step_once(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
    ) -> None:
        """RINSE with tablets and a usable filter runs every step once."""
        configuration = (
            ProgramConfiguration.builder()
            .with_program(WashingProgram.RINSE)
            .with_tablets_used(True)
            .with_fill_level(FillLevel.FULL)
            .build()
        )
        hardware.dirt_filter.set_capacity(60.0)

        result = controller.start(configuration)

        assert result.status == Status.SUCCESS
        assert hardware.water_pump.pour_calls == 1
        assert hardware.engine.run_program_calls == 1
        assert hardware.water_pump.drain_calls == 1
        assert hardware.water_pump.poured_levels == [FillLevel.FULL]
        assert hardware.engine.programs_run == [WashingProgram.RINSE]


class TestSequencing:
    """Order of hardware calls and door handling."""

    def test_successful_wash_call_order(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """Steps should run in a fixed order with unlock last."""
        controller.start(eco_with_tablets)

        assert hardware.call_log == [
            "door.closed",
            "door.lock",
            "filter.capacity",
            "pump.pour",
            "engine.run_program",
            "pump.drain",
            "door.unlock",
        ]

    @pytest.mark.parametrize(
        "failure", [None, "fail_pour", "fail_drain", "fail_program", "dirty_filter"]
    )
    def test_lock_and_unlock_exactly_once(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
        failure: str,
    ) -> None:
        """Lock and unlock happen once whatever the outcome."""
        if failure == "dirty_filter":
            hardware.dirt_filter.set_capacity(10.0)
        elif failure == "fail_program":
            hardware.engine.fail_program = True
        elif failure is not None:
            setattr(hardware.water_pump, failure, True)

        controller.start(eco_with_tablets)

        assert hardware.door.lock_calls == 1
        assert hardware.door.unlock_calls == 1
        assert not hardware.door.is_locked

    def test_door_unlocked_when_unexpected_error_escapes(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """Errors outside the hardware contract propagate, door still unlocked."""

        def broken_capacity() -> float:
            raise RuntimeError("sensor bus down")

        hardware.dirt_filter.set_capacity_provider(broken_capacity)

        with pytest.raises(RuntimeError, match="sensor bus down"):
            controller.start(eco_with_tablets)

        assert hardware.door.unlock_calls == 1

    def test_success_reports_program_minutes(
        self,
        controller: DishwasherController,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """Successful result carries the program duration."""
        result = controller.start(eco_with_tablets)

        assert result == RunResult(status=Status.SUCCESS, run_minutes=90)

    def test_controller_reusable_after_failure(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """A failed wash should not prevent the next one."""
        hardware.water_pump.fail_pour = True
        assert controller.start(eco_with_tablets).status == Status.ERROR_PUMP

        hardware.water_pump.fail_pour = False
        assert controller.start(eco_with_tablets).status == Status.SUCCESS
        assert hardware.door.lock_calls == 2
        assert hardware.door.unlock_calls == 2


class TestStateAndEvents:
    """Observable controller state and emitted events."""

    def test_initial_state_is_done(self, controller: DishwasherController) -> None:
        """Idle controller sits in DONE with no result."""
        assert controller.state == WashState.DONE
        assert controller.last_result is None

    def test_last_result_tracked(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """last_result should hold the most recent outcome."""
        hardware.door.set_closed(False)
        result = controller.start(eco_with_tablets)

        assert controller.last_result is result
        assert controller.state == WashState.DONE

    def test_state_enter_events_follow_steps(
        self,
        controller: DishwasherController,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """STATE_ENTER events should walk the wash steps in order."""
        events: list[Event] = []
        controller.add_listener(events.append)

        controller.start(eco_with_tablets)

        entered = [e.data["state"] for e in events if e.type == EventType.STATE_ENTER]
        assert entered == [
            "LOCKED_CHECK_FILTER",
            "FILLING",
            "WASHING",
            "DRAINING",
            "DONE",
        ]
        assert events[0].type == EventType.WASH_STARTED
        assert events[-1].type == EventType.WASH_FINISHED
        assert events[-1].data == {"status": "SUCCESS", "run_minutes": 90}

    def test_fault_event_on_pump_failure(
        self,
        controller: DishwasherController,
        hardware: HardwareBundle,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """A pump failure should emit a HARDWARE_FAULT event."""
        events: list[Event] = []
        controller.add_listener(events.append)
        hardware.water_pump.fail_pour = True

        controller.start(eco_with_tablets)

        faults = [e for e in events if e.type == EventType.HARDWARE_FAULT]
        assert len(faults) == 1
        assert faults[0].data["component"] == "pump"

    def test_failing_listener_does_not_change_outcome(
        self,
        controller: DishwasherController,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """Listener errors are logged and ignored."""

        def bad_listener(event: Event) -> None:
            raise ValueError("listener bug")

        controller.add_listener(bad_listener)

        assert controller.start(eco_with_tablets).status == Status.SUCCESS

    def test_remove_listener(
        self,
        controller: DishwasherController,
        eco_with_tablets: ProgramConfiguration,
    ) -> None:
        """Removed listeners receive no further events."""
        events: list[Event] = []
        controller.add_listener(events.append)
        controller.remove_listener(events.append)

        controller.start(eco_with_tablets)

        assert events == []
