"""Dishwasher controller sequencing safety checks and hardware actuation."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from ..hal.base import DirtFilter, Door, Engine, EngineError, PumpError, WaterPump
from .events import (
    Event,
    hardware_fault_event,
    state_enter_event,
    wash_finished_event,
    wash_started_event,
)
from .program import ProgramConfiguration, RunResult, Status
from .states import WashState, can_transition

logger = logging.getLogger(__name__)

# Filter capacity (percent) below which the filter is too dirty to wash with tablets
MAXIMAL_FILTER_CAPACITY = 50.0

# Type alias for event listeners
EventListener = Callable[[Event], None]


class DishwasherController:
    """Main controller for a single dishwasher unit.

    A wash request runs through the following steps, stopping at the
    first failure:
    1. CHECK_DOOR: Door must be closed (DOOR_OPEN otherwise, door untouched)
    2. LOCKED_CHECK_FILTER: Lock door, check filter when tablets are used
    3. FILLING: Pour water to the requested level
    4. WASHING: Run the selected program on the engine
    5. DRAINING: Drain the chamber
    6. DONE: Unlock the door and report the status

    Once the door is locked it is unlocked exactly once, whatever the
    outcome. Hardware failures never propagate to the caller; they are
    reported as a Status instead.

    The controller is not reentrant. Callers must serialize wash requests.
    """

    def __init__(
        self,
        water_pump: WaterPump,
        engine: Engine,
        dirt_filter: DirtFilter,
        door: Door,
        filter_capacity_threshold: float = MAXIMAL_FILTER_CAPACITY,
    ) -> None:
        """Initialize the controller.

        Args:
            water_pump: Pump used to fill and drain the chamber.
            engine: Engine running wash programs.
            dirt_filter: Filter contamination sensor.
            door: Door latch.
            filter_capacity_threshold: Filter capacity below which a wash
                with tablets is refused.
        """
        self._water_pump = water_pump
        self._engine = engine
        self._dirt_filter = dirt_filter
        self._door = door
        self._filter_capacity_threshold = filter_capacity_threshold
        self._state = WashState.DONE
        self._last_result: Optional[RunResult] = None
        self._listeners: list[EventListener] = []

    @property
    def state(self) -> WashState:
        """Current wash step, DONE when idle."""
        return self._state

    @property
    def last_result(self) -> Optional[RunResult]:
        """Result of the most recent wash, or None before the first one."""
        return self._last_result

    @property
    def filter_capacity_threshold(self) -> float:
        return self._filter_capacity_threshold

    def add_listener(self, listener: EventListener) -> None:
        """Add event listener for wash progress.

        Args:
            listener: Function taking Event.
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self, configuration: ProgramConfiguration) -> RunResult:
        """Run a wash with the given configuration.

        Args:
            configuration: Fully built program configuration.

        Returns:
            Result carrying the terminal status of the wash.
        """
        self._state = WashState.CHECK_DOOR
        self._emit_event(wash_started_event(configuration.to_dict()))
        logger.info(
            "Wash requested: program=%s tablets=%s fill=%s",
            configuration.program.name,
            configuration.tablets_used,
            configuration.fill_level.name,
        )

        if not self._door.closed():
            logger.warning("Door is open, refusing to start")
            result = RunResult.error(Status.DOOR_OPEN)
        else:
            with self._door_locked():
                result = self._run_locked(configuration)

        self._transition_to(WashState.DONE)
        self._last_result = result
        self._emit_event(wash_finished_event(result.to_dict()))
        logger.info("Wash finished: %s", result.status.name)
        return result

    def _run_locked(self, configuration: ProgramConfiguration) -> RunResult:
        self._transition_to(WashState.LOCKED_CHECK_FILTER)
        if configuration.tablets_used and not self._filter_is_clean():
            return RunResult.error(Status.ERROR_FILTER)

        self._transition_to(WashState.FILLING)
        try:
            self._water_pump.pour(configuration.fill_level)
        except PumpError as e:
            self._report_fault("pump", e)
            return RunResult.error(Status.ERROR_PUMP)

        self._transition_to(WashState.WASHING)
        try:
            self._engine.run_program(configuration.program)
        except EngineError as e:
            self._report_fault("engine", e)
            return RunResult.error(Status.ERROR_PROGRAM)

        self._transition_to(WashState.DRAINING)
        try:
            self._water_pump.drain()
        except PumpError as e:
            self._report_fault("pump", e)
            return RunResult.error(Status.ERROR_PUMP)

        return RunResult.success(configuration.program)

    @contextmanager
    def _door_locked(self) -> Iterator[None]:
        """Hold the door locked for the duration of the block."""
        self._door.lock()
        logger.debug("Door locked")
        try:
            yield
        finally:
            self._door.unlock()
            logger.debug("Door unlocked")

    def _filter_is_clean(self) -> bool:
        capacity = self._dirt_filter.capacity()
        if capacity < self._filter_capacity_threshold:
            logger.warning(
                "Filter capacity %.1f%% below %.1f%%, clean the filter",
                capacity,
                self._filter_capacity_threshold,
            )
            return False
        return True

    def _report_fault(self, component: str, error: Exception) -> None:
        logger.error("%s failure in %s: %s", component.capitalize(), self._state.name, error)
        self._emit_event(hardware_fault_event(component, str(error)))

    def _transition_to(self, new_state: WashState) -> None:
        if not can_transition(self._state, new_state):
            raise RuntimeError(
                f"Invalid transition: {self._state.name} -> {new_state.name}"
            )
        previous = self._state
        self._state = new_state
        logger.debug("State transition: %s -> %s", previous.name, new_state.name)
        self._emit_event(state_enter_event(new_state.name, previous.name))

    def _emit_event(self, event: Event) -> None:
        for listener in self._listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error("Event listener error: %s", e)
