"""FastAPI application for dishwasher control."""

from __future__ import annotations

import logging
import threading
from collections import deque
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Optional

from fastapi import FastAPI

from ..config import DishwasherConfig, load_config
from ..core.controller import DishwasherController
from ..core.events import Event
from ..core.states import TRANSITIONS
from ..hal.factory import HardwareBundle, create_hal
from .routes import hardware, programs, wash

logger = logging.getLogger(__name__)

# Number of recent controller events kept for the API
EVENT_HISTORY_SIZE = 100


@dataclass
class AppState:
    """Application state container."""

    controller: Optional[DishwasherController] = None
    hardware: Optional[HardwareBundle] = None
    last_wash: Optional[dict] = None
    events: deque = field(default_factory=lambda: deque(maxlen=EVENT_HISTORY_SIZE))
    wash_lock: threading.Lock = field(default_factory=threading.Lock)

    def attach(self, config: DishwasherConfig, hardware: HardwareBundle) -> None:
        """Build a controller around the given hardware.

        Args:
            config: Configuration supplying the filter threshold.
            hardware: Collaborators for the controller.
        """
        self.hardware = hardware
        self.controller = DishwasherController(
            water_pump=hardware.water_pump,
            engine=hardware.engine,
            dirt_filter=hardware.dirt_filter,
            door=hardware.door,
            filter_capacity_threshold=config.filter_capacity_threshold,
        )
        self.controller.add_listener(self._record_event)
        self.last_wash = None
        self.events.clear()

    def _record_event(self, event: Event) -> None:
        self.events.append(event.to_dict())


# Global app state
app_state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Starting dishwasher API")

    cfg = load_config()
    app_state.attach(cfg, create_hal(cfg.simulator))

    logger.info("Dishwasher API started")
    try:
        yield
    finally:
        logger.info("Dishwasher API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Dishwasher Control API",
        description="Start washes and inspect the dishwasher hardware",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(programs.router, prefix="/api/programs", tags=["Programs"])
    app.include_router(wash.router, prefix="/api/wash", tags=["Wash"])
    app.include_router(hardware.router, prefix="/api/hardware", tags=["Hardware"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        controller = app_state.controller
        return {
            "status": "healthy",
            "controller_running": controller is not None,
            "state": controller.state.name if controller is not None else None,
            "door_locked": (
                TRANSITIONS[controller.state].door_locked
                if controller is not None
                else False
            ),
            "filter_capacity_threshold": (
                controller.filter_capacity_threshold
                if controller is not None
                else None
            ),
        }

    return app


# Create the app instance
app = create_app()
