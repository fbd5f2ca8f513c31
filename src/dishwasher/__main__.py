"""Entry point for dishwasher control system."""

import argparse
import logging
import os
import sys

from .config import DishwasherConfig, load_config
from .core.controller import DishwasherController
from .core.program import FillLevel, ProgramConfiguration, WashingProgram
from .hal.factory import create_hal


def _run_single_wash(args: argparse.Namespace, config: DishwasherConfig) -> int:
    """Run one wash on mock hardware and print the result."""
    if args.door_open:
        config.simulator.door_closed = False
    if args.filter_capacity is not None:
        config.simulator.filter_capacity = args.filter_capacity

    hardware = create_hal(config.simulator)
    controller = DishwasherController(
        water_pump=hardware.water_pump,
        engine=hardware.engine,
        dirt_filter=hardware.dirt_filter,
        door=hardware.door,
        filter_capacity_threshold=config.filter_capacity_threshold,
    )

    configuration = (
        ProgramConfiguration.builder()
        .with_program(WashingProgram[args.program])
        .with_tablets_used(not args.no_tablets)
        .with_fill_level(FillLevel[args.fill_level])
        .build()
    )
    result = controller.start(configuration)

    print(f"{result.status.name} ({result.run_minutes} min)")
    return 0 if result.succeeded else 1


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Dishwasher Control System",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind API server to (default: api.host from config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind API server to (default: api.port from config)",
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Configuration environment (default: DISHWASHER_ENV or 'development')",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: log_level from config)",
    )
    parser.add_argument(
        "--program",
        choices=[p.name for p in WashingProgram],
        default=None,
        help="Run a single wash with this program instead of serving the API",
    )
    parser.add_argument(
        "--fill-level",
        choices=[level.name for level in FillLevel],
        default=FillLevel.FULL.name,
        help="Fill level for --program (default: FULL)",
    )
    parser.add_argument(
        "--no-tablets",
        action="store_true",
        help="Wash without detergent tablets (skips the filter check)",
    )
    parser.add_argument(
        "--door-open",
        action="store_true",
        help="Start with the simulated door open",
    )
    parser.add_argument(
        "--filter-capacity",
        type=float,
        default=None,
        help="Simulated filter capacity in percent",
    )

    args = parser.parse_args()

    # Command line flags override the loaded configuration
    config = load_config(env=args.env)
    log_level = (args.log_level or config.log_level).upper()
    host = args.host or config.api_host
    port = args.port if args.port is not None else config.api_port

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.program is not None:
        return _run_single_wash(args, config)

    if args.env:
        os.environ["DISHWASHER_ENV"] = args.env

    import uvicorn

    uvicorn.run(
        "dishwasher.api.app:app",
        host=host,
        port=port,
        log_level=log_level.lower(),
    )

    return 0


if __name__ == "__main__":
    sys.exit(main())
