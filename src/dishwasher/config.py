"""Configuration management for the dishwasher control system."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .core.controller import MAXIMAL_FILTER_CAPACITY

logger = logging.getLogger(__name__)


def _load_dotenv(env_path: Path) -> None:
    """Load environment variables from .env file."""
    if not env_path.exists():
        return

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                # Only set if not already in environment
                if key not in os.environ:
                    os.environ[key] = value


@dataclass
class SimulatorConfig:
    """Initial state of the mock hardware.

    The failure flags make the corresponding mock operation raise, which
    is useful for exercising the error paths without real hardware.
    """

    door_closed: bool = True
    filter_capacity: float = 100.0
    fail_pour: bool = False
    fail_drain: bool = False
    fail_program: bool = False


@dataclass
class DishwasherConfig:
    """Main configuration class for the dishwasher control system.

    Filter capacity values are percentages (0-100).
    """

    # Washes with tablets are refused when filter capacity drops below this
    filter_capacity_threshold: float = MAXIMAL_FILTER_CAPACITY

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    simulator: SimulatorConfig = field(default_factory=SimulatorConfig)


def load_config(
    config_path: Path | None = None,
    env: str | None = None,
) -> DishwasherConfig:
    """Load configuration from YAML files and environment variables.

    Configuration is loaded with the following priority (highest to lowest):
    1. Environment variables (DISHWASHER_*)
    2. Environment-specific config (development.yaml, production.yaml)
    3. Default config (default.yaml)
    4. Hardcoded defaults

    Args:
        config_path: Path to config directory. Defaults to project config/.
        env: Environment name. Defaults to DISHWASHER_ENV or "development".

    Returns:
        Loaded DishwasherConfig instance.
    """
    config = DishwasherConfig()

    if config_path is None:
        # Try relative to this file, then fall back to cwd
        module_dir = Path(__file__).parent
        config_path = module_dir.parent.parent / "config"
        if not config_path.exists():
            config_path = Path.cwd() / "config"

    # Load .env file from project root (config_path/../.env)
    _load_dotenv(config_path.parent / ".env")

    default_path = config_path / "default.yaml"
    if default_path.exists():
        config = _merge_yaml(config, default_path)
        logger.debug("Loaded default config from %s", default_path)

    if env is None:
        env = os.environ.get("DISHWASHER_ENV", "development")

    env_config_path = config_path / f"{env}.yaml"
    if env_config_path.exists():
        config = _merge_yaml(config, env_config_path)
        logger.debug("Loaded %s config from %s", env, env_config_path)

    # Override with environment variables (highest priority)
    config = _apply_env_overrides(config)

    logger.info("Configuration loaded for environment: %s", env)
    return config


def _merge_yaml(config: DishwasherConfig, path: Path) -> DishwasherConfig:
    """Merge YAML file into config."""
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return config

    if "filter" in data:
        config.filter_capacity_threshold = float(
            data["filter"].get("capacity_threshold", config.filter_capacity_threshold)
        )

    if "api" in data:
        api = data["api"]
        config.api_host = api.get("host", config.api_host)
        config.api_port = api.get("port", config.api_port)

    if "simulation" in data:
        sim = data["simulation"]
        config.simulator.door_closed = sim.get("door_closed", config.simulator.door_closed)
        config.simulator.filter_capacity = float(
            sim.get("filter_capacity", config.simulator.filter_capacity)
        )
        config.simulator.fail_pour = sim.get("fail_pour", config.simulator.fail_pour)
        config.simulator.fail_drain = sim.get("fail_drain", config.simulator.fail_drain)
        config.simulator.fail_program = sim.get(
            "fail_program", config.simulator.fail_program
        )

    config.log_level = data.get("log_level", config.log_level)

    return config


def _apply_env_overrides(config: DishwasherConfig) -> DishwasherConfig:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str | None, type[Any]]] = {
        "DISHWASHER_FILTER_THRESHOLD": ("filter_capacity_threshold", None, float),
        "DISHWASHER_API_HOST": ("api_host", None, str),
        "DISHWASHER_API_PORT": ("api_port", None, int),
        "DISHWASHER_LOG_LEVEL": ("log_level", None, str),
        "DISHWASHER_SIM_DOOR_CLOSED": ("simulator", "door_closed", _parse_bool),
        "DISHWASHER_SIM_FILTER_CAPACITY": ("simulator", "filter_capacity", float),
        "DISHWASHER_SIM_FAIL_POUR": ("simulator", "fail_pour", _parse_bool),
        "DISHWASHER_SIM_FAIL_DRAIN": ("simulator", "fail_drain", _parse_bool),
        "DISHWASHER_SIM_FAIL_PROGRAM": ("simulator", "fail_program", _parse_bool),
    }

    for env_var, (attr, sub_attr, converter) in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                converted = converter(value)
                if sub_attr:
                    setattr(getattr(config, attr), sub_attr, converted)
                else:
                    setattr(config, attr, converted)
                logger.debug("Applied env override: %s=%s", env_var, converted)
            except (ValueError, TypeError) as e:
                logger.warning("Invalid env var %s=%s: %s", env_var, value, e)

    return config


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ("true", "1", "yes", "on")
