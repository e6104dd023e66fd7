"""Configuration package for the FSM interpreter."""

from .defaults import LightEvent, LightState, traffic_light_definition
from .loader import default_config, load_config, load_machine
from .models import Config, LoggingConfig

__all__ = [
    "Config",
    "LightEvent",
    "LightState",
    "LoggingConfig",
    "default_config",
    "load_config",
    "load_machine",
    "traffic_light_definition",
]
