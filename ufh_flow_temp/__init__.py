"""Weather-compensated flow temperature controller for underfloor heating."""

from .config import controller_from_dict, zone_config_from_dict
from .const import (
    VERSION,
    CurveType,
    TargetStrategy,
    UnknownZonePolicy,
    ZoneUpdateResult,
)
from .controller import FlowTemperatureController, build_config
from .core import ControllerConfig, FlowTemperatureResult
from .exceptions import ConfigurationError, FlowTemperatureError, ZoneNotFoundError

__version__ = VERSION

__all__ = [
    "ConfigurationError",
    "ControllerConfig",
    "CurveType",
    "FlowTemperatureController",
    "FlowTemperatureError",
    "FlowTemperatureResult",
    "TargetStrategy",
    "UnknownZonePolicy",
    "ZoneNotFoundError",
    "ZoneUpdateResult",
    "build_config",
    "controller_from_dict",
    "zone_config_from_dict",
]
