"""Core calculation logic for the UFH Flow Temperature Controller."""

from .curve import (
    calculate_base_flow_temp,
    clamp,
    exponential_curve,
    linear_curve,
    logarithmic_curve,
)
from .engine import ControllerConfig, FlowTemperatureEngine, FlowTemperatureResult
from .zone import DemandInfo, Zone, ZoneAggregator, ZoneConfig

__all__ = [
    "ControllerConfig",
    "DemandInfo",
    "FlowTemperatureEngine",
    "FlowTemperatureResult",
    "Zone",
    "ZoneAggregator",
    "ZoneConfig",
    "calculate_base_flow_temp",
    "clamp",
    "exponential_curve",
    "linear_curve",
    "logarithmic_curve",
]
