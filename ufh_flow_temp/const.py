"""Constants for the UFH Flow Temperature Controller."""

from __future__ import annotations

from enum import StrEnum
from importlib.metadata import version
from logging import Logger, getLogger
from typing import TypedDict

LOGGER: Logger = getLogger(__package__)

DISTRIBUTION = "ufh-flow-temp"

# Read the version from the installed distribution metadata once at module load
VERSION = version(DISTRIBUTION)


class CurveType(StrEnum):
    """Heating curve shapes."""

    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"
    EXPONENTIAL = "exponential"


class TargetStrategy(StrEnum):
    """
    Policy for deriving the effective target from active zones.

    - MAXIMUM: size the supply for the most demanding active zone
    - WEIGHTED_AVERAGE: average of active targets weighted by area * demand
    """

    MAXIMUM = "maximum"
    WEIGHTED_AVERAGE = "weighted_average"


class UnknownZonePolicy(StrEnum):
    """What the controller does when a mutator names an unknown zone."""

    IGNORE = "ignore"
    RAISE = "raise"


class ZoneUpdateResult(StrEnum):
    """Outcome of a zone mutation, returned for the caller to act on."""

    CREATED = "created"
    REPLACED = "replaced"
    UPDATED = "updated"
    NOT_FOUND = "not_found"


class ConfigDefaults(TypedDict):
    """Type for DEFAULT_CONFIG dictionary."""

    room_temp_target: float
    min_flow_temp: float
    max_flow_temp: float
    base_outdoor_temp: float
    design_outdoor_temp: float
    curve_type: str
    curve_slope: float
    curve_offset: float
    curve_factor: float
    target_strategy: str
    unknown_zone_policy: str


class ZoneDefaults(TypedDict):
    """Type for DEFAULT_ZONE dictionary."""

    area: float
    heat_demand_base: float
    demand_factor: float
    is_active: bool


# Default controller configuration (temperatures in °C)
DEFAULT_CONFIG: ConfigDefaults = {
    "room_temp_target": 21.0,
    "min_flow_temp": 25.0,
    "max_flow_temp": 45.0,
    "base_outdoor_temp": 18.0,  # heating switches off at or above this
    "design_outdoor_temp": -15.0,
    "curve_type": CurveType.LINEAR,
    "curve_slope": 0.6,
    "curve_offset": 0.0,
    "curve_factor": 0.5,  # shape factor for logarithmic/exponential curves
    "target_strategy": TargetStrategy.MAXIMUM,
    "unknown_zone_policy": UnknownZonePolicy.IGNORE,
}

# Default zone parameters
DEFAULT_ZONE: ZoneDefaults = {
    "area": 0.0,  # m²
    "heat_demand_base": 100.0,  # W/m²
    "demand_factor": 1.0,
    "is_active": True,
}

# Demand factor limits applied on write
DEMAND_FACTOR_MIN = 0.0
DEMAND_FACTOR_MAX = 2.0

# Proportional gain applied to (target - current) per active zone
PROPORTIONAL_GAIN = 0.15

# Demand adjustment limits and the flow temperature swing per unit of adjustment
ADJUSTMENT_MIN = 0.5
ADJUSTMENT_MAX = 1.5
ADJUSTMENT_NEUTRAL = 1.0
ADJUSTMENT_SWING = 5.0  # °C
