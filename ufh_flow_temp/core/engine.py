"""
Flow temperature calculation for the UFH Flow Temperature Controller.

This module provides the validated controller configuration and the
FlowTemperatureEngine that combines the heating curve with zone demand
in two stages: base curve value, then demand-adjusted final value.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

from ufh_flow_temp.const import (
    ADJUSTMENT_NEUTRAL,
    ADJUSTMENT_SWING,
    DEFAULT_CONFIG,
    CurveType,
    TargetStrategy,
    UnknownZonePolicy,
)
from ufh_flow_temp.exceptions import ConfigurationError

from .curve import calculate_base_flow_temp, clamp
from .zone import ZoneAggregator


def _coerce_enum(enum_type: type[StrEnum], value: Any, option: str) -> Any:
    """Convert a raw option value to its enum, raising ConfigurationError."""
    try:
        return enum_type(value)
    except ValueError as err:
        allowed = ", ".join(f"'{member.value}'" for member in enum_type)
        msg = f"Invalid {option} '{value}'. Must be one of {allowed}"
        raise ConfigurationError(msg) from err


@dataclass(frozen=True)
class ControllerConfig:
    """
    Validated configuration for the flow temperature controller.

    Instances are immutable. Changing a parameter means building a new
    config with dataclasses.replace, which runs validation again.

    Attributes:
        room_temp_target: Global room target, used when no zone is active.
        min_flow_temp: Lower flow temperature bound.
        max_flow_temp: Upper flow temperature bound.
        base_outdoor_temp: Outdoor temperature at which heating turns off.
        design_outdoor_temp: Coldest outdoor temperature the system is sized for.
        curve_type: Heating curve shape.
        curve_slope: Flow °C per outdoor °C.
        curve_offset: Parallel shift of the curve in °C.
        curve_factor: Shape factor for logarithmic/exponential curves.
        target_strategy: How active zone targets combine into one.
        unknown_zone_policy: Ignore or raise on unknown zone keys.

    """

    room_temp_target: float = DEFAULT_CONFIG["room_temp_target"]
    min_flow_temp: float = DEFAULT_CONFIG["min_flow_temp"]
    max_flow_temp: float = DEFAULT_CONFIG["max_flow_temp"]
    base_outdoor_temp: float = DEFAULT_CONFIG["base_outdoor_temp"]
    design_outdoor_temp: float = DEFAULT_CONFIG["design_outdoor_temp"]
    curve_type: CurveType = CurveType(DEFAULT_CONFIG["curve_type"])
    curve_slope: float = DEFAULT_CONFIG["curve_slope"]
    curve_offset: float = DEFAULT_CONFIG["curve_offset"]
    curve_factor: float = DEFAULT_CONFIG["curve_factor"]
    target_strategy: TargetStrategy = TargetStrategy(
        DEFAULT_CONFIG["target_strategy"]
    )
    unknown_zone_policy: UnknownZonePolicy = UnknownZonePolicy(
        DEFAULT_CONFIG["unknown_zone_policy"]
    )

    def __post_init__(self) -> None:
        """Coerce enum options and reject configurations the curve math cannot handle."""
        # frozen dataclass: assign coerced values through object.__setattr__
        object.__setattr__(
            self, "curve_type", _coerce_enum(CurveType, self.curve_type, "curve type")
        )
        object.__setattr__(
            self,
            "target_strategy",
            _coerce_enum(TargetStrategy, self.target_strategy, "target strategy"),
        )
        object.__setattr__(
            self,
            "unknown_zone_policy",
            _coerce_enum(
                UnknownZonePolicy, self.unknown_zone_policy, "unknown zone policy"
            ),
        )

        if self.min_flow_temp > self.max_flow_temp:
            msg = (
                f"min_flow_temp ({self.min_flow_temp}) must not exceed "
                f"max_flow_temp ({self.max_flow_temp})"
            )
            raise ConfigurationError(msg)

        if self.design_outdoor_temp >= self.base_outdoor_temp:
            msg = (
                f"design_outdoor_temp ({self.design_outdoor_temp}) must be below "
                f"base_outdoor_temp ({self.base_outdoor_temp})"
            )
            raise ConfigurationError(msg)

        if self.curve_type != CurveType.LINEAR and self.curve_factor == 0:
            msg = f"curve_factor must be non-zero for a {self.curve_type} curve"
            raise ConfigurationError(msg)

        if self.curve_type == CurveType.LOGARITHMIC and self.curve_factor <= -1:
            msg = (
                f"curve_factor ({self.curve_factor}) must be greater than -1 "
                "for a logarithmic curve"
            )
            raise ConfigurationError(msg)

    @property
    def max_diff(self) -> float:
        """Return the width of the outdoor range the curve spans."""
        return self.base_outdoor_temp - self.design_outdoor_temp


@dataclass(frozen=True)
class FlowTemperatureResult:
    """Result and diagnostics of a single flow temperature calculation."""

    flow_temperature: float
    base_flow_temperature: float
    outdoor_temperature: float
    demand_adjustment: float
    total_demand_w: float
    total_area_sqm: float
    active_zones: int
    effective_target: float

    def as_dict(self) -> dict[str, Any]:
        """Return the result as a plain dictionary."""
        return asdict(self)


class FlowTemperatureEngine:
    """
    Two-stage flow temperature pipeline.

    The engine holds no result state: calculate() is a pure function of the
    configuration, the zone collection and the outdoor temperature.
    """

    def __init__(
        self,
        config: ControllerConfig,
        zones: ZoneAggregator | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Validated controller configuration.
            zones: Zone collection to aggregate (a new empty one if None).

        """
        self.config = config
        self.zones = zones if zones is not None else ZoneAggregator()

    def effective_target(self) -> float:
        """Return the effective target for the current zone state."""
        return self.zones.effective_target(
            self.config.room_temp_target, self.config.target_strategy
        )

    def calculate(self, outdoor_temp: float) -> FlowTemperatureResult:
        """
        Calculate the flow temperature for an outdoor reading.

        At or above the base outdoor temperature the result is min_flow_temp
        whatever the zone state. The demand adjustment is still reported.

        Args:
            outdoor_temp: Current outdoor temperature in °C.

        Returns:
            Final flow temperature and its diagnostic breakdown.

        """
        config = self.config
        effective_target = self.effective_target()

        base_flow_temp = calculate_base_flow_temp(
            outdoor_temp, effective_target, config
        )
        demand = self.zones.total_demand()
        adjustment = self.zones.demand_adjustment()

        if outdoor_temp >= config.base_outdoor_temp:
            # Heating season is over: zone feedback cannot lift the supply
            flow_temp = config.min_flow_temp
        else:
            # Adjustment in [0.5, 1.5] moves the flow temperature by up to ±2.5 °C
            adjusted = (
                base_flow_temp + (adjustment - ADJUSTMENT_NEUTRAL) * ADJUSTMENT_SWING
            )
            flow_temp = clamp(adjusted, config.min_flow_temp, config.max_flow_temp)

        return FlowTemperatureResult(
            flow_temperature=flow_temp,
            base_flow_temperature=base_flow_temp,
            outdoor_temperature=outdoor_temp,
            demand_adjustment=adjustment,
            total_demand_w=demand.total_power_w,
            total_area_sqm=demand.total_area_sqm,
            active_zones=demand.active_zones,
            effective_target=effective_target,
        )
