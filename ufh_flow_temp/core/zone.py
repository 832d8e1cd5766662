"""
Zone state and aggregation for the UFH Flow Temperature Controller.

This module contains the zone dataclasses and the ZoneAggregator that
derives the effective target temperature, total heat demand and the
feedback-based demand adjustment across active zones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ufh_flow_temp.const import (
    ADJUSTMENT_MAX,
    ADJUSTMENT_MIN,
    ADJUSTMENT_NEUTRAL,
    DEFAULT_CONFIG,
    DEFAULT_ZONE,
    DEMAND_FACTOR_MAX,
    DEMAND_FACTOR_MIN,
    PROPORTIONAL_GAIN,
    TargetStrategy,
    ZoneUpdateResult,
)

from .curve import clamp


@dataclass
class Zone:
    """
    Runtime state for a single heating zone.

    The zone key is held by the owning aggregator, not by the zone itself.
    """

    area: float = DEFAULT_ZONE["area"]  # m²
    heat_demand_base: float = DEFAULT_ZONE["heat_demand_base"]  # W/m²
    temp_target: float = DEFAULT_CONFIG["room_temp_target"]
    is_active: bool = DEFAULT_ZONE["is_active"]
    current_temp: float | None = None  # None until first feedback
    demand_factor: float = DEFAULT_ZONE["demand_factor"]

    @property
    def heat_demand_w(self) -> float:
        """Return the instantaneous heat demand in watts."""
        return self.area * self.heat_demand_base * self.demand_factor


@dataclass
class ZoneConfig:
    """Declarative definition of a zone, used when loading from a mapping."""

    zone_id: str
    area: float = DEFAULT_ZONE["area"]
    heat_demand_base: float | None = None
    temp_target: float | None = None
    active: bool = DEFAULT_ZONE["is_active"]


@dataclass(frozen=True)
class DemandInfo:
    """Heat demand totals across active zones."""

    total_power_w: float = 0.0
    total_area_sqm: float = 0.0
    active_zones: int = 0

    @property
    def avg_demand_w_per_sqm(self) -> float:
        """Return the area-weighted average demand, 0 when no area is active."""
        if self.total_area_sqm > 0:
            return self.total_power_w / self.total_area_sqm
        return 0.0


class ZoneAggregator:
    """
    Owns the zone collection and aggregates it for the flow calculation.

    Mutators never raise on an unknown key. They return a ZoneUpdateResult
    so the caller decides whether a missing zone matters.
    """

    def __init__(self) -> None:
        """Initialize an empty zone collection."""
        self._zones: dict[str, Zone] = {}

    @property
    def zone_ids(self) -> list[str]:
        """Return the identifiers of all zones."""
        return list(self._zones)

    def get(self, zone_id: str) -> Zone | None:
        """Return the zone for zone_id, or None if it does not exist."""
        return self._zones.get(zone_id)

    def __contains__(self, zone_id: object) -> bool:
        """Return True if a zone with this identifier exists."""
        return zone_id in self._zones

    def __len__(self) -> int:
        """Return the number of zones."""
        return len(self._zones)

    def _active(self) -> list[Zone]:
        return [zone for zone in self._zones.values() if zone.is_active]

    def add_or_replace(
        self,
        zone_id: str,
        area: float = DEFAULT_ZONE["area"],
        demand_base: float | None = None,
        target: float | None = None,
        *,
        default_target: float = DEFAULT_CONFIG["room_temp_target"],
    ) -> ZoneUpdateResult:
        """
        Create a zone, replacing any existing zone with the same key.

        Replacing resets every field, including the current temperature.

        Args:
            zone_id: Unique zone key.
            area: Heated floor area in m².
            demand_base: Base heat demand in W/m² (default 100).
            target: Zone target temperature (default: default_target).
            default_target: Global room target used when target is None.

        Returns:
            CREATED for a new key, REPLACED for an existing one.

        """
        result = (
            ZoneUpdateResult.REPLACED
            if zone_id in self._zones
            else ZoneUpdateResult.CREATED
        )
        self._zones[zone_id] = Zone(
            area=area,
            heat_demand_base=(
                DEFAULT_ZONE["heat_demand_base"] if demand_base is None else demand_base
            ),
            temp_target=default_target if target is None else target,
        )
        return result

    def set_active(self, zone_id: str, *, active: bool) -> ZoneUpdateResult:
        """Set whether a zone currently calls for heat."""
        zone = self._zones.get(zone_id)
        if zone is None:
            return ZoneUpdateResult.NOT_FOUND
        zone.is_active = active
        return ZoneUpdateResult.UPDATED

    def set_demand_factor(self, zone_id: str, value: float) -> ZoneUpdateResult:
        """Set the zone demand factor, clamped to [0, 2]."""
        zone = self._zones.get(zone_id)
        if zone is None:
            return ZoneUpdateResult.NOT_FOUND
        zone.demand_factor = clamp(value, DEMAND_FACTOR_MIN, DEMAND_FACTOR_MAX)
        return ZoneUpdateResult.UPDATED

    def set_current_temp(self, zone_id: str, value: float | None) -> ZoneUpdateResult:
        """Record the latest measured zone temperature."""
        zone = self._zones.get(zone_id)
        if zone is None:
            return ZoneUpdateResult.NOT_FOUND
        zone.current_temp = value
        return ZoneUpdateResult.UPDATED

    def set_target(self, zone_id: str, value: float) -> ZoneUpdateResult:
        """Set the zone target temperature."""
        zone = self._zones.get(zone_id)
        if zone is None:
            return ZoneUpdateResult.NOT_FOUND
        zone.temp_target = value
        return ZoneUpdateResult.UPDATED

    def effective_target(
        self,
        default_target: float,
        strategy: TargetStrategy = TargetStrategy.MAXIMUM,
    ) -> float:
        """
        Calculate the target temperature that anchors the heating curve.

        With the MAXIMUM strategy the supply is sized for the most demanding
        active zone. Underfloor valves throttle a zone once it is satisfied,
        so every active zone can reach its target at the cost of
        over-supplying the others. WEIGHTED_AVERAGE weights each active
        target by area * demand_factor and falls back to the maximum when
        the total weight is zero.

        Args:
            default_target: Global room target, used when no zone is active.
            strategy: Aggregation policy.

        Returns:
            Effective target temperature in °C.

        """
        active = self._active()
        if not active:
            return default_target

        max_target = max(zone.temp_target for zone in active)
        if strategy != TargetStrategy.WEIGHTED_AVERAGE:
            return max_target

        total_weight = sum(zone.area * zone.demand_factor for zone in active)
        if total_weight <= 0:
            return max_target
        weighted = sum(
            zone.temp_target * zone.area * zone.demand_factor for zone in active
        )
        return weighted / total_weight

    def total_demand(self) -> DemandInfo:
        """Sum heat demand and area over active zones."""
        active = self._active()
        return DemandInfo(
            total_power_w=sum(zone.heat_demand_w for zone in active),
            total_area_sqm=sum(zone.area for zone in active),
            active_zones=len(active),
        )

    def demand_adjustment(self) -> float:
        """
        Calculate the demand adjustment factor from zone feedback.

        Each active zone contributes its demand factor plus a proportional
        term on its temperature error when a current temperature is known.
        The mean contribution is clamped to [0.5, 1.5].

        Returns:
            Adjustment factor, exactly 1.0 when no zone is active.

        """
        active = self._active()
        if not active:
            return ADJUSTMENT_NEUTRAL

        adjustment_sum = 0.0
        for zone in active:
            contribution = zone.demand_factor
            if zone.current_temp is not None:
                error = zone.temp_target - zone.current_temp
                contribution += error * PROPORTIONAL_GAIN
            adjustment_sum += contribution

        return clamp(adjustment_sum / len(active), ADJUSTMENT_MIN, ADJUSTMENT_MAX)

    def zones_info(self) -> dict[str, dict[str, Any]]:
        """Build a per-zone snapshot for status consumers."""
        return {
            zone_id: {
                "area_sqm": zone.area,
                "is_active": zone.is_active,
                "temp_target": zone.temp_target,
                "current_temp": zone.current_temp,
                "demand_factor": zone.demand_factor,
                "heat_demand_w": zone.heat_demand_w,
            }
            for zone_id, zone in self._zones.items()
        }
