"""Flow temperature controller facade for the UFH Flow Temperature Controller."""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any

from .const import LOGGER, UnknownZonePolicy, ZoneUpdateResult
from .core.engine import ControllerConfig, FlowTemperatureEngine, FlowTemperatureResult
from .core.zone import Zone, ZoneAggregator
from .exceptions import ConfigurationError, ZoneNotFoundError

CONFIG_OPTIONS = frozenset(f.name for f in fields(ControllerConfig))


def build_config(
    config: ControllerConfig | None = None, **options: Any
) -> ControllerConfig:
    """
    Build a validated config from an optional base config and keyword options.

    Args:
        config: Base configuration (defaults when None).
        **options: Option overrides, named as ControllerConfig fields.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If an option is unknown or the result is invalid.

    """
    unknown = sorted(set(options) - CONFIG_OPTIONS)
    if unknown:
        msg = f"Unknown configuration option(s): {', '.join(unknown)}"
        raise ConfigurationError(msg)
    return replace(config or ControllerConfig(), **options)


class FlowTemperatureController:
    """
    Weather-compensated flow temperature controller for underfloor heating.

    Holds the configuration and zone collection, exposes the mutation API
    and caches the last computed flow temperature. The calculation itself
    is delegated to FlowTemperatureEngine.
    """

    def __init__(self, config: ControllerConfig | None = None, **options: Any) -> None:
        """
        Initialize the controller.

        Args:
            config: Controller configuration (defaults when None).
            **options: Option overrides applied on top of config.

        """
        self._engine = FlowTemperatureEngine(
            build_config(config, **options), ZoneAggregator()
        )
        self._current_outdoor_temp: float | None = None
        self._calculated_flow_temp: float = self._engine.config.min_flow_temp
        self._last_result: FlowTemperatureResult | None = None

    @property
    def config(self) -> ControllerConfig:
        """Get the current configuration."""
        return self._engine.config

    @property
    def zone_ids(self) -> list[str]:
        """Get all zone identifiers."""
        return self._engine.zones.zone_ids

    @property
    def last_result(self) -> FlowTemperatureResult | None:
        """Get the result of the last calculation, None before the first."""
        return self._last_result

    def get_zone(self, zone_id: str) -> Zone | None:
        """Get a zone by identifier."""
        return self._engine.zones.get(zone_id)

    def _handle_result(
        self, zone_id: str, result: ZoneUpdateResult, action: str
    ) -> ZoneUpdateResult:
        """Apply the unknown zone policy to a mutation result."""
        if result != ZoneUpdateResult.NOT_FOUND:
            return result
        if self.config.unknown_zone_policy == UnknownZonePolicy.RAISE:
            raise ZoneNotFoundError(zone_id)
        LOGGER.warning("Ignoring %s for unknown zone %s", action, zone_id)
        return result

    # Zone mutation

    def add_zone(
        self,
        zone_id: str,
        area_sqm: float = 0.0,
        heat_demand_w_per_sqm: float | None = None,
        temp_target: float | None = None,
    ) -> ZoneUpdateResult:
        """
        Add a heating zone, replacing any zone with the same identifier.

        Args:
            zone_id: Unique zone identifier.
            area_sqm: Heated floor area in m².
            heat_demand_w_per_sqm: Base heat demand (default 100 W/m²).
            temp_target: Zone target (default: room_temp_target).

        Returns:
            CREATED or REPLACED.

        """
        result = self._engine.zones.add_or_replace(
            zone_id,
            area_sqm,
            heat_demand_w_per_sqm,
            temp_target,
            default_target=self.config.room_temp_target,
        )
        LOGGER.debug("Zone %s %s: area=%.1f m²", zone_id, result.value, area_sqm)
        return result

    def set_zone_active(self, zone_id: str, *, is_active: bool) -> ZoneUpdateResult:
        """Set zone active/inactive state."""
        result = self._engine.zones.set_active(zone_id, active=is_active)
        return self._handle_result(zone_id, result, "activity change")

    def update_zone_demand(self, zone_id: str, demand_factor: float) -> ZoneUpdateResult:
        """Update the zone demand factor (clamped to 0-2)."""
        result = self._engine.zones.set_demand_factor(zone_id, demand_factor)
        return self._handle_result(zone_id, result, "demand update")

    def update_zone_temperature(
        self, zone_id: str, temperature: float | None
    ) -> ZoneUpdateResult:
        """Update the measured zone temperature."""
        result = self._engine.zones.set_current_temp(zone_id, temperature)
        return self._handle_result(zone_id, result, "temperature update")

    def set_zone_temp_target(self, zone_id: str, temp_target: float) -> ZoneUpdateResult:
        """Set the zone target temperature."""
        result = self._engine.zones.set_target(zone_id, temp_target)
        return self._handle_result(zone_id, result, "target change")

    # Curve tuning

    def _update_config(self, **changes: Any) -> None:
        """Replace the configuration; invalid changes leave it untouched."""
        self._engine.config = build_config(self._engine.config, **changes)
        LOGGER.info(
            "Heating curve updated: %s",
            ", ".join(f"{key}={value}" for key, value in changes.items()),
        )

    def set_curve_slope(self, slope: float) -> None:
        """Adjust the heating curve slope."""
        self._update_config(curve_slope=slope)

    def set_curve_offset(self, offset: float) -> None:
        """Adjust the heating curve offset."""
        self._update_config(curve_offset=offset)

    def set_curve_factor(self, factor: float) -> None:
        """
        Set the curve factor for logarithmic and exponential curves.

        Raises:
            ConfigurationError: If the factor is invalid for the current curve type.

        """
        self._update_config(curve_factor=factor)

    def set_curve_type(self, curve_type: str) -> None:
        """
        Set the heating curve type.

        Raises:
            ConfigurationError: If the type is not linear, logarithmic or
                exponential, or the current curve factor is invalid for it.

        """
        self._update_config(curve_type=curve_type)

    # Calculation and queries

    def calculate_flow_temperature(self, outdoor_temp: float) -> FlowTemperatureResult:
        """
        Calculate the flow temperature and cache it.

        Args:
            outdoor_temp: Current outdoor temperature in °C.

        Returns:
            Final flow temperature and its diagnostic breakdown.

        """
        result = self._engine.calculate(outdoor_temp)

        self._current_outdoor_temp = outdoor_temp
        self._calculated_flow_temp = result.flow_temperature
        self._last_result = result

        LOGGER.debug(
            "Flow temperature: outdoor=%.1f°C, target=%.1f°C, base=%.1f°C, "
            "adjustment=%.2f, final=%.1f°C, active_zones=%d",
            outdoor_temp,
            result.effective_target,
            result.base_flow_temperature,
            result.demand_adjustment,
            result.flow_temperature,
            result.active_zones,
        )
        return result

    def get_flow_temperature(self) -> float:
        """Get the last calculated flow temperature (min_flow_temp initially)."""
        return self._calculated_flow_temp

    def get_zones_info(self) -> dict[str, dict[str, Any]]:
        """Get information about all zones."""
        return self._engine.zones.zones_info()

    def get_status(self) -> dict[str, Any]:
        """Build a status snapshot for consumers."""
        demand = self._engine.zones.total_demand()
        return {
            "current_flow_temp": self._calculated_flow_temp,
            "outdoor_temp": self._current_outdoor_temp,
            "room_temp_target": self.config.room_temp_target,
            "total_demand_w": demand.total_power_w,
            "total_area_sqm": demand.total_area_sqm,
            "active_zones": demand.active_zones,
            "zones": self.get_zones_info(),
        }
