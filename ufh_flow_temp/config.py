"""
Build a controller from plain configuration data.

Accepts the mapping a host application reads from YAML or JSON: controller
options at the top level and an optional list of zone entries. Both are
validated with voluptuous schemas before anything is constructed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import voluptuous as vol
from slugify import slugify

from .const import (
    DEFAULT_ZONE,
    LOGGER,
    CurveType,
    TargetStrategy,
    UnknownZonePolicy,
)
from .controller import FlowTemperatureController, build_config
from .core.zone import ZoneConfig
from .exceptions import ConfigurationError

CONF_ZONES = "zones"
CONF_ZONE_ID = "zone_id"
CONF_NAME = "name"


def _camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def _snake_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of data with camelCase keys converted to snake_case."""
    return {_camel_to_snake(str(key)): value for key, value in data.items()}


def _zone_identity(data: dict[str, Any]) -> dict[str, Any]:
    """Derive a missing zone_id from the name, e.g. "Living Room" -> "living_room"."""
    zone_id = data.get(CONF_ZONE_ID) or (
        slugify(data[CONF_NAME], separator="_") if data.get(CONF_NAME) else None
    )
    if not zone_id:
        msg = "Zone entry needs a zone_id or a name"
        raise vol.Invalid(msg)
    return {**data, CONF_ZONE_ID: zone_id}


ZONE_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional(CONF_ZONE_ID): str,
            vol.Optional(CONF_NAME): str,
            vol.Required("area"): vol.All(vol.Coerce(float), vol.Range(min=0)),
            vol.Optional("heat_demand_base"): vol.Coerce(float),
            vol.Optional("temp_target"): vol.Coerce(float),
            vol.Optional("active", default=DEFAULT_ZONE["is_active"]): vol.Boolean(),
        }
    ),
    _zone_identity,
)

OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional("room_temp_target"): vol.Coerce(float),
        vol.Optional("min_flow_temp"): vol.Coerce(float),
        vol.Optional("max_flow_temp"): vol.Coerce(float),
        vol.Optional("base_outdoor_temp"): vol.Coerce(float),
        vol.Optional("design_outdoor_temp"): vol.Coerce(float),
        vol.Optional("curve_type"): vol.In([member.value for member in CurveType]),
        vol.Optional("curve_slope"): vol.Coerce(float),
        vol.Optional("curve_offset"): vol.Coerce(float),
        vol.Optional("curve_factor"): vol.Coerce(float),
        vol.Optional("target_strategy"): vol.In(
            [member.value for member in TargetStrategy]
        ),
        vol.Optional("unknown_zone_policy"): vol.In(
            [member.value for member in UnknownZonePolicy]
        ),
        vol.Optional(CONF_ZONES, default=list): [dict],
    }
)


def _validate(schema: vol.Schema, data: Any, what: str) -> dict[str, Any]:
    """Run a schema, converting voluptuous errors to ConfigurationError."""
    try:
        return schema(data)
    except vol.Invalid as err:
        msg = f"Invalid {what}: {err}"
        raise ConfigurationError(msg) from err


def zone_config_from_dict(data: Mapping[str, Any]) -> ZoneConfig:
    """
    Create a zone definition from a mapping.

    A missing zone_id is derived from the name, e.g. "Living Room" becomes
    "living_room".

    Raises:
        ConfigurationError: If the entry is malformed.

    """
    validated = _validate(ZONE_SCHEMA, _snake_keys(data), "zone entry")
    return ZoneConfig(
        zone_id=validated[CONF_ZONE_ID],
        area=validated["area"],
        heat_demand_base=validated.get("heat_demand_base"),
        temp_target=validated.get("temp_target"),
        active=validated["active"],
    )


def controller_from_dict(data: Mapping[str, Any]) -> FlowTemperatureController:
    """
    Create a controller and its zones from a mapping.

    Args:
        data: Controller options plus an optional "zones" list.

    Returns:
        A configured controller with all zones added.

    Raises:
        ConfigurationError: If any option or zone entry is invalid.

    """
    options = _validate(OPTIONS_SCHEMA, _snake_keys(data), "controller options")
    zone_configs = [zone_config_from_dict(entry) for entry in options.pop(CONF_ZONES)]

    controller = FlowTemperatureController(build_config(**options))

    for zone in zone_configs:
        if zone.zone_id in controller.zone_ids:
            LOGGER.warning("Duplicate zone %s replaces the earlier entry", zone.zone_id)
        controller.add_zone(
            zone.zone_id, zone.area, zone.heat_demand_base, zone.temp_target
        )
        if not zone.active:
            controller.set_zone_active(zone.zone_id, is_active=False)

    LOGGER.debug(
        "Loaded controller config: curve=%s, zones=%s",
        controller.config.curve_type,
        controller.zone_ids,
    )
    return controller
