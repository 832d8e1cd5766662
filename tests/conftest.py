"""Common fixtures for UFH Flow Temperature Controller tests."""

import pytest

from ufh_flow_temp.controller import FlowTemperatureController
from ufh_flow_temp.core.engine import ControllerConfig

# Zones from the reference installation: zone_id, area (m²), demand (W/m²), target
EXAMPLE_ZONES: list[tuple[str, float, float, float]] = [
    ("living_room", 35.0, 100.0, 21.0),
    ("bedroom_1", 18.0, 90.0, 19.0),
    ("bedroom_2", 15.0, 90.0, 19.0),
    ("bathroom", 8.0, 100.0, 23.0),
    ("kitchen", 22.0, 95.0, 20.0),
]


@pytest.fixture
def config() -> ControllerConfig:
    """Return the default controller configuration."""
    return ControllerConfig()


@pytest.fixture
def controller(config: ControllerConfig) -> FlowTemperatureController:
    """Return a controller with no zones."""
    return FlowTemperatureController(config)


@pytest.fixture
def bath_controller(controller: FlowTemperatureController) -> FlowTemperatureController:
    """Return a controller with a single active bathroom zone targeting 23°C."""
    controller.add_zone("bath", 8.0, 100.0, 23.0)
    return controller


@pytest.fixture
def house_controller(controller: FlowTemperatureController) -> FlowTemperatureController:
    """Return a controller with the five reference zones, all active."""
    for zone_id, area, demand, target in EXAMPLE_ZONES:
        controller.add_zone(zone_id, area, demand, target)
    return controller
