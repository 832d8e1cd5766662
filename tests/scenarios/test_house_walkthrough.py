"""Scenario: a five-zone house through changing weather and zone activity."""

import pytest

from ufh_flow_temp.const import CurveType
from ufh_flow_temp.controller import FlowTemperatureController

TOTAL_AREA = 35.0 + 18.0 + 15.0 + 8.0 + 22.0
TOTAL_DEMAND = 35 * 100 + 18 * 90 + 15 * 90 + 8 * 100 + 22 * 95


class TestHouseWalkthrough:
    """Walk the reference house through a sequence of readings."""

    def test_all_zones_active(self, house_controller: FlowTemperatureController) -> None:
        """All zones active at 5°C: the bathroom's 23°C anchors the curve."""
        result = house_controller.calculate_flow_temperature(5.0)

        assert result.effective_target == 23.0
        assert result.base_flow_temperature == pytest.approx(23.0 + 13 * 0.6)
        assert result.flow_temperature == pytest.approx(30.8)
        assert result.total_demand_w == pytest.approx(TOTAL_DEMAND)
        assert result.total_area_sqm == pytest.approx(TOTAL_AREA)
        assert result.active_zones == 5
        assert result.demand_adjustment == 1.0

    def test_weather_changes(self, house_controller: FlowTemperatureController) -> None:
        """Colder weather raises the flow, mild weather lowers it."""
        cold = house_controller.calculate_flow_temperature(-10.0)
        mild = house_controller.calculate_flow_temperature(15.0)

        # 23 + 28 * 0.6 = 39.8
        assert cold.flow_temperature == pytest.approx(39.8)
        # 23 + 3 * 0.6 = 24.8, raised to the 25°C minimum
        assert mild.flow_temperature == 25.0
        assert house_controller.get_flow_temperature() == 25.0

    def test_living_room_needs_more_heat(
        self, house_controller: FlowTemperatureController
    ) -> None:
        """Feedback and a higher demand factor in one zone raise the flow."""
        house_controller.update_zone_temperature("living_room", 19.0)
        house_controller.update_zone_demand("living_room", 1.3)

        result = house_controller.calculate_flow_temperature(5.0)

        # living room contributes 1.3 + 2 * 0.15 = 1.6, others 1.0
        expected_adjustment = (1.6 + 4 * 1.0) / 5
        assert result.demand_adjustment == pytest.approx(expected_adjustment)
        assert result.flow_temperature == pytest.approx(
            30.8 + (expected_adjustment - 1) * 5
        )
        assert result.total_demand_w == pytest.approx(TOTAL_DEMAND + 35 * 100 * 0.3)

    def test_night_mode(self, house_controller: FlowTemperatureController) -> None:
        """Only bedroom_1 and bathroom active at 0°C."""
        for zone_id in ("living_room", "bedroom_2", "kitchen"):
            house_controller.set_zone_active(zone_id, is_active=False)

        result = house_controller.calculate_flow_temperature(0.0)

        assert result.active_zones == 2
        assert result.total_area_sqm == pytest.approx(26.0)
        assert result.total_demand_w == pytest.approx(18 * 90 + 8 * 100)
        assert result.effective_target == 23.0
        assert result.flow_temperature == pytest.approx(33.8)

    def test_bathroom_off_lowers_target(
        self, house_controller: FlowTemperatureController
    ) -> None:
        """Without the bathroom the living room's 21°C anchors the curve."""
        house_controller.set_zone_active("bathroom", is_active=False)
        result = house_controller.calculate_flow_temperature(5.0)
        assert result.effective_target == 21.0
        assert result.flow_temperature == pytest.approx(28.8)

    def test_full_status(self, house_controller: FlowTemperatureController) -> None:
        """Status after re-enabling zones reports every zone."""
        house_controller.set_zone_active("kitchen", is_active=False)
        house_controller.calculate_flow_temperature(0.0)
        house_controller.set_zone_active("kitchen", is_active=True)

        status = house_controller.get_status()

        assert status["current_flow_temp"] == pytest.approx(33.8)
        assert status["room_temp_target"] == 21.0
        assert status["total_area_sqm"] == pytest.approx(TOTAL_AREA)
        assert status["total_demand_w"] == pytest.approx(TOTAL_DEMAND)
        assert set(status["zones"]) == {
            "living_room",
            "bedroom_1",
            "bedroom_2",
            "bathroom",
            "kitchen",
        }

    @pytest.mark.parametrize("curve_type", list(CurveType))
    def test_curve_types_across_season(
        self, house_controller: FlowTemperatureController, curve_type: CurveType
    ) -> None:
        """Flow temperature never decreases as the outdoor temperature falls."""
        house_controller.set_curve_type(curve_type)
        outdoor_temps = [18.0, 12.0, 6.0, 0.0, -6.0, -12.0, -15.0, -20.0]

        flows = [
            house_controller.calculate_flow_temperature(t).flow_temperature
            for t in outdoor_temps
        ]

        assert flows == sorted(flows)
        assert flows[0] == 25.0
        assert all(25.0 <= flow <= 45.0 for flow in flows)
