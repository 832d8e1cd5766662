"""
Heating curve evaluation for the UFH Flow Temperature Controller.

This module maps the outdoor temperature onto a base flow temperature.
Three curve shapes are supported:

- Linear: constant rise per degree below the base outdoor temperature
- Logarithmic: front-loads the rise, steep near the start of the season
- Exponential: defers the rise, gentle until deep cold

The non-linear shapes normalize the outdoor range
[base_outdoor_temp, design_outdoor_temp] onto [0, 1], apply the
non-linearity, then rescale by the range width so curve_slope keeps the
same physical meaning (°C flow per °C outdoor) across shapes.
"""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING

from ufh_flow_temp.const import CurveType

if TYPE_CHECKING:
    from .engine import ControllerConfig

# Exponents at or above this overflow math.exp
_MAX_EXP = math.log(sys.float_info.max)


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def _diverged(slope: float) -> float:
    """Return the rise of a curve that has run past the float range."""
    return math.copysign(math.inf, slope) if slope else 0.0


def linear_curve(temp_diff: float, slope: float) -> float:
    """Return the linear rise above the target for a given temperature difference."""
    return temp_diff * slope


def logarithmic_curve(
    temp_diff: float,
    max_diff: float,
    slope: float,
    factor: float,
) -> float:
    """
    Return the logarithmic rise above the target.

    Args:
        temp_diff: Base outdoor temperature minus current outdoor temperature.
        max_diff: Base outdoor temperature minus design outdoor temperature.
        slope: Curve slope (°C flow per °C outdoor).
        factor: Curve shape factor, must be > -1 and non-zero.

    Returns:
        Rise in °C, or an infinite rise (signed like slope) when a negative factor
        drives the logarithm argument to zero or below.

    """
    normalized = temp_diff / max_diff
    argument = factor * normalized + 1
    if argument <= 0:
        return _diverged(slope)
    log_value = math.log(argument) / math.log(factor + 1)
    return log_value * max_diff * slope


def exponential_curve(
    temp_diff: float,
    max_diff: float,
    slope: float,
    factor: float,
) -> float:
    """
    Return the exponential rise above the target.

    Args:
        temp_diff: Base outdoor temperature minus current outdoor temperature.
        max_diff: Base outdoor temperature minus design outdoor temperature.
        slope: Curve slope (°C flow per °C outdoor).
        factor: Curve shape factor, must be non-zero.

    Returns:
        Rise in °C, or an infinite rise (signed like slope) when the
        exponential exceeds the float range.

    """
    normalized = temp_diff / max_diff
    if factor > 0:
        # e^(f*n) - 1 over e^f - 1, rescaled by e^-f so large factors stay finite
        exponent = factor * (normalized - 1)
        if exponent >= _MAX_EXP:
            return _diverged(slope)
        exp_value = (
            math.exp(exponent)
            * math.expm1(-factor * normalized)
            / math.expm1(-factor)
        )
    else:
        exponent = factor * normalized
        if exponent >= _MAX_EXP:
            return _diverged(slope)
        exp_value = math.expm1(exponent) / math.expm1(factor)
    return exp_value * max_diff * slope


def calculate_base_flow_temp(
    outdoor_temp: float,
    effective_target: float,
    config: ControllerConfig,
) -> float:
    """
    Calculate the base flow temperature from the heating curve.

    At or above the base outdoor temperature the heating season is over and
    the minimum flow temperature is returned without evaluating the curve.

    Args:
        outdoor_temp: Current outdoor temperature in °C.
        effective_target: Target temperature anchoring the curve in °C.
        config: Controller configuration.

    Returns:
        Flow temperature clamped to [min_flow_temp, max_flow_temp].

    """
    if outdoor_temp >= config.base_outdoor_temp:
        return config.min_flow_temp

    temp_diff = config.base_outdoor_temp - outdoor_temp
    max_diff = config.max_diff

    if config.curve_type == CurveType.LOGARITHMIC:
        rise = logarithmic_curve(
            temp_diff, max_diff, config.curve_slope, config.curve_factor
        )
    elif config.curve_type == CurveType.EXPONENTIAL:
        rise = exponential_curve(
            temp_diff, max_diff, config.curve_slope, config.curve_factor
        )
    else:
        rise = linear_curve(temp_diff, config.curve_slope)

    flow_temp = effective_target + rise + config.curve_offset
    return clamp(flow_temp, config.min_flow_temp, config.max_flow_temp)
