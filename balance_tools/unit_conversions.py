"""
Unit Conversion Module for Water Balance MCP Server

Centralizes the conversions between mass concentration, charge equivalents
and conductivity. All factors come from CONFIG.
"""

from .core_config import CONFIG
from .water_sample import WaterParameter


def mg_to_meq(mg_l: float, parameter: WaterParameter) -> float:
    """
    Convert mg/L to meq/L for a specific ion.

    Args:
        mg_l: Concentration in mg/L (mg/L as CaCO3 for total alkalinity)
        parameter: Ion parameter

    Returns:
        Concentration in meq/L

    Raises:
        UnknownParameterError: If parameter has no equivalent weight
    """
    return mg_l / CONFIG.get_equiv_weight(parameter)


def meq_to_mg(meq_l: float, parameter: WaterParameter) -> float:
    """
    Convert meq/L to mg/L for a specific ion.

    Args:
        meq_l: Concentration in meq/L
        parameter: Ion parameter

    Returns:
        Concentration in mg/L

    Raises:
        UnknownParameterError: If parameter has no equivalent weight
    """
    return meq_l * CONFIG.get_equiv_weight(parameter)


def conductivity_to_meq(conductivity_us_cm: float) -> float:
    """Total ionic charge (meq/L) implied by a conductivity reading."""
    return conductivity_us_cm / CONFIG.CONDUCTIVITY_CONVERSION_FACTOR


def meq_to_conductivity(meq_l: float) -> float:
    """Conductivity (uS/cm) for a given charge concentration."""
    return meq_l * CONFIG.CONDUCTIVITY_CONVERSION_FACTOR
