"""
Core Configuration Module for Water Balance MCP Server

Centralizes the chemical constants used by the charge balance calculations.
Equivalent weights and the conductivity factor are defined here once and
shared by the calculator and the unit conversions.
"""

from dataclasses import dataclass
from typing import Dict

from .exceptions import UnknownParameterError
from .water_sample import WaterParameter, ION_PARAMETERS


@dataclass(frozen=True)
class CoreConfig:
    """
    Centralized configuration for the water balance calculator.

    Using frozen=True ensures these values cannot be modified at runtime.
    """

    # Cation equivalent weights (mg/meq)
    CALCIUM_EQUIV_WEIGHT: float = 20.0      # Ca2+: ~40/2
    MAGNESIUM_EQUIV_WEIGHT: float = 12.0    # Mg2+: ~24/2
    SODIUM_EQUIV_WEIGHT: float = 23.0       # Na+: 23/1
    POTASSIUM_EQUIV_WEIGHT: float = 39.0    # K+: 39/1

    # Anion equivalent weights (mg/meq)
    CHLORIDE_EQUIV_WEIGHT: float = 35.5     # Cl-: 35.5/1
    FLUORIDE_EQUIV_WEIGHT: float = 19.0     # F-: 19/1
    NITRATE_EQUIV_WEIGHT: float = 14.0      # NO3- reported as N
    SULFATE_EQUIV_WEIGHT: float = 48.0      # SO4-2: 96/2
    ALKALINITY_EQUIV_WEIGHT: float = 50.0   # Alkalinity as CaCO3: 100/2

    # Empirical factor relating meq/L to conductivity (uS/cm per meq/L)
    CONDUCTIVITY_CONVERSION_FACTOR: float = 100.0

    # Server limits
    MAX_REQUEST_SIZE_BYTES: int = 1024 * 1024
    DEFAULT_LOG_FILE: str = "water_balance_mcp.log"

    def get_equiv_weight(self, parameter: WaterParameter) -> float:
        """
        Get equivalent weight for an ion parameter.

        Args:
            parameter: One of the nine ion/alkalinity parameters

        Returns:
            Equivalent weight in mg/meq

        Raises:
            UnknownParameterError: If the parameter has no equivalent weight
                (Conductivity, or anything that is not a WaterParameter)
        """
        weights = self.get_equiv_weights()
        try:
            return weights[parameter]
        except (KeyError, TypeError):
            raise UnknownParameterError(
                parameter,
                known=[p.value for p in ION_PARAMETERS],
            ) from None

    def get_equiv_weights(self) -> Dict[WaterParameter, float]:
        """Equivalent weight table keyed by parameter, in canonical order."""
        return {
            WaterParameter.CALCIUM: self.CALCIUM_EQUIV_WEIGHT,
            WaterParameter.MAGNESIUM: self.MAGNESIUM_EQUIV_WEIGHT,
            WaterParameter.SODIUM: self.SODIUM_EQUIV_WEIGHT,
            WaterParameter.POTASSIUM: self.POTASSIUM_EQUIV_WEIGHT,
            WaterParameter.CHLORIDE: self.CHLORIDE_EQUIV_WEIGHT,
            WaterParameter.FLUORIDE: self.FLUORIDE_EQUIV_WEIGHT,
            WaterParameter.NITRATE: self.NITRATE_EQUIV_WEIGHT,
            WaterParameter.SULFATE: self.SULFATE_EQUIV_WEIGHT,
            WaterParameter.TOTAL_ALKALINITY: self.ALKALINITY_EQUIV_WEIGHT,
        }


# Global configuration instance
CONFIG = CoreConfig()
