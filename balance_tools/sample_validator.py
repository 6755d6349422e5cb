"""
Water Sample Validator

Classifies a water sample into one of the supported calculation modes, or
rejects it with a specific reason. The special conductivity-referenced modes
overlap structurally with the generic single-unknown pattern, so they are
tried first.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .water_sample import (
    ANIONS,
    CATIONS,
    ION_PARAMETERS,
    WaterParameter,
    WaterSample,
)

logger = logging.getLogger(__name__)


class CalculationMode(str, Enum):
    """How the unknown value(s) of a sample are solved."""
    SINGLE_UNKNOWN = "SingleUnknown"
    CATIONS_ONLY = "CationsOnly"
    ANIONS_ONLY = "AnionsOnly"
    CATIONS_AND_ANIONS = "CationsAndAnions"


class ValidationResult(BaseModel):
    """Classification of a sample for calculation."""
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    message: str
    mode: Optional[CalculationMode] = None
    unknown_parameter: Optional[WaterParameter] = None
    # Only populated in CationsAndAnions mode (the anion-side unknown)
    second_unknown_parameter: Optional[WaterParameter] = None

    @property
    def unknown_parameters(self) -> Tuple[WaterParameter, ...]:
        return tuple(
            p for p in (self.unknown_parameter, self.second_unknown_parameter)
            if p is not None
        )


NULL_SAMPLE_MESSAGE = "Water sample cannot be null."
ALL_PROVIDED_MESSAGE = (
    "All values are provided. At least one value must be unknown; leave one blank."
)
INVALID_COMBINATION_MESSAGE = (
    "Multiple unknown values: invalid input combination. Leave exactly one value "
    "blank, or provide Conductivity with one unknown cation and/or one unknown anion."
)


def _reject(message: str) -> ValidationResult:
    logger.debug(f"Sample rejected: {message}")
    return ValidationResult(is_valid=False, message=message)


def _accept(
    message: str,
    mode: CalculationMode,
    unknown: WaterParameter,
    second_unknown: Optional[WaterParameter] = None
) -> ValidationResult:
    logger.debug(
        f"Sample classified as {mode.value}: unknown={unknown.value}"
        + (f", second_unknown={second_unknown.value}" if second_unknown else "")
    )
    return ValidationResult(
        is_valid=True,
        message=message,
        mode=mode,
        unknown_parameter=unknown,
        second_unknown_parameter=second_unknown,
    )


def validate_for_calculation(sample: Optional[WaterSample]) -> ValidationResult:
    """
    Classify a sample into a calculation mode.

    Rules are evaluated in priority order and the first match wins:
    null sample, negative values, cations+anions, cations-only, anions-only,
    single unknown ion, single unknown conductivity, all provided, and
    finally any other combination.

    Never raises; every outcome is a ValidationResult.
    """
    if sample is None:
        return _reject(NULL_SAMPLE_MESSAGE)

    negative = sample.negative_parameters()
    if negative:
        names = ", ".join(p.value for p in negative)
        return _reject(f"Negative values not allowed: {names}")

    has_conductivity = sample.has(WaterParameter.CONDUCTIVITY)
    missing_cations = sample.missing_parameters(CATIONS)
    missing_anions = sample.missing_parameters(ANIONS)

    if has_conductivity and len(missing_cations) == 1 and len(missing_anions) == 1:
        return _accept(
            "Valid for cations+anions calculation",
            CalculationMode.CATIONS_AND_ANIONS,
            missing_cations[0],
            missing_anions[0],
        )

    if has_conductivity and len(missing_cations) == 1 and len(missing_anions) == len(ANIONS):
        return _accept(
            "Valid for cations-only calculation",
            CalculationMode.CATIONS_ONLY,
            missing_cations[0],
        )

    if has_conductivity and len(missing_anions) == 1 and len(missing_cations) == len(CATIONS):
        return _accept(
            "Valid for anions-only calculation",
            CalculationMode.ANIONS_ONLY,
            missing_anions[0],
        )

    missing_ions = sample.missing_parameters(ION_PARAMETERS)

    if len(missing_ions) == 1:
        return _accept(
            "Valid for calculation",
            CalculationMode.SINGLE_UNKNOWN,
            missing_ions[0],
        )

    if not missing_ions and not has_conductivity:
        return _accept(
            "Valid for conductivity calculation",
            CalculationMode.SINGLE_UNKNOWN,
            WaterParameter.CONDUCTIVITY,
        )

    if not missing_ions:
        return _reject(ALL_PROVIDED_MESSAGE)

    return _reject(INVALID_COMBINATION_MESSAGE)


def get_unknown_parameter(sample: Optional[WaterSample]) -> Optional[WaterParameter]:
    """Primary unknown parameter of a valid sample, None if the sample is rejected."""
    validation = validate_for_calculation(sample)
    return validation.unknown_parameter if validation.is_valid else None
