"""
Water Balance Calculator

Solves the unknown value(s) of a validated water sample from the
electroneutrality principle (sum of cation meq/L equals sum of anion meq/L)
or, for the conductivity-referenced modes, against the total charge implied
by the conductivity reading. Every case is closed-form.

The public entry point never raises: validation failures, non-physical
results and internal errors are all returned as BalanceResult records.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from .exceptions import UnknownParameterError, UnsupportedModeError
from .sample_validator import CalculationMode, validate_for_calculation
from .unit_conversions import (
    conductivity_to_meq,
    meq_to_conductivity,
    meq_to_mg,
    mg_to_meq,
)
from .water_sample import ANIONS, CATIONS, WaterParameter, WaterSample

logger = logging.getLogger(__name__)


class BalanceStatus(str, Enum):
    """Status strings reported on a BalanceResult."""
    COMPLETE = "Calculation Complete"
    COMPLETE_CATIONS_ONLY = "Calculation Complete (Cations only)"
    COMPLETE_ANIONS_ONLY = "Calculation Complete (Anions only)"
    COMPLETE_CATIONS_AND_ANIONS = "Calculation Complete (Cations and anions)"
    INVALID_INPUT = "Invalid Input"
    INVALID_RESULT = "Invalid Result"
    CALCULATION_ERROR = "Calculation Error"


class BalanceResult(BaseModel):
    """Result of a balance calculation (output).

    If error_message is set the status is a failure category and the solved
    fields are empty; otherwise at least one solved property/value pair is
    present. Sums are in meq/L.
    """
    model_config = ConfigDict(use_enum_values=True)

    cations_sum: Optional[float] = None
    anions_sum: Optional[float] = None
    status: Optional[BalanceStatus] = None
    solved_property: Optional[WaterParameter] = None
    solved_value: Optional[float] = None
    second_solved_property: Optional[WaterParameter] = None
    second_solved_value: Optional[float] = None
    error_message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.error_message is None and self.solved_property is not None


# =============================================================================
# Equivalent sums
# =============================================================================

def _equivalents_sum(
    sample: WaterSample,
    parameters: Iterable[WaterParameter],
    exclude: Optional[WaterParameter] = None
) -> float:
    total = 0.0
    for parameter in parameters:
        if parameter is exclude:
            continue
        value = sample.get(parameter)
        if value is not None:
            total += mg_to_meq(value, parameter)
    return total


def cations_sum(sample: WaterSample) -> float:
    """Sum of cation equivalents (meq/L) over the cations present."""
    return _equivalents_sum(sample, CATIONS)


def anions_sum(sample: WaterSample) -> float:
    """Sum of anion equivalents (meq/L), total alkalinity included."""
    return _equivalents_sum(sample, ANIONS)


def cations_sum_excluding(sample: WaterSample, parameter: WaterParameter) -> float:
    """Cation sum skipping one parameter whether or not it holds a value."""
    return _equivalents_sum(sample, CATIONS, exclude=parameter)


def anions_sum_excluding(sample: WaterSample, parameter: WaterParameter) -> float:
    """Anion sum skipping one parameter whether or not it holds a value."""
    return _equivalents_sum(sample, ANIONS, exclude=parameter)


def _same_side_sum_excluding(sample: WaterSample, parameter: WaterParameter) -> float:
    if parameter.is_cation:
        return cations_sum_excluding(sample, parameter)
    if parameter.is_anion:
        return anions_sum_excluding(sample, parameter)
    raise UnknownParameterError(parameter)


# =============================================================================
# Result builders
# =============================================================================

def _negative_result(values: Dict[WaterParameter, float]) -> BalanceResult:
    negative = [p for p, v in values.items() if v < 0]
    names = ", ".join(p.value for p in negative)
    logger.warning(
        "Non-physical result: "
        + ", ".join(f"{p.value}={values[p]:.3f} mg/L" for p in negative)
    )
    return BalanceResult(
        status=BalanceStatus.INVALID_RESULT,
        error_message=f"Negative result for {names}",
    )


def _failure(status: BalanceStatus, message: str) -> BalanceResult:
    return BalanceResult(status=status, error_message=message)


# =============================================================================
# Per-mode solvers
# =============================================================================

def _solve_conductivity(sample: WaterSample) -> BalanceResult:
    cations = cations_sum(sample)
    anions = anions_sum(sample)
    conductivity = meq_to_conductivity((cations + anions) / 2)

    return BalanceResult(
        cations_sum=cations,
        anions_sum=anions,
        status=BalanceStatus.COMPLETE,
        solved_property=WaterParameter.CONDUCTIVITY,
        solved_value=conductivity,
    )


def _solve_ion(sample: WaterSample, parameter: WaterParameter) -> BalanceResult:
    """Solve one ion against the complementary side of the balance."""
    if parameter.is_cation:
        known = cations_sum_excluding(sample, parameter)
        meq = anions_sum(sample) - known
    elif parameter.is_anion:
        known = anions_sum_excluding(sample, parameter)
        meq = cations_sum(sample) - known
    else:
        raise UnknownParameterError(parameter)

    value = meq_to_mg(meq, parameter)
    if value < 0:
        return _negative_result({parameter: value})

    if parameter.is_cation:
        cations, anions = known + meq, anions_sum(sample)
    else:
        cations, anions = cations_sum(sample), known + meq

    return BalanceResult(
        cations_sum=cations,
        anions_sum=anions,
        status=BalanceStatus.COMPLETE,
        solved_property=parameter,
        solved_value=value,
    )


def _solve_single_unknown(
    sample: WaterSample,
    unknown: Optional[WaterParameter],
    second_unknown: Optional[WaterParameter]
) -> BalanceResult:
    if unknown is WaterParameter.CONDUCTIVITY:
        return _solve_conductivity(sample)
    if unknown is None:
        raise UnknownParameterError(unknown)
    return _solve_ion(sample, unknown)


def _reference_total(sample: WaterSample) -> float:
    return conductivity_to_meq(sample.get(WaterParameter.CONDUCTIVITY))


def _solve_one_side(
    sample: WaterSample,
    unknown: Optional[WaterParameter],
    status: BalanceStatus
) -> BalanceResult:
    if unknown is None:
        raise UnknownParameterError(unknown)

    total_meq = _reference_total(sample)
    meq = total_meq - _same_side_sum_excluding(sample, unknown)
    value = meq_to_mg(meq, unknown)
    if value < 0:
        return _negative_result({unknown: value})

    return BalanceResult(
        cations_sum=total_meq if unknown.is_cation else None,
        anions_sum=total_meq if unknown.is_anion else None,
        status=status,
        solved_property=unknown,
        solved_value=value,
    )


def _solve_cations_only(
    sample: WaterSample,
    unknown: Optional[WaterParameter],
    second_unknown: Optional[WaterParameter]
) -> BalanceResult:
    return _solve_one_side(sample, unknown, BalanceStatus.COMPLETE_CATIONS_ONLY)


def _solve_anions_only(
    sample: WaterSample,
    unknown: Optional[WaterParameter],
    second_unknown: Optional[WaterParameter]
) -> BalanceResult:
    return _solve_one_side(sample, unknown, BalanceStatus.COMPLETE_ANIONS_ONLY)


def _solve_cations_and_anions(
    sample: WaterSample,
    cation: Optional[WaterParameter],
    anion: Optional[WaterParameter]
) -> BalanceResult:
    """
    Solve one unknown cation and one unknown anion.

    Both are resolved independently against the same conductivity-derived
    total; they are not coupled through electroneutrality with each other.
    """
    if cation is None or anion is None:
        raise UnknownParameterError("cation" if cation is None else "anion")

    total_meq = _reference_total(sample)
    values = {}
    for parameter in (cation, anion):
        meq = total_meq - _same_side_sum_excluding(sample, parameter)
        values[parameter] = meq_to_mg(meq, parameter)

    if any(v < 0 for v in values.values()):
        return _negative_result(values)

    return BalanceResult(
        cations_sum=total_meq,
        anions_sum=total_meq,
        status=BalanceStatus.COMPLETE_CATIONS_AND_ANIONS,
        solved_property=cation,
        solved_value=values[cation],
        second_solved_property=anion,
        second_solved_value=values[anion],
    )


_SOLVERS: Dict[CalculationMode, Callable[..., BalanceResult]] = {
    CalculationMode.SINGLE_UNKNOWN: _solve_single_unknown,
    CalculationMode.CATIONS_ONLY: _solve_cations_only,
    CalculationMode.ANIONS_ONLY: _solve_anions_only,
    CalculationMode.CATIONS_AND_ANIONS: _solve_cations_and_anions,
}


# =============================================================================
# Public entry point
# =============================================================================

def calculate_water_balance(sample: Optional[WaterSample]) -> BalanceResult:
    """
    Validate a sample and solve its unknown value(s).

    Returns:
        BalanceResult with status "Invalid Input" when the sample is
        rejected, "Invalid Result" when a solved concentration is negative,
        "Calculation Error" on an internal error, or one of the
        "Calculation Complete" statuses on success.
    """
    validation = validate_for_calculation(sample)
    if not validation.is_valid:
        logger.info(f"Sample rejected: {validation.message}")
        return _failure(BalanceStatus.INVALID_INPUT, validation.message)

    try:
        solver = _SOLVERS.get(validation.mode)
        if solver is None:
            raise UnsupportedModeError(validation.mode)

        result = solver(
            sample,
            validation.unknown_parameter,
            validation.second_unknown_parameter,
        )
    except Exception as e:
        logger.error(f"Water balance calculation failed: {e}", exc_info=True)
        return _failure(BalanceStatus.CALCULATION_ERROR, f"Calculation error: {e}")

    if result.is_success:
        solved = f"{result.solved_property}={result.solved_value:.3f}"
        if result.second_solved_property is not None:
            solved += f", {result.second_solved_property}={result.second_solved_value:.3f}"
        logger.info(f"{result.status}: {solved}")
    return result
