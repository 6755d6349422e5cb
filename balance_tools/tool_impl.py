"""
Water Balance Tool Implementations

Synchronous implementations behind the MCP tools registered in server.py.
Kept separate from the server module so they can be called and tested
without starting the server or configuring its log handlers.
"""

import json
import logging
from typing import Any, Dict, Union

from pydantic import ValidationError

from .balance_calculator import calculate_water_balance
from .core_config import CONFIG
from .exceptions import InvalidWaterSampleError
from .mcp_types import ResponseFormat, WaterBalanceInput, format_as_markdown
from .sample_validator import validate_for_calculation

logger = logging.getLogger(__name__)

EXAMPLE_INPUT = {
    "Calcium": "",
    "Magnesium": 12,
    "Sodium": 23,
    "Potassium": 39,
    "Chloride": 35.5,
    "Fluoride": 19,
    "Nitrate": 14,
    "Sulfate": 48,
    "TotalAlkalinity": 50,
    "Conductivity": 250,
}


def parse_tool_input(sample_input: Union[str, Dict[str, Any]]) -> WaterBalanceInput:
    """
    Turn a raw tool payload into a WaterBalanceInput.

    Raises:
        InvalidWaterSampleError: If the payload is not a JSON object, is too
            large, or contains fields that are not report parameters
    """
    # Handle both string and object inputs
    if isinstance(sample_input, str):
        try:
            sample_input = json.loads(sample_input)
        except json.JSONDecodeError as e:
            raise InvalidWaterSampleError(
                "Invalid JSON input",
                hint="Input must be a valid JSON object or dict"
            ) from e

    if not isinstance(sample_input, dict):
        raise InvalidWaterSampleError(
            "Input must be a JSON object",
            hint=f"Example: {json.dumps(EXAMPLE_INPUT)}"
        )

    input_size = len(json.dumps(sample_input))
    if input_size > CONFIG.MAX_REQUEST_SIZE_BYTES:
        raise InvalidWaterSampleError(
            f"Request size {input_size} bytes exceeds maximum {CONFIG.MAX_REQUEST_SIZE_BYTES} bytes",
            hint="Please reduce the size of your request"
        )

    try:
        return WaterBalanceInput(**sample_input)
    except ValidationError as e:
        invalid_fields = {
            ".".join(str(part) for part in error["loc"]) or "input": error["msg"]
            for error in e.errors()
        }
        raise InvalidWaterSampleError(
            "Invalid water sample input",
            invalid_fields=invalid_fields,
            hint="Use the report parameter names, e.g. Calcium, TotalAlkalinity, Conductivity"
        ) from e


def _render(output: Dict[str, Any], response_format: str, title: str) -> Dict[str, Any]:
    if response_format == ResponseFormat.MARKDOWN.value:
        return {"format": ResponseFormat.MARKDOWN.value, "content": format_as_markdown(output, title)}
    return output


def validate_water_sample_impl(sample_input: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Classify a lab report into a calculation mode without solving it."""
    try:
        tool_input = parse_tool_input(sample_input)
    except InvalidWaterSampleError as e:
        logger.error(f"Validation request rejected: {e}")
        return e.to_dict()

    sample = tool_input.to_sample()
    validation = validate_for_calculation(sample)

    output = validation.model_dump(mode="json")
    output["unknown_parameters"] = [p.value for p in validation.unknown_parameters]
    output["sample"] = sample.model_dump(by_alias=True)
    return _render(output, tool_input.response_format, "Water Sample Validation")


def calculate_water_balance_impl(sample_input: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Solve the unknown value(s) of a lab report."""
    try:
        tool_input = parse_tool_input(sample_input)
    except InvalidWaterSampleError as e:
        logger.error(f"Calculation request rejected: {e}")
        return e.to_dict()

    sample = tool_input.to_sample()
    result = calculate_water_balance(sample)

    output = result.model_dump(mode="json")
    output["is_success"] = result.is_success
    output["sample"] = sample.model_dump(by_alias=True)
    return _render(output, tool_input.response_format, "Water Balance")


def get_equivalent_weights_impl() -> Dict[str, Any]:
    """Equivalent weight table and conductivity factor used by the calculator."""
    return {
        "equivalent_weights_mg_per_meq": {
            parameter.value: weight
            for parameter, weight in CONFIG.get_equiv_weights().items()
        },
        "conductivity_factor_us_cm_per_meq_l": CONFIG.CONDUCTIVITY_CONVERSION_FACTOR,
    }
