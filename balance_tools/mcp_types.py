"""
MCP Common Types and Enums

Provides shared types for MCP tool inputs and responses including:
- ResponseFormat enum for JSON/Markdown output
- WaterBalanceInput, the tolerant tool input for a lab report
- Markdown rendering of result payloads
"""

import logging
import math
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .water_sample import ALL_PARAMETERS, WaterParameter, WaterSample

logger = logging.getLogger(__name__)


class ResponseFormat(str, Enum):
    """
    Output format for tool responses.

    JSON: Machine-readable structured data (default)
    MARKDOWN: Human-readable formatted text for display
    """
    JSON = "json"
    MARKDOWN = "markdown"


class BaseToolInput(BaseModel):
    """
    Base class for tool inputs with common fields.

    All tool input models should inherit from this to get
    response_format support automatically.
    """
    model_config = ConfigDict(use_enum_values=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.JSON,
        description="Output format: 'json' for machine-readable or 'markdown' for human-readable"
    )


# Accept both canonical names ("Calcium") and field names ("ca_mg_l")
_PARAMETER_KEYS: Dict[str, WaterParameter] = {
    **{p.value: p for p in ALL_PARAMETERS},
    **{p.field_name: p for p in ALL_PARAMETERS},
}


def parse_measurement(raw: Any, parameter: Optional[WaterParameter] = None) -> Optional[float]:
    """
    Parse one report field into an optional number.

    Blank or unparseable text and non-finite numbers mean "missing", never
    an error. Negative numbers are kept so the validator can report them.
    """
    if raw is None or isinstance(raw, bool):
        value = None
    elif isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            value = None
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except (ValueError, OverflowError):
            value = None
    else:
        value = None

    if value is None or not math.isfinite(value):
        if raw is not None and not (isinstance(raw, str) and not raw.strip()):
            name = parameter.value if parameter else "value"
            logger.warning(f"Unparseable {name} {raw!r}, treating as missing")
        return None
    return value


class WaterBalanceInput(BaseToolInput):
    """
    Input for the water balance tools.

    Report fields are given flat, by canonical name or field name, as numbers
    or text. Leave the unknown value(s) out or blank.

    Example:
        {
            "Calcium": "",
            "Magnesium": 12,
            "Sodium": "23",
            "Potassium": 39,
            "Chloride": 35.5,
            "Fluoride": 19,
            "Nitrate": 14,
            "Sulfate": 48,
            "TotalAlkalinity": 50,
            "Conductivity": 250
        }
    """
    model_config = ConfigDict(extra="forbid")

    measurements: Dict[str, Optional[float]] = Field(
        default_factory=dict,
        description="Parsed report values keyed by canonical parameter name"
    )

    @model_validator(mode="before")
    @classmethod
    def collect_measurements(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        nested = data.pop("measurements", None) or {}
        if not isinstance(nested, dict):
            raise ValueError("measurements must be an object keyed by parameter name")
        raw_values = dict(nested)
        for key in list(data):
            if key in _PARAMETER_KEYS:
                raw_values[key] = data.pop(key)

        measurements = {}
        for key, raw in raw_values.items():
            parameter = _PARAMETER_KEYS.get(key)
            if parameter is None:
                # Left for extra="forbid" to report
                data[key] = raw
                continue
            measurements[parameter.value] = parse_measurement(raw, parameter)
        data["measurements"] = measurements
        return data

    def to_sample(self) -> WaterSample:
        return WaterSample(**self.measurements)


def format_as_markdown(data: Dict[str, Any], title: str = "Results") -> str:
    """
    Convert structured data to markdown format.

    Args:
        data: Dictionary to format
        title: Title for the markdown document

    Returns:
        Markdown-formatted string
    """
    lines = [f"# {title}", ""]

    def format_scalar(value: Any) -> str:
        if value is None:
            return "-"
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, float):
            if value != 0 and (abs(value) < 0.01 or abs(value) > 10000):
                return f"{value:.3e}"
            return f"{value:.3f}"
        return str(value)

    for key, value in data.items():
        formatted_key = key.replace("_", " ").title()

        if isinstance(value, dict):
            lines.append(f"## {formatted_key}")
            lines.append("")
            for k, v in value.items():
                lines.append(f"- **{k}**: {format_scalar(v)}")
            lines.append("")

        elif isinstance(value, list):
            lines.append(f"## {formatted_key}")
            lines.append("")
            if not value:
                lines.append("(empty)")
            for item in value:
                lines.append(f"- {format_scalar(item)}")
            lines.append("")

        else:
            lines.append(f"- **{formatted_key}**: {format_scalar(value)}")

    return "\n".join(lines)
