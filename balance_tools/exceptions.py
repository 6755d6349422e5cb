"""
Custom exception hierarchy for Water Balance MCP.

The public calculation entry points never raise; these exceptions are used
internally and converted to result records at the calculation boundary, or
to error payloads at the MCP server boundary.
All exceptions inherit from WaterBalanceError for easy catching.
"""
from typing import Any, Dict, List, Optional


class WaterBalanceError(Exception):
    """Base exception for all Water Balance MCP errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
        hint: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        parts = [self.message]
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"[{details_str}]")
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for MCP error responses."""
        result = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.hint:
            result["hint"] = self.hint
        return result


# =============================================================================
# Calculation-Related Exceptions
# =============================================================================

class CalculationError(WaterBalanceError):
    """Base exception for internal calculation invariant violations."""
    pass


class UnknownParameterError(CalculationError):
    """A parameter without an equivalent weight reached the weight table."""

    def __init__(self, parameter: Any, known: Optional[List[str]] = None):
        name = getattr(parameter, "value", parameter)
        details = {"parameter": str(name)}
        if known:
            details["known_parameters"] = ", ".join(known)
        super().__init__(
            message=f"Unknown property: {name}",
            details=details
        )
        self.parameter = parameter


class UnsupportedModeError(CalculationError):
    """A calculation mode with no solver reached dispatch."""

    def __init__(self, mode: Any):
        name = getattr(mode, "value", mode)
        super().__init__(
            message=f"Unsupported calculation mode: {name}",
            details={"mode": str(name)}
        )
        self.mode = mode


# =============================================================================
# Input-Related Exceptions
# =============================================================================

class InvalidWaterSampleError(WaterBalanceError):
    """Tool payload could not be turned into a water sample."""

    def __init__(
        self,
        message: str,
        invalid_fields: Optional[Dict[str, str]] = None,
        hint: Optional[str] = None
    ):
        details = {"invalid_fields": invalid_fields} if invalid_fields else None
        super().__init__(message=message, details=details, hint=hint)
