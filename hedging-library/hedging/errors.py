"""
Typed pricing errors.

A leg that cannot be valued raises one of these; no model returns a sentinel
premium. All of them derive from `ValueError`.
"""

from __future__ import annotations

from typing import Any


class PricingError(ValueError):
    """Base class for every error raised by the hedging engine."""

    code = "pricing_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serializable form for API error payloads."""
        result: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            result["details"] = self.details
        return result

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions; copied onto the GraphQL error when raised in a resolver."""
        return {"code": self.code, **self.details}


class InvalidParameter(PricingError):
    """Non-positive spot/vol/time, zero quantity, malformed strike or barrier."""

    code = "invalid_parameter"


class UnsupportedInstrument(PricingError):
    """Leg type / parameter combination that no model implements."""

    code = "unsupported_instrument"


class NumericalInstability(PricingError):
    """Intermediate quantities (e.g. sigma*sqrt(t), d1, d2) are not usable."""

    code = "numerical_instability"


class SimulationNonConvergence(PricingError):
    """Monte-Carlo standard error above the configured tolerance."""

    code = "simulation_non_convergence"

    def __init__(self, message: str, std_error: float, tolerance: float) -> None:
        super().__init__(message, details={"std_error": std_error, "tolerance": tolerance})
        self.std_error = std_error
        self.tolerance = tolerance
