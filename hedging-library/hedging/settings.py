"""
Pricing settings: model choice and Monte-Carlo sizing.

Defaults: Garman-Kohlhagen vanillas, closed-form barriers, 1,000 paths for
vanilla/barrier simulation and 10,000 for digitals. `from_env()` lets a
deployment override them with HEDGING_* variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from hedging.errors import InvalidParameter

VANILLA_MODELS = ("garman-kohlhagen", "monte-carlo")
BARRIER_MODELS = ("closed-form", "monte-carlo")


@dataclass(frozen=True)
class PricingSettings:
    """
    - vanilla_model: "garman-kohlhagen" (closed form) or "monte-carlo".
    - barrier_model: "closed-form" or "monte-carlo". Double barriers always simulate.
    - n_sims / digital_n_sims: paths per Monte-Carlo valuation.
    - seed: fixed seed for reproducible simulations (None = fresh entropy).
    - min_steps / max_step_variance: path discretisation; steps per path are
      max(min_steps, ceil(t * sigma^2 / max_step_variance)).
    - max_std_error: raise SimulationNonConvergence above this standard error.
    """

    vanilla_model: str = "garman-kohlhagen"
    barrier_model: str = "closed-form"
    n_sims: int = 1000
    digital_n_sims: int = 10000
    seed: Optional[int] = None
    min_steps: int = 100
    max_step_variance: float = 1e-4
    max_std_error: Optional[float] = None

    def __post_init__(self) -> None:
        if self.vanilla_model not in VANILLA_MODELS:
            raise InvalidParameter(
                f"vanilla_model must be one of {VANILLA_MODELS}, got {self.vanilla_model!r}"
            )
        if self.barrier_model not in BARRIER_MODELS:
            raise InvalidParameter(
                f"barrier_model must be one of {BARRIER_MODELS}, got {self.barrier_model!r}"
            )
        if self.n_sims <= 0 or self.digital_n_sims <= 0:
            raise InvalidParameter("n_sims and digital_n_sims must be positive")
        if self.min_steps <= 0 or self.max_step_variance <= 0:
            raise InvalidParameter("min_steps and max_step_variance must be positive")
        if self.max_std_error is not None and self.max_std_error <= 0:
            raise InvalidParameter("max_std_error must be positive when set")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PricingSettings":
        """Build settings from HEDGING_* environment variables (unset -> default)."""
        env = os.environ if environ is None else environ
        defaults = cls()
        seed = env.get("HEDGING_SEED")
        max_std_error = env.get("HEDGING_MAX_STD_ERROR")
        try:
            n_sims = int(env.get("HEDGING_N_SIMS", defaults.n_sims))
            digital_n_sims = int(env.get("HEDGING_DIGITAL_N_SIMS", defaults.digital_n_sims))
            min_steps = int(env.get("HEDGING_MIN_STEPS", defaults.min_steps))
            max_step_variance = float(
                env.get("HEDGING_MAX_STEP_VARIANCE", defaults.max_step_variance)
            )
            parsed_seed = int(seed) if seed else None
            parsed_tolerance = float(max_std_error) if max_std_error else None
        except ValueError as exc:
            raise InvalidParameter(f"invalid HEDGING_* setting: {exc}") from exc
        return cls(
            vanilla_model=env.get("HEDGING_VANILLA_MODEL", defaults.vanilla_model),
            barrier_model=env.get("HEDGING_BARRIER_MODEL", defaults.barrier_model),
            n_sims=n_sims,
            digital_n_sims=digital_n_sims,
            seed=parsed_seed,
            min_steps=min_steps,
            max_step_variance=max_step_variance,
            max_std_error=parsed_tolerance,
        )
