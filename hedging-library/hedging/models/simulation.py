"""
Geometric Brownian motion path generation for the Monte-Carlo models.

Paths are simulated step by step across all simulations at once, so only one
vector of `n_sims` spots (plus running min/max) is held in memory. Running
extremes start at the initial spot: a barrier sitting exactly on spot counts
as touched at inception.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from hedging.errors import InvalidParameter, SimulationNonConvergence

logger = logging.getLogger(__name__)

DEFAULT_MIN_STEPS = 100
DEFAULT_MAX_STEP_VARIANCE = 1e-4


@dataclass(frozen=True)
class PathSummary:
    """Per-path terminal spot and running extremes."""

    terminal: np.ndarray
    path_min: np.ndarray
    path_max: np.ndarray


def step_count(
    t: float,
    sigma: float,
    min_steps: int = DEFAULT_MIN_STEPS,
    max_step_variance: float = DEFAULT_MAX_STEP_VARIANCE,
) -> int:
    """Steps per path: max(min_steps, ceil(t * sigma^2 / max_step_variance))."""
    return max(min_steps, math.ceil(t * sigma * sigma / max_step_variance))


def check_sims(n_sims: int) -> None:
    if n_sims <= 0:
        raise InvalidParameter(f"n_sims must be positive, got {n_sims}")


def simulate_terminal(
    spot: float,
    drift: float,
    sigma: float,
    t: float,
    n_sims: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Exact GBM terminal spots: S * exp((drift - sigma^2/2) t + sigma sqrt(t) Z)."""
    z = rng.standard_normal(n_sims)
    return spot * np.exp((drift - 0.5 * sigma * sigma) * t + sigma * math.sqrt(t) * z)


def simulate_paths(
    spot: float,
    drift: float,
    sigma: float,
    t: float,
    n_sims: int,
    rng: np.random.Generator,
    min_steps: int = DEFAULT_MIN_STEPS,
    max_step_variance: float = DEFAULT_MAX_STEP_VARIANCE,
) -> PathSummary:
    """Discretised GBM paths, tracking each path's minimum and maximum."""
    n_steps = step_count(t, sigma, min_steps, max_step_variance)
    dt = t / n_steps
    mu = (drift - 0.5 * sigma * sigma) * dt
    vol = sigma * math.sqrt(dt)
    logger.debug("simulating %d paths x %d steps (t=%s, sigma=%s)", n_sims, n_steps, t, sigma)

    log_spot = np.full(n_sims, math.log(spot))
    path_min = np.full(n_sims, spot)
    path_max = np.full(n_sims, spot)
    for _ in range(n_steps):
        log_spot += mu + vol * rng.standard_normal(n_sims)
        current = np.exp(log_spot)
        np.minimum(path_min, current, out=path_min)
        np.maximum(path_max, current, out=path_max)
    return PathSummary(terminal=np.exp(log_spot), path_min=path_min, path_max=path_max)


def discounted_mean(
    payoffs: np.ndarray,
    discount: float,
    max_std_error: Optional[float] = None,
) -> float:
    """
    Discounted sample mean of `payoffs`.

    With `max_std_error` set, the discounted standard error of the estimator is
    checked and SimulationNonConvergence raised when it is larger.
    """
    estimate = discount * float(np.mean(payoffs))
    if max_std_error is not None and payoffs.size > 1:
        std_error = discount * float(np.std(payoffs, ddof=1)) / math.sqrt(payoffs.size)
        if std_error > max_std_error:
            raise SimulationNonConvergence(
                f"standard error {std_error:.6g} exceeds tolerance {max_std_error:.6g} "
                f"with {payoffs.size} simulations",
                std_error=std_error,
                tolerance=max_std_error,
            )
    return estimate
