"""Pricer implementations for the registry-based pricing engine."""

from hedging.pricers.barrier_pricer import BarrierPricer
from hedging.pricers.base import BasePricer
from hedging.pricers.digital_pricer import DigitalPricer
from hedging.pricers.forward_pricer import ForwardPricer
from hedging.pricers.vanilla_pricer import VanillaPricer

__all__ = [
    "BarrierPricer",
    "BasePricer",
    "DigitalPricer",
    "ForwardPricer",
    "VanillaPricer",
]
