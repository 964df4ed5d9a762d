"""Tests for cost-of-carry forwards and Black-76."""

import math

import pytest

from hedging.engine import create_default_engine
from hedging.errors import InvalidParameter, UnsupportedInstrument
from hedging.market import MarketModel
from hedging.models import (
    black76,
    commodity_forward,
    cost_of_carry,
    forward_components,
    forward_rate,
    garman_kohlhagen,
)
from hedging.products import InstrumentLeg, InstrumentType, StrikeSpec


def test_cost_of_carry() -> None:
    """b = r + storage - convenience yield."""
    assert abs(cost_of_carry(0.05, 0.02, 0.03) - 0.04) < 1e-15
    assert cost_of_carry(0.05) == 0.05


def test_forward_components_contango_and_backwardation() -> None:
    contango = forward_components(80.0, 0.05, 0.02, 0.01, 1.0)
    assert abs(contango.cost_of_carry - 0.06) < 1e-15
    assert abs(contango.forward - 80.0 * math.exp(0.06)) < 1e-12
    assert contango.is_contango and contango.basis > 0

    backwardation = forward_components(80.0, 0.05, 0.0, 0.10, 1.0)
    assert not backwardation.is_contango
    assert backwardation.basis < 0


def test_commodity_forward_matches_fx_forward() -> None:
    """With b = r_d - r_f the commodity forward is the CIP forward."""
    assert abs(commodity_forward(1.10, 0.03, 2.0) - forward_rate(1.10, 0.05, 0.02, 2.0)) < 1e-12
    assert commodity_forward(1.10, 0.03, 0.0) == 1.10
    with pytest.raises(InvalidParameter):
        commodity_forward(1.10, 0.03, -1.0)


@pytest.mark.parametrize("option", ["call", "put"])
@pytest.mark.parametrize(
    "spot,strike,rd,rf,t,sigma",
    [
        (1.10, 1.12, 0.05, 0.02, 1.0, 0.10),
        (1.56, 1.60, 0.06, 0.08, 0.5, 0.12),
        (150.0, 140.0, 0.0, 0.03, 2.0, 0.35),
    ],
)
def test_garman_kohlhagen_is_black76_with_fx_carry(option, spot, strike, rd, rf, t, sigma) -> None:
    gk = garman_kohlhagen(option, spot, strike, rd, rf, t, sigma)
    b76 = black76(option, spot, strike, rd, rd - rf, t, sigma)
    assert abs(gk - b76) < 1e-14


def test_black76_put_call_parity_on_forward() -> None:
    """call - put == e^{-r t} (F - K)."""
    spot, strike, rate, carry, t, sigma = 80.0, 82.0, 0.05, 0.04, 0.75, 0.3
    call = black76("call", spot, strike, rate, carry, t, sigma)
    put = black76("put", spot, strike, rate, carry, t, sigma)
    fwd = commodity_forward(spot, carry, t)
    assert abs((call - put) - math.exp(-rate * t) * (fwd - strike)) < 1e-10


def test_black76_validation() -> None:
    with pytest.raises(InvalidParameter, match="volatility"):
        black76("call", 80.0, 82.0, 0.05, 0.04, 1.0, 0.0)
    with pytest.raises(InvalidParameter, match="time"):
        black76("put", 80.0, 82.0, 0.05, 0.04, 0.0, 0.3)
    with pytest.raises(UnsupportedInstrument):
        black76("oneTouch", 80.0, 82.0, 0.05, 0.04, 1.0, 0.3)


def test_engine_prices_commodity_market_with_black76() -> None:
    """A commodity snapshot carries b through r_d - r_f, so the default engine prices Black-76."""
    market = MarketModel.commodity(
        spot=80.0, rate=0.05, volatility=0.3, time_to_maturity=1.0, storage_cost=0.02, convenience_yield=0.01
    )
    assert abs(market.cost_of_carry - 0.06) < 1e-15
    assert abs(market.forward - forward_components(80.0, 0.05, 0.02, 0.01, 1.0).forward) < 1e-12

    leg = InstrumentLeg(type=InstrumentType.CALL, strike=StrikeSpec.absolute(85.0))
    premium = create_default_engine().price_leg(leg, market)
    assert abs(premium - black76("call", 80.0, 85.0, 0.05, 0.06, 1.0, 0.3)) < 1e-12
