"""Tests for the payoff curve generator."""

import pytest

from hedging.errors import InvalidParameter, UnsupportedInstrument
from hedging.market import MarketModel
from hedging.payoff import LevelAnchor, PayoffCurveGenerator, effective_rate, generate_curve
from hedging.products import BarrierSpec, InstrumentLeg, InstrumentType, Strategy, StrikeSpec

REF = 1.10


def _strategy(*legs: InstrumentLeg) -> Strategy:
    return Strategy(legs=list(legs))


def _call(strike: float, quantity: float = 100.0) -> InstrumentLeg:
    return InstrumentLeg(type=InstrumentType.CALL, strike=StrikeSpec.absolute(strike), quantity=quantity)


def _put(strike: float, quantity: float = 100.0) -> InstrumentLeg:
    return InstrumentLeg(type=InstrumentType.PUT, strike=StrikeSpec.absolute(strike), quantity=quantity)


def _forward(strike: float, quantity: float = 100.0) -> InstrumentLeg:
    return InstrumentLeg(type=InstrumentType.FORWARD, strike=StrikeSpec.absolute(strike), quantity=quantity)


class StubPricing:
    """PricingLibrary stand-in returning fixed premiums (or raising)."""

    def __init__(self, premium: float = 0.03, error: Exception = None) -> None:
        self.premium = premium
        self.error = error
        self.markets = []

    def price_leg(self, leg, market) -> float:
        self.markets.append(market)
        if self.error is not None:
            raise self.error
        return self.premium

    def price_strategy(self, strategy, market) -> list:
        return [self.price_leg(leg, market) for leg in strategy]


def test_curve_shape() -> None:
    """101 points spanning [0.7 ref, 1.3 ref], strictly increasing."""
    curve = generate_curve(_strategy(_call(1.12)), REF)
    assert len(curve) == 101
    assert abs(curve[0].spot - 0.7 * REF) < 1e-12
    assert abs(curve[-1].spot - 1.3 * REF) < 1e-12
    assert all(a.spot < b.spot for a, b in zip(curve, curve[1:]))
    assert all(p.unhedged_rate == p.spot for p in curve)


def test_empty_strategy_is_unhedged() -> None:
    """No legs: hedged == unhedged == spot, premium never added."""
    for point in generate_curve(Strategy(), REF, include_premium=True, real_premium=0.5):
        assert point.hedged_rate == point.unhedged_rate == point.spot


def test_full_forward_pins_the_rate() -> None:
    """Forward at 1.08 on 100% of notional: hedged rate is 1.08 everywhere."""
    for point in generate_curve(_strategy(_forward(1.08)), REF):
        assert point.hedged_rate == 1.08


def test_partial_forward_blends_with_spot() -> None:
    rate = effective_rate(_strategy(_forward(1.08, quantity=60.0)), 1.20, REF)
    assert abs(rate - (1.08 * 0.6 + 1.20 * 0.4)) < 1e-12


def test_half_hedged_call() -> None:
    """Call 1.12 x 50 at s=1.20: 1.20 - (1.20 - 1.12) * 0.5 == 1.16."""
    rate = effective_rate(_strategy(_call(1.12, quantity=50.0)), 1.20, REF)
    assert abs(rate - 1.16) < 1e-12


def test_option_moneyness_and_direction() -> None:
    """Out of the money (or exactly at the strike) leaves the rate unchanged; shorts flip sign."""
    assert effective_rate(_strategy(_call(1.12)), 1.12, REF) == 1.12
    assert effective_rate(_strategy(_call(1.12)), 1.00, REF) == 1.00
    assert abs(effective_rate(_strategy(_call(1.12, quantity=-50.0)), 1.20, REF) - 1.24) < 1e-12
    assert abs(effective_rate(_strategy(_put(1.05)), 1.00, REF) - 0.95) < 1e-12
    assert abs(effective_rate(_strategy(_put(1.05, quantity=-100.0)), 1.00, REF) - 1.05) < 1e-12


def test_leg_effects_overwrite() -> None:
    """The last active leg wins; effects are not summed."""
    two_calls = _strategy(_call(1.12, quantity=50.0), _call(1.15))
    assert abs(effective_rate(two_calls, 1.20, REF) - 1.15) < 1e-12

    # The second call is out of the money at 1.14, so the first one's effect survives.
    assert abs(effective_rate(two_calls, 1.14, REF) - 1.13) < 1e-12

    # A later forward always overwrites; an earlier one is overwritten by an active option.
    assert effective_rate(_strategy(_call(1.12), _forward(1.08)), 1.20, REF) == 1.08
    assert abs(effective_rate(_strategy(_forward(1.08), _call(1.12, quantity=50.0)), 1.20, REF) - 1.16) < 1e-12

    swap = InstrumentLeg(type=InstrumentType.SWAP, strike=StrikeSpec.absolute(1.09), quantity=30.0)
    assert effective_rate(_strategy(_put(1.05), swap), 0.90, REF) == 1.09


def test_barrier_legs_use_static_condition() -> None:
    """Knock-outs stop protecting once spot is past the barrier; knock-ins start."""
    ko_call = InstrumentLeg(
        type=InstrumentType.KNOCKOUT_CALL, strike=StrikeSpec.absolute(1.10), barrier=BarrierSpec.absolute(1.25)
    )
    assert abs(effective_rate(_strategy(ko_call), 1.20, REF) - 1.10) < 1e-12
    assert effective_rate(_strategy(ko_call), 1.30, REF) == 1.30

    ki_put = InstrumentLeg(
        type=InstrumentType.KNOCKIN_PUT, strike=StrikeSpec.absolute(1.05), barrier=BarrierSpec.absolute(0.95)
    )
    assert abs(effective_rate(_strategy(ki_put), 0.90, REF) - 0.75) < 1e-12
    assert effective_rate(_strategy(ki_put), 1.00, REF) == 1.00


def test_digital_legs_apply_rebate() -> None:
    one_touch = InstrumentLeg(type=InstrumentType.ONE_TOUCH, barrier=BarrierSpec.absolute(1.15))
    assert abs(effective_rate(_strategy(one_touch), 1.20, REF) - 1.20 * 0.95) < 1e-12
    assert effective_rate(_strategy(one_touch), 1.00, REF) == 1.00

    dnt = InstrumentLeg(
        type=InstrumentType.DOUBLE_NO_TOUCH,
        barrier=BarrierSpec.absolute(1.20),
        second_barrier=BarrierSpec.absolute(1.00),
        quantity=-100.0,
    )
    assert abs(effective_rate(_strategy(dnt), 1.10, REF) - 1.10 * 1.05) < 1e-12
    assert effective_rate(_strategy(dnt), 1.25, REF) == 1.25

    outside = InstrumentLeg(
        type=InstrumentType.OUTSIDE_BINARY,
        strike=StrikeSpec.absolute(1.00),
        barrier=BarrierSpec.absolute(1.20),
        rebate=10.0,
        quantity=50.0,
    )
    assert abs(effective_rate(_strategy(outside), 0.90, REF) - 0.90 * 0.95) < 1e-12
    assert effective_rate(_strategy(outside), 1.10, REF) == 1.10


def test_double_barrier_order_does_not_matter() -> None:
    """Swapping barrier and second_barrier gives the same static condition."""
    for leg_type in (InstrumentType.DOUBLE_TOUCH, InstrumentType.DOUBLE_NO_TOUCH):
        upper_first = InstrumentLeg(
            type=leg_type, barrier=BarrierSpec.absolute(1.20), second_barrier=BarrierSpec.absolute(1.00)
        )
        lower_first = InstrumentLeg(
            type=leg_type, barrier=BarrierSpec.absolute(1.00), second_barrier=BarrierSpec.absolute(1.20)
        )
        for spot in (0.95, 1.10, 1.25):
            assert effective_rate(_strategy(upper_first), spot, REF) == effective_rate(
                _strategy(lower_first), spot, REF
            )

    double_touch = InstrumentLeg(
        type=InstrumentType.DOUBLE_TOUCH,
        barrier=BarrierSpec.absolute(1.00),
        second_barrier=BarrierSpec.absolute(1.20),
    )
    assert effective_rate(_strategy(double_touch), 1.10, REF) == 1.10
    assert abs(effective_rate(_strategy(double_touch), 1.25, REF) - 1.25 * 0.95) < 1e-12


def test_explicit_premiums_shift_curve_by_constant() -> None:
    """Long legs pay their premium, short legs receive it, constant across the curve."""
    strategy = _strategy(_call(1.12), _put(1.00, quantity=-100.0))
    bare = generate_curve(strategy, REF)
    with_premium = generate_curve(strategy, REF, include_premium=True, premiums=[0.03, 0.01])
    for a, b in zip(bare, with_premium):
        assert abs((b.hedged_rate - a.hedged_rate) - 0.02) < 1e-12


def test_real_premium_substituted_for_every_leg() -> None:
    strategy = _strategy(_call(1.12, quantity=50.0))
    bare = generate_curve(strategy, REF)
    curve = generate_curve(strategy, REF, include_premium=True, real_premium=0.004)
    assert all(abs((b.hedged_rate - a.hedged_rate) - 0.004) < 1e-12 for a, b in zip(bare, curve))


def test_heuristic_premium() -> None:
    """Without priced premiums: 1% per unit hedge ratio for options, nothing for forwards."""
    call = _strategy(_call(1.12, quantity=50.0))
    assert abs(effective_rate(call, 1.00, REF, include_premium=True) - 1.005) < 1e-12
    assert effective_rate(_strategy(_forward(1.08)), 1.00, REF, include_premium=True) == 1.08

    one_touch = _strategy(InstrumentLeg(type=InstrumentType.ONE_TOUCH, barrier=BarrierSpec.absolute(1.15)))
    # Touched: p = 1, premium = 1 * 5% * 0.95.
    expected = 1.20 * 0.95 + 0.05 * 0.95
    assert abs(effective_rate(one_touch, 1.20, REF, include_premium=True) - expected) < 1e-12


def test_premium_list_must_match_legs() -> None:
    with pytest.raises(InvalidParameter, match="2 premiums for a strategy of 1 legs"):
        generate_curve(_strategy(_call(1.12)), REF, include_premium=True, premiums=[0.01, 0.02])


def test_reference_spot_must_be_positive() -> None:
    with pytest.raises(InvalidParameter):
        generate_curve(_strategy(_call(1.12)), 0.0)
    with pytest.raises(InvalidParameter):
        generate_curve(_strategy(_call(1.12)), -1.1)


def test_injected_pricing_library_priced_at_reference() -> None:
    """With a market, the injected library prices each leg once at the reference spot."""
    pricing = StubPricing(premium=0.03)
    generator = PayoffCurveGenerator(pricing=pricing)
    market = MarketModel(spot=1.25, domestic_rate=0.05, foreign_rate=0.02, volatility=0.1, time_to_maturity=1.0)
    strategy = _strategy(_call(1.12))
    bare = generator.generate(strategy, REF)
    curve = generator.generate(strategy, REF, include_premium=True, market=market)
    assert len(pricing.markets) == 1
    assert pricing.markets[0].spot == REF
    assert all(abs((b.hedged_rate - a.hedged_rate) - 0.03) < 1e-12 for a, b in zip(bare, curve))


def test_pricing_errors_propagate_or_fall_back() -> None:
    market = MarketModel(spot=REF, domestic_rate=0.05, foreign_rate=0.02, volatility=0.1, time_to_maturity=1.0)
    strategy = _strategy(_call(1.12, quantity=50.0))
    failing = StubPricing(error=UnsupportedInstrument("no model"))

    with pytest.raises(UnsupportedInstrument):
        PayoffCurveGenerator(pricing=failing).generate(strategy, REF, include_premium=True, market=market)

    lenient = PayoffCurveGenerator(pricing=failing, fallback_to_heuristic=True)
    rate = lenient.effective_rate(strategy, 1.00, REF, include_premium=True, market=market)
    assert abs(rate - 1.005) < 1e-12


def test_level_anchor() -> None:
    """Percent strikes follow the scenario spot by default, or stay at the reference."""
    atm_call = _strategy(InstrumentLeg(type=InstrumentType.CALL, strike=StrikeSpec.percent(100.0)))
    scenario = PayoffCurveGenerator().generate(atm_call, REF)
    assert all(abs(p.hedged_rate - p.spot) < 1e-12 for p in scenario)

    reference = PayoffCurveGenerator(anchor=LevelAnchor.REFERENCE).generate(atm_call, REF)
    assert abs(reference[-1].hedged_rate - REF) < 1e-12
    assert reference[0].hedged_rate == reference[0].spot


def test_rounding_and_custom_grid() -> None:
    generator = PayoffCurveGenerator(points=11, lower=0.9, upper=1.1, decimals=4)
    curve = generator.generate(_strategy(_call(1.12, quantity=50.0)), REF)
    assert len(curve) == 11
    assert curve[0].spot == 0.99
    assert curve[-1].spot == 1.21
    assert curve[-1].hedged_rate == round(1.21 - (1.21 - 1.12) * 0.5, 4)

    with pytest.raises(InvalidParameter):
        PayoffCurveGenerator(points=1)
    with pytest.raises(InvalidParameter):
        PayoffCurveGenerator(lower=1.2, upper=1.1)
