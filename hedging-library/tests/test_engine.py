"""Tests for the pricer registry, model selection and entry points."""

import pytest

from hedging.engine import PricingEngine, create_default_engine
from hedging.errors import PricingError, UnsupportedInstrument
from hedging.market import MarketModel
from hedging.models import barrier_closed_form, barrier_monte_carlo, garman_kohlhagen
from hedging.pricers import BasePricer
from hedging.pricing import forward_rate_for, price_leg, price_strategy
from hedging.products import BarrierSpec, InstrumentLeg, InstrumentType, Strategy, StrikeSpec
from hedging.settings import PricingSettings

MARKET = MarketModel(spot=1.10, domestic_rate=0.05, foreign_rate=0.02, volatility=0.10, time_to_maturity=1.0)


def _leg(leg_type, **kwargs) -> InstrumentLeg:
    return InstrumentLeg(type=leg_type, **kwargs)


def test_custom_pricer_registration() -> None:
    """Custom pricers can be registered with the engine and used for dispatch."""

    class FlatPricer(BasePricer):
        def can_price(self, leg) -> bool:
            return leg.type is InstrumentType.CALL

        def premium(self, leg, market) -> float:
            return 0.123

    engine = PricingEngine()
    engine.register(FlatPricer())
    call = _leg(InstrumentType.CALL, strike=StrikeSpec.absolute(1.1))
    assert engine.price_leg(call, MARKET) == 0.123

    put = _leg(InstrumentType.PUT, strike=StrikeSpec.absolute(1.1))
    with pytest.raises(UnsupportedInstrument, match="No pricer registered for put"):
        engine.price_leg(put, MARKET)


def test_default_engine_prices_every_instrument_type() -> None:
    """Every InstrumentType has a built-in pricer returning a non-negative premium."""
    engine = create_default_engine(PricingSettings(n_sims=500, digital_n_sims=500, seed=1))
    strike = StrikeSpec.absolute(1.10)
    lower, upper = BarrierSpec.absolute(1.00), BarrierSpec.absolute(1.20)
    legs = {
        InstrumentType.FORWARD: dict(strike=strike),
        InstrumentType.SWAP: dict(strike=strike),
        InstrumentType.CALL: dict(strike=strike),
        InstrumentType.PUT: dict(strike=strike),
        InstrumentType.KNOCKOUT_CALL: dict(strike=strike, barrier=upper),
        InstrumentType.KNOCKOUT_PUT: dict(strike=strike, barrier=lower),
        InstrumentType.KNOCKIN_CALL: dict(strike=strike, barrier=upper),
        InstrumentType.KNOCKIN_PUT: dict(strike=strike, barrier=lower),
        InstrumentType.ONE_TOUCH: dict(barrier=upper),
        InstrumentType.NO_TOUCH: dict(barrier=upper),
        InstrumentType.DOUBLE_TOUCH: dict(barrier=upper, second_barrier=lower),
        InstrumentType.DOUBLE_NO_TOUCH: dict(barrier=upper, second_barrier=lower),
        InstrumentType.RANGE_BINARY: dict(strike=StrikeSpec.absolute(1.05), barrier=upper),
        InstrumentType.OUTSIDE_BINARY: dict(strike=StrikeSpec.absolute(1.05), barrier=upper),
    }
    assert set(legs) == set(InstrumentType)
    for leg_type, levels in legs.items():
        premium = engine.price_leg(_leg(leg_type, **levels), MARKET)
        assert premium >= 0, leg_type
        if leg_type.is_linear:
            assert premium == 0.0


def test_vanilla_dispatch_resolves_percent_strike() -> None:
    """A 100% strike is at-the-money spot."""
    engine = create_default_engine()
    atm = _leg(InstrumentType.CALL, strike=StrikeSpec.percent(100.0))
    expected = garman_kohlhagen("call", 1.10, 1.10, 0.05, 0.02, 1.0, 0.10)
    assert abs(engine.price_leg(atm, MARKET) - expected) < 1e-12


def test_leg_overrides_market_volatility_and_time() -> None:
    engine = create_default_engine()
    leg = _leg(InstrumentType.PUT, strike=StrikeSpec.absolute(1.05), volatility=0.2, time_to_payoff=0.5)
    expected = garman_kohlhagen("put", 1.10, 1.05, 0.05, 0.02, 0.5, 0.2)
    assert abs(engine.price_leg(leg, MARKET) - expected) < 1e-12


def test_barrier_model_selection() -> None:
    """Closed form by default; a second barrier always goes to simulation."""
    engine = create_default_engine(PricingSettings(n_sims=2000, seed=4))
    single = _leg(InstrumentType.KNOCKOUT_CALL, strike=StrikeSpec.absolute(1.1), barrier=BarrierSpec.absolute(1.3))
    expected = barrier_closed_form("knockoutCall", 1.10, 1.1, 0.05, 1.0, 0.10, 1.3, foreign_rate=0.02)
    assert abs(engine.price_leg(single, MARKET) - expected) < 1e-12

    double = _leg(
        InstrumentType.KNOCKOUT_CALL,
        strike=StrikeSpec.absolute(1.1),
        barrier=BarrierSpec.absolute(1.3),
        second_barrier=BarrierSpec.absolute(0.95),
    )
    simulated = barrier_monte_carlo(
        "knockoutCall", 1.10, 1.1, 0.05, 1.0, 0.10, 1.3,
        second_barrier=0.95, n_sims=2000, foreign_rate=0.02, seed=4,
    )
    assert engine.price_leg(double, MARKET) == simulated


def test_monte_carlo_vanilla_model() -> None:
    engine = create_default_engine(PricingSettings(vanilla_model="monte-carlo", n_sims=100_000, seed=2))
    leg = _leg(InstrumentType.CALL, strike=StrikeSpec.absolute(1.1))
    exact = garman_kohlhagen("call", 1.10, 1.1, 0.05, 0.02, 1.0, 0.10)
    assert abs(engine.price_leg(leg, MARKET) - exact) < 2e-3


def test_invalid_leg_levels_fail_fast() -> None:
    """A strike resolving to <= 0 is an error, never a zero premium."""
    leg = _leg(InstrumentType.CALL, strike=StrikeSpec.absolute(-1.0))
    with pytest.raises(PricingError, match="must be > 0"):
        create_default_engine().price_leg(leg, MARKET)


def test_entry_points() -> None:
    """price_leg / price_strategy / forward_rate_for wrap the default engine."""
    call = _leg(InstrumentType.CALL, strike=StrikeSpec.absolute(1.12), quantity=50.0)
    fwd = _leg(InstrumentType.FORWARD, strike=StrikeSpec.absolute(1.08))
    premiums = price_strategy(Strategy(legs=[call, fwd]), MARKET)
    assert len(premiums) == 2
    assert premiums[0] == price_leg(call, MARKET)
    assert premiums[1] == 0.0
    assert abs(forward_rate_for(fwd, MARKET) - MARKET.forward) < 1e-12
    with pytest.raises(UnsupportedInstrument, match="no fixed forward rate"):
        forward_rate_for(call, MARKET)


def test_settings_from_env(monkeypatch) -> None:
    """HEDGING_* variables override the defaults."""
    monkeypatch.setenv("HEDGING_VANILLA_MODEL", "monte-carlo")
    monkeypatch.setenv("HEDGING_N_SIMS", "2500")
    monkeypatch.setenv("HEDGING_SEED", "17")
    monkeypatch.delenv("HEDGING_MAX_STD_ERROR", raising=False)
    settings = PricingSettings.from_env()
    assert settings.vanilla_model == "monte-carlo"
    assert settings.barrier_model == "closed-form"
    assert settings.n_sims == 2500
    assert settings.digital_n_sims == 10000
    assert settings.seed == 17
    assert settings.max_std_error is None


def test_settings_from_env_path_discretisation() -> None:
    settings = PricingSettings.from_env(
        {"HEDGING_MIN_STEPS": "250", "HEDGING_MAX_STEP_VARIANCE": "5e-5"}
    )
    assert settings.min_steps == 250
    assert settings.max_step_variance == 5e-5
    assert PricingSettings.from_env({}).min_steps == 100
    with pytest.raises(PricingError, match="positive"):
        PricingSettings.from_env({"HEDGING_MIN_STEPS": "0"})
    with pytest.raises(PricingError, match="invalid HEDGING_"):
        PricingSettings.from_env({"HEDGING_MAX_STEP_VARIANCE": "fine"})


def test_settings_validation() -> None:
    with pytest.raises(PricingError, match="vanilla_model"):
        PricingSettings(vanilla_model="binomial")
    with pytest.raises(PricingError, match="invalid HEDGING_"):
        PricingSettings.from_env({"HEDGING_N_SIMS": "lots"})
    with pytest.raises(PricingError, match="positive"):
        PricingSettings.from_env({"HEDGING_DIGITAL_N_SIMS": "0"})
    assert PricingSettings.from_env({"HEDGING_MAX_STD_ERROR": "0.001"}).max_std_error == 0.001
