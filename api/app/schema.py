"""GraphQL schema: hedge pricing and payoff curve queries."""

from typing import Optional

import strawberry

import hedging
from app.services import (
    forward_components,
    forward_rate,
    implied_volatility,
    payoff_curve,
    price_leg,
    price_strategy,
)
from app.types import (
    ForwardComponentsResult,
    InstrumentLegInput,
    LegPricingResult,
    LevelAnchor,
    MarketModelInput,
    PayoffPoint,
    StrategyInput,
    StrategyPricingResult,
)


@strawberry.type
class Query:
    @strawberry.field
    def version(self) -> str:
        return hedging.__version__

    @strawberry.field
    def forward_rate(self, market: MarketModelInput) -> float:
        """Covered-interest-parity forward S * exp((r_d - r_f) * t)."""
        return forward_rate(market=market)

    @strawberry.field
    def forward_components(
        self,
        spot: float,
        rate: float,
        time_to_maturity: float,
        storage_cost: float = 0.0,
        convenience_yield: float = 0.0,
    ) -> ForwardComponentsResult:
        """Commodity forward S * exp((r + storage - convenience) * t) and its basis."""
        return forward_components(
            spot=spot,
            rate=rate,
            time_to_maturity=time_to_maturity,
            storage_cost=storage_cost,
            convenience_yield=convenience_yield,
        )

    @strawberry.field
    def price_leg(self, leg: InstrumentLegInput, market: MarketModelInput) -> LegPricingResult:
        """Premium per unit of notional for one hedge leg."""
        return price_leg(leg=leg, market=market)

    @strawberry.field
    def price_strategy(
        self, strategy: StrategyInput, market: MarketModelInput
    ) -> StrategyPricingResult:
        """Per-leg premiums of a strategy and its net premium."""
        return price_strategy(strategy=strategy, market=market)

    @strawberry.field
    def payoff_curve(
        self,
        strategy: StrategyInput,
        reference_spot: float,
        include_premium: bool = False,
        premiums: Optional[list[float]] = None,
        real_premium: Optional[float] = None,
        market: Optional[MarketModelInput] = None,
        anchor: LevelAnchor = LevelAnchor.SCENARIO,
        decimals: Optional[int] = None,
    ) -> list[PayoffPoint]:
        """Hedged vs unhedged effective rate over [0.7, 1.3] x reference spot (101 points)."""
        return payoff_curve(
            strategy=strategy,
            reference_spot=reference_spot,
            include_premium=include_premium,
            premiums=premiums,
            real_premium=real_premium,
            market=market,
            anchor=anchor,
            decimals=decimals,
        )

    @strawberry.field
    def implied_volatility(
        self,
        option_type: str,
        price: float,
        strike: float,
        market: MarketModelInput,
    ) -> float:
        """Volatility that reproduces `price` under Garman-Kohlhagen."""
        return implied_volatility(option_type=option_type, price=price, strike=strike, market=market)


schema = strawberry.Schema(query=Query)
