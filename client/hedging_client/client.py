"""Hedging API client using sgqlc."""

from __future__ import annotations

from typing import Any, Optional

from sgqlc.endpoint.http import HTTPEndpoint

from hedging_client.types import (
    ForwardComponents,
    InstrumentLegInput,
    LegPricingResult,
    LevelInput,
    MarketModelInput,
    PayoffCurvePoint,
    StrategyInput,
    StrategyPricingResult,
)


def _level_to_vars(level: Optional[LevelInput]) -> Optional[dict[str, Any]]:
    if level is None:
        return None
    return {"value": level.value, "kind": level.kind}


def _market_to_vars(m: MarketModelInput) -> dict[str, Any]:
    """Serialize MarketModelInput to GraphQL variables (camelCase)."""
    return {
        "spot": m.spot,
        "domesticRate": m.domestic_rate,
        "foreignRate": m.foreign_rate,
        "volatility": m.volatility,
        "timeToMaturity": m.time_to_maturity,
    }


def _leg_to_vars(leg: InstrumentLegInput) -> dict[str, Any]:
    """Serialize InstrumentLegInput to GraphQL variables (camelCase, unset fields omitted)."""
    result: dict[str, Any] = {
        "type": leg.type,
        "rebate": leg.rebate,
        "quantity": leg.quantity,
    }
    optional = {
        "strike": _level_to_vars(leg.strike),
        "barrier": _level_to_vars(leg.barrier),
        "secondBarrier": _level_to_vars(leg.second_barrier),
        "volatility": leg.volatility,
        "timeToPayoff": leg.time_to_payoff,
    }
    result.update({k: v for k, v in optional.items() if v is not None})
    return result


def _strategy_to_vars(s: StrategyInput) -> dict[str, Any]:
    return {"name": s.name, "legs": [_leg_to_vars(leg) for leg in s.legs]}


class HedgingClient:
    """
    Client for the Hedging GraphQL API.
    Use from notebooks or scripts; configurable base URL for local vs Docker.
    """

    def __init__(self, url: str = "http://api:8000/graphql", timeout: float = 30.0) -> None:
        self._url = url.rstrip("/")
        self._timeout = timeout
        self._endpoint = HTTPEndpoint(self._url, timeout=timeout)

    def _request(self, query: str, variables: dict | None = None) -> dict:
        result = self._endpoint(query, variables or {})
        if "errors" in result and result["errors"]:
            raise RuntimeError(f"GraphQL errors: {result['errors']}")
        return result.get("data", {})

    def version(self) -> str:
        """API version string."""
        data = self._request("query Version { version }")
        return data["version"]

    def forward_rate(self, market: MarketModelInput) -> float:
        """CIP forward for the market snapshot."""
        query = """
            query ForwardRate($market: MarketModelInput!) {
                forwardRate(market: $market)
            }
        """
        data = self._request(query, {"market": _market_to_vars(market)})
        return data["forwardRate"]

    def price_leg(self, leg: InstrumentLegInput, market: MarketModelInput) -> LegPricingResult:
        """Premium per unit of notional for one leg."""
        query = """
            query PriceLeg($leg: InstrumentLegInput!, $market: MarketModelInput!) {
                priceLeg(leg: $leg, market: $market) {
                    premium
                    signedPremium
                    forwardRate
                }
            }
        """
        data = self._request(query, {"leg": _leg_to_vars(leg), "market": _market_to_vars(market)})
        raw = data["priceLeg"]
        return LegPricingResult(
            premium=raw["premium"],
            signed_premium=raw["signedPremium"],
            forward_rate=raw.get("forwardRate"),
        )

    def price_strategy(
        self, strategy: StrategyInput, market: MarketModelInput
    ) -> StrategyPricingResult:
        """Per-leg premiums and net premium of a strategy."""
        query = """
            query PriceStrategy($strategy: StrategyInput!, $market: MarketModelInput!) {
                priceStrategy(strategy: $strategy, market: $market) {
                    premiums
                    netPremium
                }
            }
        """
        variables = {"strategy": _strategy_to_vars(strategy), "market": _market_to_vars(market)}
        raw = self._request(query, variables)["priceStrategy"]
        return StrategyPricingResult(premiums=raw["premiums"], net_premium=raw["netPremium"])

    def payoff_curve(
        self,
        strategy: StrategyInput,
        reference_spot: float,
        include_premium: bool = False,
        premiums: list[float] | None = None,
        real_premium: float | None = None,
        market: MarketModelInput | None = None,
        anchor: str | None = None,
        decimals: int | None = None,
    ) -> list[PayoffCurvePoint]:
        """Hedged vs unhedged effective-rate curve (101 points by default)."""
        query = """
            query PayoffCurve(
                $strategy: StrategyInput!,
                $referenceSpot: Float!,
                $includePremium: Boolean,
                $premiums: [Float!],
                $realPremium: Float,
                $market: MarketModelInput,
                $anchor: LevelAnchor,
                $decimals: Int
            ) {
                payoffCurve(
                    strategy: $strategy,
                    referenceSpot: $referenceSpot,
                    includePremium: $includePremium,
                    premiums: $premiums,
                    realPremium: $realPremium,
                    market: $market,
                    anchor: $anchor,
                    decimals: $decimals
                ) {
                    spot
                    unhedgedRate
                    hedgedRate
                }
            }
        """
        variables: dict[str, Any] = {
            "strategy": _strategy_to_vars(strategy),
            "referenceSpot": reference_spot,
            "includePremium": include_premium,
        }
        if premiums is not None:
            variables["premiums"] = premiums
        if real_premium is not None:
            variables["realPremium"] = real_premium
        if market is not None:
            variables["market"] = _market_to_vars(market)
        if anchor is not None:
            variables["anchor"] = anchor
        if decimals is not None:
            variables["decimals"] = decimals
        data = self._request(query, variables)
        return [
            PayoffCurvePoint(
                spot=p["spot"],
                unhedged_rate=p["unhedgedRate"],
                hedged_rate=p["hedgedRate"],
            )
            for p in data["payoffCurve"]
        ]

    def implied_volatility(
        self, option_type: str, price: float, strike: float, market: MarketModelInput
    ) -> float:
        """Garman-Kohlhagen implied volatility; market.volatility is ignored."""
        query = """
            query ImpliedVolatility(
                $optionType: String!, $price: Float!, $strike: Float!, $market: MarketModelInput!
            ) {
                impliedVolatility(
                    optionType: $optionType, price: $price, strike: $strike, market: $market
                )
            }
        """
        variables = {
            "optionType": option_type,
            "price": price,
            "strike": strike,
            "market": _market_to_vars(market),
        }
        return self._request(query, variables)["impliedVolatility"]

    def forward_components(
        self,
        spot: float,
        rate: float,
        time_to_maturity: float,
        storage_cost: float = 0.0,
        convenience_yield: float = 0.0,
    ) -> ForwardComponents:
        """Commodity forward under cost of carry (contango when basis > 0)."""
        query = """
            query ForwardComponents(
                $spot: Float!, $rate: Float!, $timeToMaturity: Float!,
                $storageCost: Float, $convenienceYield: Float
            ) {
                forwardComponents(
                    spot: $spot, rate: $rate, timeToMaturity: $timeToMaturity,
                    storageCost: $storageCost, convenienceYield: $convenienceYield
                ) {
                    spot
                    forward
                    costOfCarry
                    timeToMaturity
                    storageCost
                    convenienceYield
                    basis
                    isContango
                }
            }
        """
        variables = {
            "spot": spot,
            "rate": rate,
            "timeToMaturity": time_to_maturity,
            "storageCost": storage_cost,
            "convenienceYield": convenience_yield,
        }
        raw = self._request(query, variables)["forwardComponents"]
        return ForwardComponents(
            spot=raw["spot"],
            forward=raw["forward"],
            cost_of_carry=raw["costOfCarry"],
            time_to_maturity=raw["timeToMaturity"],
            storage_cost=raw["storageCost"],
            convenience_yield=raw["convenienceYield"],
            basis=raw["basis"],
            is_contango=raw["isContango"],
        )
