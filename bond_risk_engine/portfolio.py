from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from typing import List

from .bonds import Bond, Portfolio, qc_flags_for_bond
from .duration import bond_durations, modified_duration
from .errors import BondRiskError, EmptyPortfolioError
from .utils import coupon_schedule
from .yields import approx_yield_to_maturity

logger = logging.getLogger(__name__)


def portfolio_weighted_duration(portfolio: Portfolio, as_of: pd.Timestamp) -> float:
    """
    Market-value weighted average of modified durations:

      D_p = sum_i (P_i / sum_j P_j) * ModD_i

    A convex combination, so D_p lies between the smallest and largest bond
    duration and equals the bond's own duration for a one-bond portfolio.
    """
    if len(portfolio.bonds) == 0:
        raise EmptyPortfolioError(f"Portfolio {portfolio.name} must contain at least one bond.")

    total_value = portfolio.total_market_value()
    if total_value == 0.0:
        raise EmptyPortfolioError(f"Portfolio {portfolio.name}: total market value is zero.")

    prices = np.array([b.market_price for b in portfolio.bonds], dtype=float)
    weights = prices / total_value
    durations = np.array([modified_duration(b, as_of) for b in portfolio.bonds], dtype=float)

    result = float(np.sum(weights * durations))
    logger.info("Portfolio %s: %d bonds, weighted duration %.6f", portfolio.name, len(portfolio.bonds), result)
    return result


def portfolio_risk_report(portfolio: Portfolio, as_of: pd.Timestamp) -> pd.DataFrame:
    """
    One row per bond: yield, durations, weight and duration contribution.

    Bonds that cannot be evaluated keep their row with NaN metrics and a
    non-empty flags column; the other rows are unaffected. Weights are taken
    over the bonds that carry a market price.
    """
    if len(portfolio.bonds) == 0:
        raise EmptyPortfolioError(f"Portfolio {portfolio.name} must contain at least one bond.")

    priced_total = float(sum(b.market_price for b in portfolio.bonds if b.market_price is not None))

    rows = []
    for bond in portfolio.bonds:
        flags = qc_flags_for_bond(bond, as_of)
        ytm = mac = mod = np.nan

        if not flags:
            try:
                ytm = approx_yield_to_maturity(bond, as_of)
                mac, mod = bond_durations(bond, as_of)
            except BondRiskError as e:
                logger.warning("%s: excluded from report metrics (%s)", bond.isin, e)
                flags.append(f"ERROR:{type(e).__name__}")
                ytm = mac = mod = np.nan

        if bond.market_price is not None and priced_total != 0.0:
            weight = bond.market_price / priced_total
        else:
            weight = np.nan

        rows.append(
            {
                "isin": bond.isin,
                "maturity_date": bond.maturity_date,
                "coupon_rate": bond.coupon_rate,
                "face_value": bond.face_value,
                "market_price": np.nan if bond.market_price is None else float(bond.market_price),
                "weight": weight,
                "ytm": ytm,
                "macaulay_duration": mac,
                "modified_duration": mod,
                "flags": "|".join(flags) if flags else "",
            }
        )

    out = pd.DataFrame(rows)
    out["duration_contribution"] = out["weight"] * out["modified_duration"]
    return out


def make_sample_portfolio(
    as_of: pd.Timestamp,
    n: int = 20,
    seed: int = 7,
    name: str = "SAMPLE",
) -> Portfolio:
    """
    Create a synthetic fixed-rate bond portfolio for demo/testing.

    - Maturities: integer years from as_of (1Y..10Y)
    - Coupons: uniform in [2%, 8%]
    - Frequency: mostly semiannual, some quarterly
    - Face: 1000, market price within +/-8% of face

    Deterministic for a given (as_of, n, seed).
    """
    as_of = pd.Timestamp(as_of).normalize()
    rng = np.random.default_rng(seed)

    years = rng.integers(1, 11, size=n)  # 1..10 years
    coupons = rng.uniform(0.02, 0.08, size=n)
    freqs = rng.choice([2, 4], size=n, p=[0.8, 0.2])
    price_moves = rng.uniform(-0.08, 0.08, size=n)

    bonds: List[Bond] = []
    for i in range(n):
        maturity = as_of + pd.DateOffset(years=int(years[i]))
        bonds.append(
            Bond(
                isin=f"XS{i:010d}",
                maturity_date=maturity,
                coupon_rate=float(coupons[i]),
                face_value=1000.0,
                coupon_dates=tuple(coupon_schedule(as_of, maturity, int(freqs[i]))),
                market_price=round(1000.0 * (1.0 + float(price_moves[i])), 2),
            )
        )

    return Portfolio(name=name, bonds=tuple(bonds))
