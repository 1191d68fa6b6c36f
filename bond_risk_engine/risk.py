from __future__ import annotations

import pandas as pd

from .bonds import Bond, Portfolio
from .duration import BondDurations, bond_durations, macaulay_duration, modified_duration
from .portfolio import portfolio_weighted_duration, portfolio_risk_report
from .yields import approx_yield_to_maturity


class RiskEngine:
    """
    Stateless entry point for the boundary layer.

    The evaluation date is passed on every call; nothing reads the clock, so
    equal inputs give equal outputs and one engine can be shared across threads.
    """

    def yield_to_maturity(self, bond: Bond, as_of: pd.Timestamp) -> float:
        return approx_yield_to_maturity(bond, as_of)

    def macaulay_duration(self, bond: Bond, as_of: pd.Timestamp) -> float:
        return macaulay_duration(bond, as_of)

    def modified_duration(self, bond: Bond, as_of: pd.Timestamp) -> float:
        return modified_duration(bond, as_of)

    def duration(self, bond: Bond, as_of: pd.Timestamp) -> BondDurations:
        return bond_durations(bond, as_of)

    def portfolio_duration(self, portfolio: Portfolio, as_of: pd.Timestamp) -> float:
        return portfolio_weighted_duration(portfolio, as_of)

    def report(self, portfolio: Portfolio, as_of: pd.Timestamp) -> pd.DataFrame:
        return portfolio_risk_report(portfolio, as_of)
