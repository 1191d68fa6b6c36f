from __future__ import annotations

import logging

import pandas as pd

from .bonds import Bond, require_market_price, require_not_matured
from .utils import yearfrac

logger = logging.getLogger(__name__)


def approx_yield_to_maturity(bond: Bond, as_of: pd.Timestamp) -> float:
    """
    Closed-form yield-to-maturity approximation:

      YTM ~ [C + (F - P) / T] / [(F + P) / 2]

    with C the annual coupon amount, F face value, P market price and T the
    ACT/365 years to maturity. Independent of the individual coupon dates.
    """
    price = require_market_price(bond)
    require_not_matured(bond, as_of)

    years = yearfrac(as_of, bond.maturity_date)

    annual_coupon = bond.face_value * bond.coupon_rate
    capital_gain_per_year = (bond.face_value - price) / years
    ytm = (annual_coupon + capital_gain_per_year) / ((bond.face_value + price) / 2.0)

    logger.debug("%s: ytm=%.10f over %.6f years", bond.isin, ytm, years)
    return ytm
