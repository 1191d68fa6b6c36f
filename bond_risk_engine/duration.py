from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np
import pandas as pd

from .bonds import Bond, require_market_price, require_schedule
from .discount import discount_factors
from .errors import DegenerateCashFlowError
from .utils import yearfrac, payment_frequency
from .yields import approx_yield_to_maturity

logger = logging.getLogger(__name__)


class BondDurations(NamedTuple):
    macaulay_duration: float
    modified_duration: float


def _discounted_cashflows(bond: Bond, as_of: pd.Timestamp, ytm: float, freq: int) -> pd.DataFrame:
    as_of = pd.Timestamp(as_of).normalize()
    coupon_cf = bond.face_value * bond.coupon_rate / freq

    rows = [(d, "coupon", coupon_cf) for d in bond.coupon_dates if d > as_of]
    rows.append((bond.maturity_date, "principal", float(bond.face_value)))

    cf = pd.DataFrame(rows, columns=["pay_date", "kind", "cashflow"])
    cf["t"] = np.array([yearfrac(as_of, d) for d in cf["pay_date"]], dtype=float)
    cf["discount_factor"] = discount_factors(ytm, cf["t"])
    cf["pv"] = cf["cashflow"] / cf["discount_factor"]
    cf["t_pv"] = cf["t"] * cf["pv"]
    return cf


def cashflow_table(bond: Bond, as_of: pd.Timestamp) -> pd.DataFrame:
    """
    Future cash flows of a bond discounted at its approximate yield.

    Coupons dated on or before as_of are treated as paid and dropped. The
    principal is always the last row.
    """
    require_market_price(bond)
    require_schedule(bond)

    ytm = approx_yield_to_maturity(bond, as_of)
    freq = payment_frequency(bond.coupon_dates)
    return _discounted_cashflows(bond, as_of, ytm, freq)


def _macaulay_from_table(bond: Bond, cf: pd.DataFrame) -> float:
    total_pv = float(cf["pv"].sum())
    weighted_pv = float(cf["t_pv"].sum())

    if total_pv == 0.0 or not np.isfinite(total_pv):
        raise DegenerateCashFlowError(f"{bond.isin}: present value of cash flows is {total_pv}.")

    logger.debug("%s: sum(PV)=%.6f sum(t*PV)=%.6f", bond.isin, total_pv, weighted_pv)
    return weighted_pv / total_pv


def macaulay_duration(bond: Bond, as_of: pd.Timestamp) -> float:
    """PV-weighted average time (years) to the bond's remaining cash flows."""
    return _macaulay_from_table(bond, cashflow_table(bond, as_of))


def modified_duration(bond: Bond, as_of: pd.Timestamp) -> float:
    """Macaulay duration / (1 + ytm / freq)."""
    mac = macaulay_duration(bond, as_of)
    ytm = approx_yield_to_maturity(bond, as_of)
    freq = payment_frequency(bond.coupon_dates)
    return mac / (1.0 + ytm / freq)


def bond_durations(bond: Bond, as_of: pd.Timestamp) -> BondDurations:
    """
    Macaulay and modified duration from a single pass over the cash flows.
    Same values as calling macaulay_duration and modified_duration separately.
    """
    require_market_price(bond)
    require_schedule(bond)

    ytm = approx_yield_to_maturity(bond, as_of)
    freq = payment_frequency(bond.coupon_dates)
    logger.debug("%s: freq=%d", bond.isin, freq)

    mac = _macaulay_from_table(bond, _discounted_cashflows(bond, as_of, ytm, freq))
    return BondDurations(mac, mac / (1.0 + ytm / freq))
