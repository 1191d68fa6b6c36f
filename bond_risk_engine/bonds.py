from __future__ import annotations

import pandas as pd
from dataclasses import dataclass, field
from typing import Optional, Tuple, List

from .errors import BondRiskError, MissingMarketPriceError, BondMaturedError, InvalidScheduleError


@dataclass(frozen=True)
class Bond:
    """
    Plain fixed-coupon bond.

    coupon_dates keep caller order and duplicates; each listed date is one
    coupon payment. market_price is the value of the whole holding.
    """
    isin: str
    maturity_date: pd.Timestamp
    coupon_rate: float
    face_value: float
    coupon_dates: Tuple[pd.Timestamp, ...] = ()
    market_price: Optional[float] = None

    def __post_init__(self):
        maturity = pd.Timestamp(self.maturity_date) if self.maturity_date is not None else pd.NaT
        if pd.isna(maturity):
            raise BondRiskError(f"{self.isin}: maturity date required.")
        object.__setattr__(self, "maturity_date", maturity.normalize())
        # absent schedule is stored as empty; duration rejects it later
        dates = () if self.coupon_dates is None else self.coupon_dates
        object.__setattr__(self, "coupon_dates", tuple(pd.Timestamp(d).normalize() for d in dates))

    @property
    def has_market_price(self) -> bool:
        return self.market_price is not None


@dataclass(frozen=True)
class Portfolio:
    name: str
    bonds: Tuple[Bond, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "bonds", tuple(self.bonds))

    def __len__(self) -> int:
        return len(self.bonds)

    def total_market_value(self) -> float:
        missing = [b.isin for b in self.bonds if b.market_price is None]
        if missing:
            raise MissingMarketPriceError(f"Portfolio {self.name}: no market price for {', '.join(missing)}.")
        return float(sum(b.market_price for b in self.bonds))


def require_market_price(bond: Bond) -> float:
    if bond.market_price is None:
        raise MissingMarketPriceError(f"{bond.isin}: market price required.")
    return float(bond.market_price)


def require_not_matured(bond: Bond, as_of: pd.Timestamp) -> None:
    if bond.maturity_date <= pd.Timestamp(as_of).normalize():
        raise BondMaturedError(f"{bond.isin}: matured on or before {pd.Timestamp(as_of).date()}.")


def require_schedule(bond: Bond) -> None:
    if len(bond.coupon_dates) == 0:
        raise InvalidScheduleError(f"{bond.isin}: coupon dates required for duration.")


def qc_flags_for_bond(bond: Bond, as_of: pd.Timestamp) -> List[str]:
    flags: List[str] = []

    if bond.market_price is None:
        flags.append("NO_PRICE")

    if bond.maturity_date <= pd.Timestamp(as_of).normalize():
        flags.append("MATURED")

    if len(bond.coupon_dates) == 0:
        flags.append("NO_SCHEDULE")

    return flags
