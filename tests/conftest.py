# Add project root to sys.path for module imports
import os, sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from bond_risk_engine.bonds import Bond
from bond_risk_engine.utils import coupon_schedule


@pytest.fixture(scope="session")
def val_date():
    return pd.Timestamp("2026-02-13")


@pytest.fixture(scope="session")
def make_bond(val_date):
    """Factory for a semiannual bond maturing `years` after val_date."""

    def _make(market_price=950.0, coupon_rate=0.05, years=5, freq=2, face_value=1000.0, isin="US1234567890"):
        maturity = val_date + pd.DateOffset(years=years)
        return Bond(
            isin=isin,
            maturity_date=maturity,
            coupon_rate=coupon_rate,
            face_value=face_value,
            coupon_dates=tuple(coupon_schedule(val_date, maturity, freq)),
            market_price=market_price,
        )

    return _make
