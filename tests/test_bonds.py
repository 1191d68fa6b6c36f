import pandas as pd
import pytest

from bond_risk_engine.bonds import Bond, Portfolio, qc_flags_for_bond
from bond_risk_engine.errors import BondRiskError, MissingMarketPriceError, BondMaturedError
from bond_risk_engine.yields import approx_yield_to_maturity


def test_bond_normalizes_dates_and_keeps_coupon_order():
    bond = Bond(
        isin="XS0000000001",
        maturity_date="2030-12-31",
        coupon_rate=0.05,
        face_value=1000.0,
        coupon_dates=["2026-12-31", "2025-12-31", "2026-12-31"],
    )
    assert bond.maturity_date == pd.Timestamp("2030-12-31")
    assert bond.coupon_dates == (
        pd.Timestamp("2026-12-31"),
        pd.Timestamp("2025-12-31"),
        pd.Timestamp("2026-12-31"),
    )
    assert not bond.has_market_price


def test_bond_is_immutable(make_bond):
    bond = make_bond()
    with pytest.raises(AttributeError):
        bond.market_price = 1.0


def test_ytm_discount_bond_above_coupon(make_bond, val_date):
    ytm = approx_yield_to_maturity(make_bond(market_price=950.0), val_date)
    assert ytm > 0.05, "YTM should exceed coupon rate for a discount bond"


def test_ytm_premium_bond_below_coupon(make_bond, val_date):
    ytm = approx_yield_to_maturity(make_bond(market_price=1050.0), val_date)
    assert ytm < 0.05, "YTM should be below coupon rate for a premium bond"


@pytest.mark.parametrize("years", [1, 5, 30])
def test_ytm_at_par_equals_coupon(make_bond, val_date, years):
    ytm = approx_yield_to_maturity(make_bond(market_price=1000.0, years=years), val_date)
    assert abs(ytm - 0.05) < 1e-3


def test_ytm_matches_closed_form(make_bond, val_date):
    bond = make_bond(market_price=950.0)
    years = (bond.maturity_date - val_date).days / 365.0
    expected = (1000.0 * 0.05 + (1000.0 - 950.0) / years) / ((1000.0 + 950.0) / 2.0)
    assert abs(approx_yield_to_maturity(bond, val_date) - expected) < 1e-12


def test_ytm_ignores_coupon_schedule(make_bond, val_date):
    bond = make_bond(market_price=950.0)
    bare = Bond(bond.isin, bond.maturity_date, bond.coupon_rate, bond.face_value, (), bond.market_price)
    assert approx_yield_to_maturity(bare, val_date) == approx_yield_to_maturity(bond, val_date)


def test_ytm_requires_market_price(make_bond, val_date):
    with pytest.raises(MissingMarketPriceError):
        approx_yield_to_maturity(make_bond(market_price=None), val_date)


def test_ytm_matured_bond(val_date):
    bond = Bond(
        isin="US1234567890",
        maturity_date=val_date - pd.Timedelta(days=1),
        coupon_rate=0.05,
        face_value=1000.0,
        coupon_dates=(val_date - pd.DateOffset(months=6),),
        market_price=990.0,
    )
    with pytest.raises(BondMaturedError):
        approx_yield_to_maturity(bond, val_date)


def test_ytm_maturity_on_evaluation_date_is_matured(make_bond, val_date):
    bond = make_bond()
    with pytest.raises(BondMaturedError):
        approx_yield_to_maturity(bond, bond.maturity_date)


def test_ytm_is_deterministic(make_bond, val_date):
    bond = make_bond(market_price=975.5)
    assert approx_yield_to_maturity(bond, val_date) == approx_yield_to_maturity(bond, val_date)


def test_qc_flags(make_bond, val_date):
    assert qc_flags_for_bond(make_bond(), val_date) == []

    bare = Bond("XS1", val_date - pd.Timedelta(days=1), 0.05, 1000.0)
    assert qc_flags_for_bond(bare, val_date) == ["NO_PRICE", "MATURED", "NO_SCHEDULE"]


def test_portfolio_total_market_value(make_bond):
    p = Portfolio("P", [make_bond(market_price=950.0), make_bond(market_price=1050.0)])
    assert len(p) == 2
    assert p.total_market_value() == 2000.0

    with pytest.raises(MissingMarketPriceError):
        Portfolio("P", [make_bond(market_price=None)]).total_market_value()


def test_bond_requires_maturity_date():
    with pytest.raises(BondRiskError, match="XS_NOMAT"):
        Bond("XS_NOMAT", None, 0.05, 1000.0)
