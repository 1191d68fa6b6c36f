"""
Decoding of bond records into engine types.

Accepted record shape (JSON / dict), ISO dates:

    {
      "isin": "US1234567890",
      "maturityDate": "2030-12-31",
      "couponDates": ["2025-06-30", "2025-12-31", "2026-06-30"],
      "couponRate": 0.05,
      "faceValue": 1000,
      "marketPrice": 950
    }

DataFrames use snake_case columns (isin, maturity_date, coupon_dates,
coupon_rate, face_value, market_price).
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from .bonds import Bond, Portfolio
from .errors import BondDecodeError

logger = logging.getLogger(__name__)

_FIELD_ALIASES = {
    "isin": "isin",
    "maturityDate": "maturity_date",
    "couponDates": "coupon_dates",
    "couponRate": "coupon_rate",
    "faceValue": "face_value",
    "marketPrice": "market_price",
}

_REQUIRED = ("isin", "maturity_date", "coupon_rate", "face_value")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, np.ndarray)):
        return False
    return bool(pd.isna(value))


def _positive(rec: Dict[str, Any], key: str, isin: str) -> float:
    try:
        value = float(rec[key])
    except (TypeError, ValueError) as e:
        raise BondDecodeError(f"{isin}: {key} is not a number ({rec[key]!r}).") from e
    if not np.isfinite(value) or value <= 0.0:
        raise BondDecodeError(f"{isin}: {key} must be positive, got {value}.")
    return value


def _date(value: Any, isin: str, key: str) -> pd.Timestamp:
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise BondDecodeError(f"{isin}: bad {key} {value!r}.") from e
    if pd.isna(ts):
        raise BondDecodeError(f"{isin}: missing {key}.")
    return ts.normalize()


def bond_from_record(record: Dict[str, Any]) -> Bond:
    rec = {_FIELD_ALIASES.get(k, k): v for k, v in record.items()}

    missing = [k for k in _REQUIRED if _is_missing(rec.get(k))]
    if missing:
        raise BondDecodeError(f"Bond record missing required fields: {', '.join(missing)}.")

    isin = str(rec["isin"]).strip()
    if not isin:
        raise BondDecodeError("Bond record has an empty isin.")

    raw_dates = rec.get("coupon_dates")
    if _is_missing(raw_dates):
        raw_dates = []
    elif isinstance(raw_dates, str):
        raw_dates = [d for d in raw_dates.split("|") if d.strip()]
    elif not isinstance(raw_dates, (list, tuple, np.ndarray)):
        raise BondDecodeError(f"{isin}: coupon_dates must be a list of dates, got {raw_dates!r}.")

    market_price: Optional[float] = None
    if not _is_missing(rec.get("market_price")):
        market_price = _positive(rec, "market_price", isin)

    return Bond(
        isin=isin,
        maturity_date=_date(rec["maturity_date"], isin, "maturity_date"),
        coupon_rate=_positive(rec, "coupon_rate", isin),
        face_value=_positive(rec, "face_value", isin),
        coupon_dates=tuple(_date(d, isin, "coupon_date") for d in raw_dates),
        market_price=market_price,
    )


def bonds_from_records(records: Iterable[Dict[str, Any]]) -> List[Bond]:
    return [bond_from_record(r) for r in records]


def bonds_from_json(text: str) -> List[Bond]:
    """Decode a JSON array of bond objects."""
    if text is None or not text.strip():
        raise BondDecodeError("JSON string cannot be empty.")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise BondDecodeError(f"Failed to parse JSON: {e}") from e

    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list):
        raise BondDecodeError("Expected a JSON array of bond objects.")

    bonds = bonds_from_records(payload)
    logger.debug("Decoded %d bonds from JSON", len(bonds))
    return bonds


def bonds_from_frame(frame: pd.DataFrame) -> List[Bond]:
    """
    One bond per row. coupon_dates may hold a list of dates or a
    '|'-separated string.
    """
    return bonds_from_records(frame.to_dict(orient="records"))


def portfolio_from_frame(name: str, frame: pd.DataFrame) -> Portfolio:
    return Portfolio(name=name, bonds=tuple(bonds_from_frame(frame)))


def portfolio_to_frame(portfolio: Portfolio) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "isin": [b.isin for b in portfolio.bonds],
            "maturity_date": [b.maturity_date for b in portfolio.bonds],
            "coupon_dates": ["|".join(d.strftime("%Y-%m-%d") for d in b.coupon_dates) for b in portfolio.bonds],
            "coupon_rate": [b.coupon_rate for b in portfolio.bonds],
            "face_value": [b.face_value for b in portfolio.bonds],
            "market_price": [np.nan if b.market_price is None else b.market_price for b in portfolio.bonds],
        }
    )
