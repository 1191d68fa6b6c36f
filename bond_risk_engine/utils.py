from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from .config import DAYS_PER_YEAR, DEFAULT_PAYMENT_FREQUENCY, SUPPORTED_SCHEDULE_FREQUENCIES


def days_between(start: pd.Timestamp, end: pd.Timestamp) -> int:
    """Calendar days from start to end (negative when end precedes start)."""
    return (pd.Timestamp(end).normalize() - pd.Timestamp(start).normalize()).days


def yearfrac(start: pd.Timestamp, end: pd.Timestamp) -> float:
    """
    Year fraction between two dates under ACT/365.

    Actual elapsed days over 365, no leap-year adjustment.
    """
    start = pd.Timestamp(start)
    end = pd.Timestamp(end)

    if end < start:
        raise ValueError(f"end < start: {start=} {end=}")

    return days_between(start, end) / DAYS_PER_YEAR


def payment_frequency(coupon_dates: Iterable[pd.Timestamp]) -> int:
    """
    Infer payments per year from a coupon schedule.

    Heuristic: count the coupon dates falling in [anchor, anchor + 1Y) where the
    anchor is the earliest listed date. Duplicates count as separate payments.
    Only accurate when the schedule covers a full year from its first date;
    shorter schedules fall back to DEFAULT_PAYMENT_FREQUENCY.
    """
    dates = [pd.Timestamp(d).normalize() for d in coupon_dates]

    if len(dates) < 2:
        return DEFAULT_PAYMENT_FREQUENCY

    anchor = min(dates)
    window_end = anchor + pd.DateOffset(years=1)
    # the anchor itself is in the window, so the count is at least 1
    return sum(1 for d in dates if anchor <= d < window_end)


def coupon_schedule(start: pd.Timestamp, maturity: pd.Timestamp, freq: int = 2) -> List[pd.Timestamp]:
    """
    Regular coupon dates strictly AFTER start, ending at maturity.

    The cycle is anchored at maturity and stepped back in 12/freq month steps,
    so the first coupon may be a short stub.
    """
    if freq not in SUPPORTED_SCHEDULE_FREQUENCIES:
        raise NotImplementedError(f"Supported frequencies: {SUPPORTED_SCHEDULE_FREQUENCIES}.")

    start = pd.Timestamp(start).normalize()
    maturity = pd.Timestamp(maturity).normalize()

    if maturity <= start:
        return []

    months = 12 // freq
    dates: List[pd.Timestamp] = []
    k = 0
    d = maturity
    while d > start:
        dates.append(d)
        k += 1
        # offset from maturity each time so month-end dates do not drift
        d = maturity - pd.DateOffset(months=months * k)

    dates.reverse()
    return dates
