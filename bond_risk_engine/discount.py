from __future__ import annotations

from typing import Iterable

import numpy as np

from .errors import InvalidRateError


def _check_rate(rate: float) -> None:
    if not np.isfinite(rate) or rate <= -1.0:
        raise InvalidRateError(f"Periodic rate must be finite and > -1, got {rate}.")


def discount_factor(rate: float, years: float) -> float:
    """
    Compounding factor (1 + rate)^years for real-valued years.

    Present value of a cash flow is cf / discount_factor(rate, t).
    Exactly 1.0 at years == 0. Negative years are not supported.
    """
    rate = float(rate)
    years = float(years)
    _check_rate(rate)

    if years == 0.0:
        return 1.0

    return float(np.power(1.0 + rate, years))


def discount_factors(rate: float, years: Iterable[float]) -> np.ndarray:
    """Vectorised discount_factor over an array of year offsets."""
    rate = float(rate)
    _check_rate(rate)

    taus = np.asarray(list(years), dtype=float)
    out = np.power(1.0 + rate, taus)
    out[taus == 0.0] = 1.0
    return out
