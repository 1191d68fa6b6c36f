# config.py
# Purpose: Numeric constants shared by the risk engine.

from __future__ import annotations

# Actual/365 day count denominator
DAYS_PER_YEAR = 365.0

# Payments per year assumed when a schedule is too short to infer one
DEFAULT_PAYMENT_FREQUENCY = 2

# Frequencies accepted by coupon_schedule (annual, semiannual, quarterly, monthly)
SUPPORTED_SCHEDULE_FREQUENCIES = (1, 2, 4, 12)
