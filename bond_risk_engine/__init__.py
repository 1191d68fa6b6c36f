"""
Bond Risk Engine

Interest-rate risk metrics for plain fixed-coupon bonds:
- utils: ACT/365 day count, coupon schedules, payment frequency inference
- discount: (1 + r)^t compounding factors
- bonds: Bond / Portfolio value types + QC flags
- yields: closed-form approximate yield-to-maturity
- duration: cash-flow table, Macaulay and modified duration
- portfolio: market-value weighted duration + per-bond risk report
- loaders: bond records (JSON, dicts, DataFrames) -> Bond / Portfolio
- risk: RiskEngine facade used by the service layer

Every calculation takes the evaluation date explicitly.
"""
from .bonds import Bond, Portfolio
from .duration import BondDurations
from .errors import (
    BondRiskError,
    MissingMarketPriceError,
    BondMaturedError,
    InvalidScheduleError,
    EmptyPortfolioError,
    DegenerateCashFlowError,
    InvalidRateError,
    BondDecodeError,
)
from .risk import RiskEngine
