from __future__ import annotations


class BondRiskError(ValueError):
    """Base class for input-validity failures raised by the risk engine."""


class MissingMarketPriceError(BondRiskError):
    pass


class BondMaturedError(BondRiskError):
    pass


class InvalidScheduleError(BondRiskError):
    pass


class EmptyPortfolioError(BondRiskError):
    pass


class DegenerateCashFlowError(BondRiskError):
    pass


class InvalidRateError(BondRiskError):
    """Periodic rate at or below -100%: (1 + r)^t is not a real number."""


class BondDecodeError(BondRiskError):
    pass
