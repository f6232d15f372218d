"""
Repayment Core

Pure loan repayment calculations for the loan administration system:
total repayment quotes, borrowing capacity estimates and per-period
repayment schedules. All financial math uses Decimal.
"""

__version__ = "1.0.0"

from .exceptions import InvalidInput
from .policy import (
    SystemSettings, LoanTerms, RepaymentRegime, FLAT_RATE_MAX_TENURE, select_regime
)
from .repayment import RepaymentQuote, compute_total_repayment
from .capacity import LoanCapacity, estimate_capacity, recommend_minimum_tenure
from .schedule import (
    RepaymentStep, ScheduleSummary, generate_schedule, summarize_schedule,
    is_due_in, add_months
)

__all__ = [
    "InvalidInput",
    "SystemSettings",
    "LoanTerms",
    "RepaymentRegime",
    "FLAT_RATE_MAX_TENURE",
    "select_regime",
    "RepaymentQuote",
    "compute_total_repayment",
    "LoanCapacity",
    "estimate_capacity",
    "recommend_minimum_tenure",
    "RepaymentStep",
    "ScheduleSummary",
    "generate_schedule",
    "summarize_schedule",
    "is_due_in",
    "add_months",
]
