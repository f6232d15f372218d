"""
Capacity Estimator Module

Determines how much a borrower can safely borrow. The repayment ceiling is
a multiple of monthly salary less any repayment already outstanding; the
repayment model is inverted for the regime the target tenure selects to
find the largest principal whose total repayment fits under that ceiling.
"""

from decimal import Decimal, ROUND_CEILING
from dataclasses import dataclass
from typing import Any, Dict
import logging

from .currency import floor_to_unit, to_decimal
from .exceptions import InvalidInput
from .policy import (
    SystemSettings, RepaymentRegime, select_regime,
    require_positive, require_non_negative, require_months
)
from .repayment import compute_total_repayment, installment_factor

logger = logging.getLogger(__name__)

# Share of monthly salary a single installment may take when recommending tenure
DEFAULT_AFFORDABILITY_RATIO = Decimal('0.4')

# Periods of flat interest assumed when estimating total repayment for a tenure
# recommendation, before the tenure itself is known
DEFAULT_ESTIMATE_PERIODS = 4


@dataclass(frozen=True)
class LoanCapacity:
    """Borrowing capacity in whole currency units, all rounded down"""
    max_principal: int
    total_repayment_with_interest: int
    monthly_repayment: int
    remaining_capacity: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "max_principal": self.max_principal,
            "total_repayment_with_interest": self.total_repayment_with_interest,
            "monthly_repayment": self.monthly_repayment,
            "remaining_capacity": self.remaining_capacity
        }


def estimate_capacity(monthly_salary: Any, current_outstanding: Any, target_tenure: Any,
                      settings: SystemSettings) -> LoanCapacity:
    """
    Estimate the maximum principal a borrower can take on

    Args:
        monthly_salary: Borrower's monthly income, greater than zero
        current_outstanding: Repayment still owed on existing loans
        target_tenure: Whole number of months the new loan would run
        settings: Lending policy (interest rate and salary cap multiplier)

    Returns:
        LoanCapacity; total repayment on max_principal never exceeds the
        available repayment capacity

    Raises:
        InvalidInput: If salary, outstanding or tenure is outside its contract
    """
    salary = require_positive(monthly_salary, "monthly_salary")
    outstanding = require_non_negative(current_outstanding, "current_outstanding")
    tenure = require_months(target_tenure, "target_tenure")
    rate = settings.interest_rate

    available = max(Decimal('0'), salary * settings.salary_cap_multiplier - outstanding)
    remaining_capacity = floor_to_unit(available)

    regime = select_regime(tenure)
    if rate == Decimal('0'):
        repayment_per_unit = Decimal('1')
    elif regime == RepaymentRegime.FLAT_RATE:
        # Principal * (1 + rate * n) = available
        repayment_per_unit = Decimal('1') + rate * Decimal(tenure)
    else:
        # Principal * n * installment_factor = available
        repayment_per_unit = Decimal(tenure) * installment_factor(rate, tenure)

    max_principal = floor_to_unit(available / repayment_per_unit)

    logger.debug(
        "Capacity for salary %s over %d months: regime=%s available=%s max_principal=%d",
        salary, tenure, regime.value, available, max_principal
    )

    if max_principal == 0:
        return LoanCapacity(
            max_principal=0,
            total_repayment_with_interest=0,
            monthly_repayment=0,
            remaining_capacity=remaining_capacity
        )

    quote = compute_total_repayment(max_principal, tenure, settings)

    return LoanCapacity(
        max_principal=max_principal,
        total_repayment_with_interest=floor_to_unit(quote.total),
        monthly_repayment=floor_to_unit(quote.monthly_payment),
        remaining_capacity=remaining_capacity
    )


def recommend_minimum_tenure(principal: Any, monthly_salary: Any, settings: SystemSettings,
                             affordability_ratio: Any = DEFAULT_AFFORDABILITY_RATIO,
                             estimate_periods: int = DEFAULT_ESTIMATE_PERIODS) -> int:
    """
    Shortest tenure whose estimated installment fits the borrower's salary

    The total is estimated as principal * (1 + rate * estimate_periods) and
    each installment may take at most affordability_ratio of salary.

    Args:
        principal: Requested amount, greater than zero
        monthly_salary: Borrower's monthly income, greater than zero
        settings: Lending policy supplying the interest rate
        affordability_ratio: Largest share of salary one installment may take
        estimate_periods: Interest periods assumed for the estimate

    Returns:
        Minimum tenure in months, at least 1

    Raises:
        InvalidInput: If an input is outside its contract
    """
    principal = require_positive(principal, "principal")
    salary = require_positive(monthly_salary, "monthly_salary")
    ratio = to_decimal(affordability_ratio, "affordability_ratio")
    if ratio <= Decimal('0') or ratio > Decimal('1'):
        raise InvalidInput(f"affordability_ratio must be in (0, 1], got {affordability_ratio}",
                           field="affordability_ratio", value=affordability_ratio)
    periods = require_months(estimate_periods, "estimate_periods")

    estimated_total = principal * (Decimal('1') + settings.interest_rate * Decimal(periods))
    max_installment = salary * ratio

    tenure = (estimated_total / max_installment).quantize(Decimal('1'), rounding=ROUND_CEILING)
    return max(1, int(tenure))
