"""
Repayment Model Module

Computes the aggregate repayment obligation of a loan. Short tenures are
charged flat-rate simple interest on the original principal; longer tenures
are amortized with equal installments on the reducing balance.
"""

from decimal import Decimal, Overflow
from dataclasses import dataclass
from typing import Any, Dict
import logging

from .policy import (
    SystemSettings, RepaymentRegime, select_regime, require_positive, require_months
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepaymentQuote:
    """Total obligation for a loan under the regime its tenure selects"""
    total: Decimal               # Principal plus interest over the whole tenure
    interest: Decimal            # Cost of money over the whole tenure
    regime: RepaymentRegime
    monthly_payment: Decimal     # Installment per period (total / tenure)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": str(self.total),
            "interest": str(self.interest),
            "regime": self.regime.value,
            "monthly_payment": str(self.monthly_payment)
        }


def installment_factor(rate: Decimal, periods: int) -> Decimal:
    """
    Equal installment per unit of principal for a reducing-balance loan

    Standard loan payment formula: c(1+c)^n / [(1+c)^n - 1], where c is the
    periodic rate and n the number of payments. A zero rate has no interest
    to amortize, so the installment is simply 1/n. For very long tenures
    the factor tends to c.

    Args:
        rate: Periodic (monthly) interest rate
        periods: Number of payments

    Returns:
        Installment amount for a principal of 1
    """
    if rate == Decimal('0'):
        return Decimal('1') / Decimal(periods)

    try:
        factor = (Decimal('1') + rate) ** periods
    except Overflow:
        # (1+c)^n beyond the context's exponent range; the factor has converged to c
        return rate
    return rate * factor / (factor - Decimal('1'))


def compute_total_repayment(principal: Any, tenure_months: Any,
                            settings: SystemSettings) -> RepaymentQuote:
    """
    Compute total repayment and total interest for a loan

    Args:
        principal: Amount lent, greater than zero
        tenure_months: Whole number of monthly periods, at least 1
        settings: Lending policy supplying the monthly interest rate

    Returns:
        RepaymentQuote with the regime that was applied

    Raises:
        InvalidInput: If principal or tenure is outside its contract
    """
    principal = require_positive(principal, "principal")
    tenure_months = require_months(tenure_months, "tenure_months")
    rate = settings.interest_rate
    periods = Decimal(tenure_months)

    regime = select_regime(tenure_months)

    if regime == RepaymentRegime.FLAT_RATE:
        interest = principal * rate * periods
        total = principal + interest
        monthly_payment = total / periods
    elif rate == Decimal('0'):
        # Nothing to amortize: an even share of principal each period
        monthly_payment = principal / periods
        total = principal
        interest = Decimal('0')
    else:
        monthly_payment = principal * installment_factor(rate, tenure_months)
        total = monthly_payment * periods
        interest = total - principal

    logger.debug(
        "Quoted %s over %d months: regime=%s total=%s",
        principal, tenure_months, regime.value, total
    )

    return RepaymentQuote(
        total=total,
        interest=interest,
        regime=regime,
        monthly_payment=monthly_payment
    )
