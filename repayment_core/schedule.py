"""
Schedule Generator Module

Builds the month-by-month repayment schedule for a loan. Each period is
stamped with the calendar month and year it falls due, and its principal,
interest, installment and remaining balance in whole currency units.

Amounts are carried unrounded from period to period and rounded only when
a step is emitted, so rounding never compounds. The final step always
reports a remaining balance of exactly zero: whatever residue per-period
rounding leaves behind is absorbed there.
"""

from decimal import Decimal
from datetime import date
from dataclasses import dataclass
from typing import Dict, List, Sequence
import calendar
import logging

from .currency import round_to_unit
from .exceptions import InvalidInput
from .policy import SystemSettings, RepaymentRegime, require_positive, require_months
from .repayment import compute_total_repayment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepaymentStep:
    """One period of a repayment schedule, amounts in whole currency units"""
    payment_number: int      # 1-indexed period
    month: int               # Calendar month of the due date, 0 = January
    year: int
    principal: int           # Portion reducing the balance
    interest: int            # Portion covering the cost of money
    total: int               # Installment due, principal + interest
    remaining_balance: int   # Balance after this payment

    def to_dict(self) -> Dict[str, int]:
        return {
            "payment_number": self.payment_number,
            "month": self.month,
            "year": self.year,
            "principal": self.principal,
            "interest": self.interest,
            "total": self.total,
            "remaining_balance": self.remaining_balance
        }


@dataclass(frozen=True)
class ScheduleSummary:
    """Totals over a repayment schedule"""
    total_repayment: int
    total_interest: int
    total_principal: int
    monthly_installment: int
    final_month: int
    final_year: int
    periods: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_repayment": self.total_repayment,
            "total_interest": self.total_interest,
            "total_principal": self.total_principal,
            "monthly_installment": self.monthly_installment,
            "final_month": self.final_month,
            "final_year": self.final_year,
            "periods": self.periods
        }


def add_months(start_date: date, months: int) -> date:
    """Add months to a date, handling month-end edge cases"""
    month = start_date.month - 1 + months
    year = start_date.year + month // 12
    month = month % 12 + 1
    day = min(start_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def generate_schedule(principal, tenure_months, start_date: date,
                      settings: SystemSettings) -> List[RepaymentStep]:
    """
    Generate the repayment schedule for a loan

    Args:
        principal: Amount lent, greater than zero
        tenure_months: Whole number of monthly periods, at least 1
        start_date: Disbursement date; period i falls due i months later
        settings: Lending policy supplying the monthly interest rate

    Returns:
        Exactly tenure_months steps in due-date order

    Raises:
        InvalidInput: If principal or tenure is outside its contract, or the
            final installment would fall due after the last supported date
    """
    principal = require_positive(principal, "principal")
    tenure_months = require_months(tenure_months, "tenure_months")
    if not isinstance(start_date, date):
        raise InvalidInput(f"start_date must be a date, got {start_date!r}",
                           field="start_date", value=start_date)
    try:
        add_months(start_date, tenure_months)
    except (ValueError, OverflowError):
        raise InvalidInput(f"tenure_months {tenure_months} runs past the last representable date",
                           field="tenure_months", value=tenure_months)

    rate = settings.interest_rate
    quote = compute_total_repayment(principal, tenure_months, settings)

    if quote.regime == RepaymentRegime.FLAT_RATE:
        # Flat interest and an even share of principal every period
        flat_interest = principal * rate
        flat_principal = principal / Decimal(tenure_months)
    else:
        monthly_total = quote.monthly_payment

    schedule = []
    remaining_balance = principal

    for payment_number in range(1, tenure_months + 1):
        if quote.regime == RepaymentRegime.FLAT_RATE:
            interest_amount = flat_interest
            principal_amount = flat_principal
        else:
            interest_amount = remaining_balance * rate
            principal_amount = monthly_total - interest_amount

        remaining_balance = remaining_balance - principal_amount

        if payment_number == tenure_months:
            # Final period absorbs the rounding residue
            reported_balance = 0
        else:
            reported_balance = max(0, round_to_unit(remaining_balance))

        due_date = add_months(start_date, payment_number)
        schedule.append(RepaymentStep(
            payment_number=payment_number,
            month=due_date.month - 1,
            year=due_date.year,
            principal=round_to_unit(principal_amount),
            interest=round_to_unit(interest_amount),
            total=round_to_unit(principal_amount + interest_amount),
            remaining_balance=reported_balance
        ))

    logger.debug(
        "Generated %d-step %s schedule for %s from %s",
        tenure_months, quote.regime.value, principal, start_date.isoformat()
    )

    return schedule


def summarize_schedule(schedule: Sequence[RepaymentStep]) -> ScheduleSummary:
    """
    Aggregate a schedule into the totals shown on loan summaries

    Args:
        schedule: Steps as produced by generate_schedule

    Returns:
        ScheduleSummary with the average installment and final due month

    Raises:
        InvalidInput: If the schedule is empty
    """
    if not schedule:
        raise InvalidInput("Cannot summarize an empty schedule", field="schedule")

    total_repayment = sum(step.total for step in schedule)
    final_step = schedule[-1]

    return ScheduleSummary(
        total_repayment=total_repayment,
        total_interest=sum(step.interest for step in schedule),
        total_principal=sum(step.principal for step in schedule),
        monthly_installment=round_to_unit(Decimal(total_repayment) / Decimal(len(schedule))),
        final_month=final_step.month,
        final_year=final_step.year,
        periods=len(schedule)
    )


def is_due_in(schedule: Sequence[RepaymentStep], month: int, year: int) -> bool:
    """Check whether any installment falls due in the given month (0-11) and year"""
    if month < 0 or month > 11:
        raise InvalidInput(f"month must be between 0 and 11, got {month}", field="month", value=month)
    return any(step.month == month and step.year == year for step in schedule)
