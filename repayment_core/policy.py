"""
Loan Policy Module

Defines the lending policy passed into every calculation, the loan terms
value, the repayment regime variant and the input validation shared by the
repayment, capacity and schedule calculations.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Any, Dict, Optional
from enum import Enum
import logging

from .config import get_config
from .currency import to_decimal
from .exceptions import InvalidInput

logger = logging.getLogger(__name__)

# Tenures up to and including this many months are charged flat-rate interest
FLAT_RATE_MAX_TENURE = 12


class RepaymentRegime(Enum):
    """Interest regimes, selected by tenure"""
    FLAT_RATE = "flat_rate"                  # Simple interest on original principal
    REDUCING_BALANCE = "reducing_balance"    # Amortized on outstanding balance


def select_regime(tenure_months: int) -> RepaymentRegime:
    """Pick the interest regime for a (validated) tenure"""
    if tenure_months <= FLAT_RATE_MAX_TENURE:
        return RepaymentRegime.FLAT_RATE
    return RepaymentRegime.REDUCING_BALANCE


def require_positive(value: Any, field: str) -> Decimal:
    """Convert to Decimal and reject zero or negative amounts"""
    amount = to_decimal(value, field)
    if amount <= Decimal('0'):
        logger.debug("Rejected %s=%r: not positive", field, value)
        raise InvalidInput(f"{field} must be greater than zero, got {value}", field=field, value=value)
    return amount


def require_non_negative(value: Any, field: str) -> Decimal:
    """Convert to Decimal and reject negative amounts"""
    amount = to_decimal(value, field)
    if amount < Decimal('0'):
        logger.debug("Rejected %s=%r: negative", field, value)
        raise InvalidInput(f"{field} must not be negative, got {value}", field=field, value=value)
    return amount


def require_months(value: Any, field: str) -> int:
    """
    Validate a month count

    Args:
        value: Number of months; integral floats and Decimals are accepted
        field: Name of the input, reported on failure

    Returns:
        Month count as int, at least 1

    Raises:
        InvalidInput: If the value is not a whole number of months >= 1
    """
    months = to_decimal(value, field)
    if months != months.to_integral_value():
        logger.debug("Rejected %s=%r: not a whole number", field, value)
        raise InvalidInput(f"{field} must be a whole number of months, got {value}",
                           field=field, value=value)
    if months < 1:
        logger.debug("Rejected %s=%r: less than one month", field, value)
        raise InvalidInput(f"{field} must be at least 1 month, got {value}", field=field, value=value)
    return int(months)


@dataclass(frozen=True)
class SystemSettings:
    """
    Lending policy in force for a calculation.

    interest_rate is a monthly fraction (0.10 means 10% per month).
    max_tenure is advisory: callers enforce it, the calculations do not.
    """
    interest_rate: Decimal = Decimal('0.10')
    max_tenure: int = 12
    salary_cap_multiplier: Decimal = Decimal('3')

    def __post_init__(self):
        rate = to_decimal(self.interest_rate, "interest_rate")
        if rate < Decimal('0'):
            raise InvalidInput(f"interest_rate must not be negative, got {self.interest_rate}",
                               field="interest_rate", value=self.interest_rate)

        multiplier = to_decimal(self.salary_cap_multiplier, "salary_cap_multiplier")
        if multiplier < Decimal('0'):
            raise InvalidInput(
                f"salary_cap_multiplier must not be negative, got {self.salary_cap_multiplier}",
                field="salary_cap_multiplier", value=self.salary_cap_multiplier
            )

        object.__setattr__(self, 'interest_rate', rate)
        object.__setattr__(self, 'salary_cap_multiplier', multiplier)
        object.__setattr__(self, 'max_tenure', require_months(self.max_tenure, "max_tenure"))

    @classmethod
    def from_config(cls, config: Optional[Any] = None) -> 'SystemSettings':
        """Build the default policy from environment configuration"""
        if config is None:
            config = get_config()
        return cls(
            interest_rate=to_decimal(config.interest_rate, "interest_rate"),
            max_tenure=config.max_tenure,
            salary_cap_multiplier=to_decimal(config.salary_cap_multiplier, "salary_cap_multiplier")
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interest_rate": str(self.interest_rate),
            "max_tenure": self.max_tenure,
            "salary_cap_multiplier": str(self.salary_cap_multiplier)
        }


@dataclass(frozen=True)
class LoanTerms:
    """Principal and tenure of a loan"""
    principal: Decimal
    tenure_months: int

    def __post_init__(self):
        object.__setattr__(self, 'principal', require_positive(self.principal, "principal"))
        object.__setattr__(self, 'tenure_months', require_months(self.tenure_months, "tenure_months"))

    @property
    def regime(self) -> RepaymentRegime:
        return select_regime(self.tenure_months)
