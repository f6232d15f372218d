"""
Test suite for policy module

Tests lending policy settings, loan terms validation and regime selection.
"""

import pytest
import dataclasses
from decimal import Decimal

from repayment_core.config import RepaymentConfig
from repayment_core.exceptions import InvalidInput
from repayment_core.policy import (
    SystemSettings, LoanTerms, RepaymentRegime, FLAT_RATE_MAX_TENURE,
    select_regime, require_months, require_positive, require_non_negative
)


class TestRegimeSelection:
    """Test tenure threshold between flat and reducing regimes"""
    
    def test_threshold(self):
        assert FLAT_RATE_MAX_TENURE == 12
        assert select_regime(1) == RepaymentRegime.FLAT_RATE
        assert select_regime(12) == RepaymentRegime.FLAT_RATE
        assert select_regime(13) == RepaymentRegime.REDUCING_BALANCE
        assert select_regime(60) == RepaymentRegime.REDUCING_BALANCE


class TestSystemSettings:
    """Test lending policy value"""
    
    def test_defaults(self):
        settings = SystemSettings()
        
        assert settings.interest_rate == Decimal('0.10')
        assert settings.max_tenure == 12
        assert settings.salary_cap_multiplier == Decimal('3')
    
    def test_numbers_converted_to_decimal(self):
        settings = SystemSettings(interest_rate=0.05, max_tenure=24, salary_cap_multiplier=4)
        
        assert settings.interest_rate == Decimal('0.05')
        assert isinstance(settings.interest_rate, Decimal)
        assert settings.salary_cap_multiplier == Decimal('4')
    
    def test_invalid_settings(self):
        with pytest.raises(InvalidInput, match="interest_rate"):
            SystemSettings(interest_rate=Decimal('-0.01'))
        
        with pytest.raises(InvalidInput, match="max_tenure"):
            SystemSettings(max_tenure=0)
        
        with pytest.raises(InvalidInput, match="salary_cap_multiplier"):
            SystemSettings(salary_cap_multiplier=-1)
    
    def test_zero_rate_allowed(self):
        assert SystemSettings(interest_rate=0).interest_rate == Decimal('0')
    
    def test_immutable(self):
        settings = SystemSettings()
        
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.interest_rate = Decimal('0.2')
    
    def test_from_config(self):
        config = RepaymentConfig(interest_rate="0.05", max_tenure=24, salary_cap_multiplier="4")
        settings = SystemSettings.from_config(config)
        
        assert settings == SystemSettings(
            interest_rate=Decimal('0.05'), max_tenure=24, salary_cap_multiplier=Decimal('4')
        )
    
    def test_from_config_malformed_rate(self):
        config = RepaymentConfig(interest_rate="ten percent")
        
        with pytest.raises(InvalidInput, match="interest_rate") as exc_info:
            SystemSettings.from_config(config)
        
        assert exc_info.value.field == "interest_rate"
    
    def test_to_dict(self):
        assert SystemSettings().to_dict() == {
            "interest_rate": "0.10",
            "max_tenure": 12,
            "salary_cap_multiplier": "3"
        }


class TestLoanTerms:
    """Test loan terms validation"""
    
    def test_valid_terms(self):
        terms = LoanTerms(principal=100000, tenure_months=3)
        
        assert terms.principal == Decimal('100000')
        assert terms.tenure_months == 3
        assert terms.regime == RepaymentRegime.FLAT_RATE
        assert LoanTerms(principal=200000, tenure_months=18).regime == RepaymentRegime.REDUCING_BALANCE
    
    def test_integral_tenure_accepted(self):
        assert LoanTerms(principal=1000, tenure_months=6.0).tenure_months == 6
        assert LoanTerms(principal=1000, tenure_months="6").tenure_months == 6
    
    def test_invalid_terms(self):
        with pytest.raises(InvalidInput, match="principal"):
            LoanTerms(principal=0, tenure_months=3)
        
        with pytest.raises(InvalidInput, match="principal"):
            LoanTerms(principal=-500, tenure_months=3)
        
        with pytest.raises(InvalidInput, match="whole number"):
            LoanTerms(principal=1000, tenure_months=2.5)
        
        with pytest.raises(InvalidInput, match="at least 1"):
            LoanTerms(principal=1000, tenure_months=0)


class TestValidators:
    """Test shared input validators"""
    
    def test_require_months(self):
        assert require_months(18, "tenure_months") == 18
        assert isinstance(require_months(Decimal('18'), "tenure_months"), int)
        
        with pytest.raises(InvalidInput) as exc_info:
            require_months(-3, "target_tenure")
        assert exc_info.value.field == "target_tenure"
        assert exc_info.value.value == -3
    
    def test_require_positive(self):
        assert require_positive("2500", "monthly_salary") == Decimal('2500')
        
        with pytest.raises(InvalidInput):
            require_positive(0, "monthly_salary")
    
    def test_require_non_negative(self):
        assert require_non_negative(0, "current_outstanding") == Decimal('0')
        
        with pytest.raises(InvalidInput):
            require_non_negative(-1, "current_outstanding")
