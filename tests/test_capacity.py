"""
Test suite for capacity module

Tests the maximum borrowable principal derived from salary, its round trip
through the repayment model, and the minimum tenure recommendation.
"""

import pytest
from decimal import Decimal

from repayment_core.capacity import (
    LoanCapacity, estimate_capacity, recommend_minimum_tenure
)
from repayment_core.currency import floor_to_unit
from repayment_core.exceptions import InvalidInput
from repayment_core.policy import SystemSettings
from repayment_core.repayment import compute_total_repayment


class TestEstimateCapacity:
    """Test salary-capped borrowing capacity"""
    
    def setup_method(self):
        # 10% per month, total repayment capped at 3 x monthly salary
        self.settings = SystemSettings(
            interest_rate=Decimal('0.1'), max_tenure=12, salary_cap_multiplier=Decimal('3')
        )
    
    def test_flat_rate_capacity(self):
        """Test capacity for the standard three month loan"""
        capacity = estimate_capacity(50000, 0, 3, self.settings)
        
        # 150,000 / 1.3 = 115,384.61
        assert capacity.max_principal == 115384
        # 115,384 * 1.3 = 149,999.2
        assert capacity.total_repayment_with_interest == 149999
        assert capacity.monthly_repayment == 49999
        assert capacity.remaining_capacity == 150000
    
    def test_outstanding_reduces_capacity(self):
        capacity = estimate_capacity(50000, 30000, 3, self.settings)
        
        assert capacity.remaining_capacity == 120000
        assert capacity.max_principal == 92307
        assert capacity.total_repayment_with_interest == 119999
    
    def test_no_headroom(self):
        """Test outstanding repayment above the ceiling leaves nothing to lend"""
        capacity = estimate_capacity(50000, 200000, 3, self.settings)
        
        assert capacity == LoanCapacity(
            max_principal=0,
            total_repayment_with_interest=0,
            monthly_repayment=0,
            remaining_capacity=0
        )
    
    def test_reducing_balance_capacity(self):
        capacity = estimate_capacity(50000, 0, 18, self.settings)
        quote = compute_total_repayment(capacity.max_principal, 18, self.settings)
        
        assert capacity.max_principal > 0
        assert capacity.total_repayment_with_interest == floor_to_unit(quote.total)
        assert capacity.monthly_repayment == floor_to_unit(quote.monthly_payment)
        # One more unit of principal would break the ceiling
        over = compute_total_repayment(capacity.max_principal + 1, 18, self.settings)
        assert over.total > Decimal('150000')
    
    def test_never_overstates_capacity(self):
        """Test total repayment on max principal stays within the ceiling"""
        for salary in (1000, 37500, 50000, 123457):
            for tenure in (1, 3, 6, 12, 13, 18, 24, 36):
                available = Decimal(salary) * 3
                capacity = estimate_capacity(salary, 0, tenure, self.settings)
                quote = compute_total_repayment(capacity.max_principal, tenure, self.settings)
                
                assert quote.total <= available
                assert capacity.total_repayment_with_interest <= capacity.remaining_capacity
    
    def test_zero_rate(self):
        settings = SystemSettings(interest_rate=0, salary_cap_multiplier=3)
        capacity = estimate_capacity(10000, 0, 24, settings)
        
        assert capacity.max_principal == 30000
        assert capacity.total_repayment_with_interest == 30000
        assert capacity.monthly_repayment == 1250
    
    def test_fractional_salary_floored(self):
        capacity = estimate_capacity(Decimal('1000.75'), 0, 1, self.settings)
        
        assert capacity.remaining_capacity == 3002
    
    def test_very_long_tenure(self):
        """Test interest on an extreme tenure leaves no principal to lend"""
        capacity = estimate_capacity(50000, 0, 10**8, self.settings)
        
        assert capacity.max_principal == 0
        assert capacity.remaining_capacity == 150000
    
    def test_invalid_inputs(self):
        with pytest.raises(InvalidInput, match="monthly_salary"):
            estimate_capacity(0, 0, 3, self.settings)
        
        with pytest.raises(InvalidInput, match="monthly_salary"):
            estimate_capacity(-5000, 0, 3, self.settings)
        
        with pytest.raises(InvalidInput, match="current_outstanding"):
            estimate_capacity(50000, -1, 3, self.settings)
        
        with pytest.raises(InvalidInput, match="target_tenure"):
            estimate_capacity(50000, 0, 0, self.settings)
    
    def test_to_dict(self):
        capacity = estimate_capacity(50000, 0, 3, self.settings)
        data = capacity.to_dict()
        
        assert data["max_principal"] == 115384
        assert all(isinstance(value, int) for value in data.values())


class TestRecommendMinimumTenure:
    """Test shortest affordable tenure"""
    
    def setup_method(self):
        self.settings = SystemSettings(interest_rate=Decimal('0.1'))
    
    def test_recommendation(self):
        """Test 100,000 at 40% of a 50,000 salary needs seven months"""
        # 100,000 * 1.4 = 140,000; 140,000 / 20,000 = 7
        assert recommend_minimum_tenure(100000, 50000, self.settings) == 7
    
    def test_rounds_up(self):
        # 140,000 / 28,000 = 5 exactly; one more unit needs another month
        assert recommend_minimum_tenure(100000, 70000, self.settings) == 5
        assert recommend_minimum_tenure(100001, 70000, self.settings) == 6
    
    def test_small_loan_needs_one_month(self):
        assert recommend_minimum_tenure(10000, 50000, self.settings) == 1
    
    def test_custom_ratio(self):
        assert recommend_minimum_tenure(100000, 50000, self.settings, affordability_ratio="0.5") == 6
    
    def test_invalid_inputs(self):
        with pytest.raises(InvalidInput):
            recommend_minimum_tenure(0, 50000, self.settings)
        
        with pytest.raises(InvalidInput):
            recommend_minimum_tenure(100000, 0, self.settings)
        
        with pytest.raises(InvalidInput, match="affordability_ratio"):
            recommend_minimum_tenure(100000, 50000, self.settings, affordability_ratio=0)
        
        with pytest.raises(InvalidInput, match="affordability_ratio"):
            recommend_minimum_tenure(100000, 50000, self.settings, affordability_ratio=Decimal('1.5'))
