"""
Pydantic schemas for API requests
"""

from datetime import date
from typing import Optional, Union
from pydantic import BaseModel, Field

from ..currency import to_decimal
from ..policy import SystemSettings


# Amounts may be sent as Decimal strings ("150000.50", "₦150,000") or JSON numbers
Amount = Union[str, int, float]


class SettingsModel(BaseModel):
    interest_rate: Amount = Field(..., description="Monthly rate, e.g. \"0.10\" or 0.1")
    max_tenure: int = Field(12, description="Advisory maximum tenure in months")
    salary_cap_multiplier: Amount = Field("3", description="Repayment ceiling as a multiple of salary")
    
    def to_settings(self) -> SystemSettings:
        return SystemSettings(
            interest_rate=to_decimal(self.interest_rate, "interest_rate"),
            max_tenure=self.max_tenure,
            salary_cap_multiplier=to_decimal(self.salary_cap_multiplier, "salary_cap_multiplier")
        )


class QuoteRequest(BaseModel):
    principal: Amount
    tenure_months: int
    settings: Optional[SettingsModel] = None


class CapacityRequest(BaseModel):
    monthly_salary: Amount
    current_outstanding: Amount = "0"
    target_tenure: int
    settings: Optional[SettingsModel] = None


class ScheduleRequest(BaseModel):
    principal: Amount
    tenure_months: int
    start_date: date = Field(..., description="ISO date the loan starts; first installment is due a month later")
    settings: Optional[SettingsModel] = None


class MinimumTenureRequest(BaseModel):
    principal: Amount
    monthly_salary: Amount
    affordability_ratio: Amount = "0.4"
    settings: Optional[SettingsModel] = None
