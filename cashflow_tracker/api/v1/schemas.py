"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional

from cashflow_tracker.domain.models import IncomeStatus, LoanFrequency, SalaryFrequency


class IncomeCreate(BaseModel):
    """Request body for POST /v1/incomes"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    client: str = Field(..., min_length=1, description="Who owes the money")
    amount: float = Field(..., gt=0)
    due_date: date
    status: IncomeStatus = IncomeStatus.OUTSTANDING


class IncomeSchema(BaseModel):
    id: str
    client: str
    amount: float
    due_date: date
    status: IncomeStatus


class ExpenseCreate(BaseModel):
    """Request body for POST /v1/expenses"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    vendor: str = Field(..., min_length=1, description="Payee")
    amount: float = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    date: date
    description: str = ""


class ExpenseSchema(BaseModel):
    id: str
    vendor: str
    amount: float
    category: str
    date: date
    description: str


class DeductionSchema(BaseModel):
    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)


class LoanCreate(BaseModel):
    """Request body for POST /v1/profile/loans"""

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    payment_frequency: LoanFrequency = LoanFrequency.MONTHLY
    next_payment_date: date


class LoanSchema(BaseModel):
    id: str
    name: str
    amount: float
    payment_frequency: LoanFrequency
    next_payment_date: date


class ProfileUpdate(BaseModel):
    """Request body for PUT /v1/profile; omitted fields are left unchanged"""

    user_id: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    current_balance: Optional[float] = Field(None, ge=0)
    salary_income: Optional[float] = Field(None, ge=0, description="Gross monthly salary")
    salary_frequency: Optional[SalaryFrequency] = None
    deductions: Optional[List[DeductionSchema]] = None
    days_off_per_month: Optional[int] = Field(None, ge=0)


class UserRequest(BaseModel):
    user_id: str = Field(..., min_length=1)


class SalaryBreakdownSchema(BaseModel):
    gross_monthly: float
    total_deductions: float
    net_monthly: float
    monthly_working_days: int
    daily_income: float


class ProfileResponse(BaseModel):
    """Response for GET/PUT /v1/profile"""

    user_id: str
    name: str
    current_balance: float
    salary_income: float
    salary_frequency: SalaryFrequency
    days_off_per_month: int
    deductions: List[DeductionSchema]
    loans: List[LoanSchema]
    salary: SalaryBreakdownSchema


class ProjectionPointSchema(BaseModel):
    date: date
    balance: float


class SalaryEventSchema(BaseModel):
    id: str
    label: str
    amount: float
    date: date


class ForecastSchema(BaseModel):
    today: date
    horizon_days: int
    shortfall_date: Optional[date] = None
    series: List[ProjectionPointSchema]
    salary_events: List[SalaryEventSchema]


class ForecastResponse(ForecastSchema):
    """Response for GET /v1/forecast"""

    user_id: str
    current_balance: float


class UpcomingIncomeSchema(BaseModel):
    id: str
    label: str
    amount: float
    date: date
    projected: bool


class CategoryTotal(BaseModel):
    category: str
    amount: float


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    user_id: str
    currency: str
    current_balance: float
    projected_balance: float
    upcoming_income_total: float
    upcoming_expense_total: float
    current_month_expense_total: float
    upcoming_incomes: List[UpcomingIncomeSchema]
    expenses_by_category: List[CategoryTotal]
    salary: SalaryBreakdownSchema
    forecast: ForecastSchema
