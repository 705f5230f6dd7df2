"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class IncomeStatus(str, Enum):
    OUTSTANDING = "Outstanding"
    PAID = "Paid"


class SalaryFrequency(str, Enum):
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"


class LoanFrequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


@dataclass
class IncomeRecord:
    """Money owed to the user, e.g. an unpaid invoice"""

    id: str
    client: str
    amount: float
    due_date: date
    status: IncomeStatus = IncomeStatus.OUTSTANDING


@dataclass
class ExpenseRecord:
    """Money leaving the account on a given date"""

    id: str
    vendor: str
    amount: float
    category: str
    date: date
    description: str = ""


@dataclass
class DeductionItem:
    """Recurring monthly deduction from gross salary"""

    name: str
    amount: float


@dataclass
class LoanObligation:
    """Loan repaid at a fixed cadence, indefinitely"""

    id: str
    name: str
    amount: float
    payment_frequency: LoanFrequency
    next_payment_date: date


@dataclass
class FinancialProfile:
    """Per-user salary, deductions and loans"""

    current_balance: float = 0.0
    salary_income: float = 0.0  # gross, per month
    salary_frequency: SalaryFrequency = SalaryFrequency.MONTHLY
    deductions: List[DeductionItem] = field(default_factory=list)
    loans: List[LoanObligation] = field(default_factory=list)
    days_off_per_month: int = 0
    name: str = ""

    def total_deductions(self) -> float:
        return sum(d.amount for d in self.deductions)

    def net_monthly_salary(self) -> float:
        return self.salary_income - self.total_deductions()


@dataclass
class ProjectionPoint:
    date: date
    balance: float


@dataclass
class SyntheticSalaryEvent:
    """Predicted future payday; never persisted"""

    id: str
    label: str
    amount: float
    date: date


@dataclass
class ForecastResult:
    """Output of the forecast engine"""

    series: List[ProjectionPoint]
    shortfall_date: Optional[date]
    salary_events: List[SyntheticSalaryEvent]
    horizon_days: int

    @property
    def daily_points(self) -> List[ProjectionPoint]:
        """Series without the opening seed point: one point per calendar day"""
        return self.series[1:]

    def balance_on(self, day: date) -> Optional[float]:
        """End-of-day projected balance, or None outside the horizon"""
        for point in self.daily_points:
            if point.date == day:
                return point.balance
        return None


@dataclass
class SalaryBreakdown:
    gross_monthly: float
    total_deductions: float
    net_monthly: float
    monthly_working_days: int
    daily_income: float


@dataclass
class UpcomingIncome:
    """Outstanding income or projected salary payment shown on the dashboard"""

    id: str
    label: str
    amount: float
    date: date
    projected: bool


@dataclass
class DashboardSummary:
    current_balance: float
    forecast: ForecastResult
    upcoming_incomes: List[UpcomingIncome]
    upcoming_income_total: float
    upcoming_expense_total: float
    projected_balance: float
    current_month_expense_total: float
    expenses_by_category: List[tuple[str, float]]
    salary: SalaryBreakdown
