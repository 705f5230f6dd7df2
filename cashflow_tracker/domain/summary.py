"""Dashboard figures derived from records and the forecast"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional

from cashflow_tracker.domain.forecast import project
from cashflow_tracker.domain.models import (
    DashboardSummary,
    ExpenseRecord,
    FinancialProfile,
    IncomeRecord,
    IncomeStatus,
    SalaryBreakdown,
    UpcomingIncome,
)
from cashflow_tracker.utils.date_utils import normalize_date

STANDARD_WORKING_DAYS = 22


def salary_breakdown(profile: Optional[FinancialProfile]) -> SalaryBreakdown:
    """
    Monthly salary figures for the profile page.

    Working days = 22 - days off. Daily income is 0 when no working days
    remain rather than dividing by zero or a negative count.
    """
    if profile is None:
        profile = FinancialProfile()

    net_monthly = profile.net_monthly_salary()
    working_days = STANDARD_WORKING_DAYS - (profile.days_off_per_month or 0)
    daily_income = net_monthly / working_days if working_days > 0 else 0.0

    return SalaryBreakdown(
        gross_monthly=profile.salary_income,
        total_deductions=profile.total_deductions(),
        net_monthly=net_monthly,
        monthly_working_days=working_days,
        daily_income=daily_income,
    )


def resolve_current_balance(
    incomes: List[IncomeRecord],
    expenses: List[ExpenseRecord],
    profile: Optional[FinancialProfile],
) -> float:
    """Profile balance, or all incomes minus all expenses when there is no profile"""
    if profile is not None:
        return profile.current_balance
    return sum(inc.amount for inc in incomes) - sum(exp.amount for exp in expenses)


def expenses_by_category(expenses: List[ExpenseRecord]) -> List[tuple[str, float]]:
    """Category totals, largest first"""
    totals: Dict[str, float] = defaultdict(float)
    for exp in expenses:
        totals[exp.category] += exp.amount
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def build_dashboard(
    incomes: List[IncomeRecord],
    expenses: List[ExpenseRecord],
    profile: Optional[FinancialProfile] = None,
    today: date | None = None,
    window_days: int = 30,
) -> DashboardSummary:
    """
    Assemble everything the dashboard shows.

    Upcoming incomes include overdue outstanding invoices as well as projected
    paydays within the window. Upcoming expenses count only dated expenses in
    [today, today + window] plus the next repayment of each loan in that range.
    """
    today = normalize_date(today or date.today())
    window_end = today + timedelta(days=window_days)

    current_balance = resolve_current_balance(incomes, expenses, profile)
    forecast = project(current_balance, incomes, expenses, profile, today=today)

    upcoming = [
        UpcomingIncome(
            id=inc.id,
            label=inc.client,
            amount=inc.amount,
            date=normalize_date(inc.due_date),
            projected=False,
        )
        for inc in incomes
        if inc.status == IncomeStatus.OUTSTANDING and normalize_date(inc.due_date) <= window_end
    ]
    upcoming.extend(
        UpcomingIncome(id=event.id, label=event.label, amount=event.amount, date=event.date, projected=True)
        for event in forecast.salary_events
        if event.date <= window_end
    )
    upcoming.sort(key=lambda item: item.date)
    upcoming_income_total = sum(item.amount for item in upcoming)

    upcoming_expense_total = sum(
        exp.amount for exp in expenses if today <= normalize_date(exp.date) <= window_end
    )
    loans = profile.loans if profile is not None else []
    upcoming_expense_total += sum(
        loan.amount for loan in loans if today <= normalize_date(loan.next_payment_date) <= window_end
    )

    current_month_total = sum(
        exp.amount for exp in expenses
        if normalize_date(exp.date).year == today.year and normalize_date(exp.date).month == today.month
    )

    return DashboardSummary(
        current_balance=current_balance,
        forecast=forecast,
        upcoming_incomes=upcoming,
        upcoming_income_total=upcoming_income_total,
        upcoming_expense_total=upcoming_expense_total,
        projected_balance=current_balance + upcoming_income_total - upcoming_expense_total,
        current_month_expense_total=current_month_total,
        expenses_by_category=expenses_by_category(expenses),
        salary=salary_breakdown(profile),
    )
