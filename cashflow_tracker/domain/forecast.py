"""Cash-flow forecasting engine - projects daily balance from known and recurring events"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from cashflow_tracker.domain.models import (
    ExpenseRecord,
    FinancialProfile,
    ForecastResult,
    IncomeRecord,
    IncomeStatus,
    ProjectionPoint,
    SyntheticSalaryEvent,
)
from cashflow_tracker.domain.recurrence import loan_payment_dates, next_payday, pay_periods_per_month
from cashflow_tracker.utils.date_utils import days_between, generate_date_range, normalize_date

MIN_HORIZON_DAYS = 30
MAX_PAYDAY_ITERATIONS = 100


def outstanding_incomes(incomes: Iterable[IncomeRecord], today: date) -> List[IncomeRecord]:
    """Unpaid incomes due today or later"""
    return [
        inc for inc in incomes
        if inc.status == IncomeStatus.OUTSTANDING and normalize_date(inc.due_date) >= today
    ]


def future_expenses(expenses: Iterable[ExpenseRecord], today: date) -> List[ExpenseRecord]:
    """Expenses dated today or later"""
    return [exp for exp in expenses if normalize_date(exp.date) >= today]


def determine_horizon(
    today: date,
    incomes: List[IncomeRecord],
    expenses: List[ExpenseRecord],
) -> int:
    """
    Number of days to project past today.

    Covers the latest known income/expense, and never less than
    MIN_HORIZON_DAYS so an empty account still gets a visible chart.
    """
    max_relevant = today
    for inc in incomes:
        max_relevant = max(max_relevant, normalize_date(inc.due_date))
    for exp in expenses:
        max_relevant = max(max_relevant, normalize_date(exp.date))

    return max(days_between(today, max_relevant), MIN_HORIZON_DAYS)


def generate_salary_events(
    profile: FinancialProfile,
    today: date,
    limit: date,
) -> List[SyntheticSalaryEvent]:
    """
    Project paydays from today up to and including limit.

    Net pay per period = (gross - deductions) / pay periods per month.
    Bounded by MAX_PAYDAY_ITERATIONS regardless of the horizon length.
    """
    periods = pay_periods_per_month(profile.salary_frequency)
    if not periods:
        logging.warning(
            "Salary projection skipped: unknown salary frequency",
            extra={"salary_frequency": str(profile.salary_frequency)},
        )
        return []

    frequency = getattr(profile.salary_frequency, "value", profile.salary_frequency)
    salary_per_period = profile.net_monthly_salary() / periods

    events = []
    cursor = today
    iteration = 0
    while cursor <= limit and iteration < MAX_PAYDAY_ITERATIONS:
        payday = next_payday(cursor, profile.salary_frequency)
        if payday is None or payday > limit:
            break

        events.append(
            SyntheticSalaryEvent(
                id=f"salary-{payday.isoformat()}-{iteration}",
                label=f"Salary Payment ({frequency})",
                amount=salary_per_period,
                date=payday,
            )
        )
        cursor = payday + timedelta(days=1)
        iteration += 1

    return events


def project(
    current_balance: float,
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
    profile: Optional[FinancialProfile] = None,
    today: date | None = None,
) -> ForecastResult:
    """
    Main entry point: project the daily cash balance.

    Flow:
    1. Keep outstanding incomes and expenses dated today or later
    2. Size the horizon (at least 30 days, up to the latest known event)
    3. Net incomes, expenses, projected paydays and loan repayments per day
    4. Walk the horizon day by day, recording the first negative balance

    The series opens with a seed point (today, current_balance), followed by
    one end-of-day point for every date from today through the horizon end.
    """
    today = normalize_date(today or date.today())

    relevant_incomes = outstanding_incomes(incomes, today)
    relevant_expenses = future_expenses(expenses, today)

    horizon_days = determine_horizon(today, relevant_incomes, relevant_expenses)
    horizon_end = today + timedelta(days=horizon_days)

    net_by_day: Dict[date, float] = defaultdict(float)
    for inc in relevant_incomes:
        net_by_day[normalize_date(inc.due_date)] += inc.amount
    for exp in relevant_expenses:
        net_by_day[normalize_date(exp.date)] -= exp.amount

    salary_events: List[SyntheticSalaryEvent] = []
    if profile is not None and profile.salary_income > 0:
        # Paydays one day past the horizon are still listed as upcoming income
        salary_events = generate_salary_events(profile, today, horizon_end + timedelta(days=1))
        for event in salary_events:
            net_by_day[event.date] += event.amount

    if profile is not None and profile.loans:
        for loan in profile.loans:
            for payment_date in loan_payment_dates(loan, today, horizon_end):
                net_by_day[payment_date] -= loan.amount

    balance = current_balance
    series = [ProjectionPoint(date=today, balance=balance)]
    shortfall_date = None

    for day in generate_date_range(today, horizon_end):
        balance += net_by_day.get(day, 0)
        series.append(ProjectionPoint(date=day, balance=balance))

        if balance < 0 and shortfall_date is None:
            shortfall_date = day

    return ForecastResult(
        series=series,
        shortfall_date=shortfall_date,
        salary_events=salary_events,
        horizon_days=horizon_days,
    )
