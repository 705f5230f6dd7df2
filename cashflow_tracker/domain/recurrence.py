"""Recurrence rules for salary paydays and loan repayments"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from cashflow_tracker.domain.models import LoanFrequency, LoanObligation, SalaryFrequency
from cashflow_tracker.utils.date_utils import add_months, clamp_day, normalize_date

MONTHLY_PAYDAY = 15

# Fixed approximations: a fortnightly or weekly earner is treated as paid
# exactly 2 or 4 times per month.
PAY_PERIODS_PER_MONTH: Dict[SalaryFrequency, int] = {
    SalaryFrequency.MONTHLY: 1,
    SalaryFrequency.FORTNIGHTLY: 2,
    SalaryFrequency.WEEKLY: 4,
}

LOAN_STEP_MONTHS: Dict[LoanFrequency, int] = {
    LoanFrequency.MONTHLY: 1,
    LoanFrequency.QUARTERLY: 3,
    LoanFrequency.ANNUALLY: 12,
}


def _salary_frequency(value) -> Optional[SalaryFrequency]:
    try:
        return SalaryFrequency(value)
    except ValueError:
        return None


def _loan_frequency(value) -> Optional[LoanFrequency]:
    try:
        return LoanFrequency(value)
    except ValueError:
        return None


def pay_periods_per_month(frequency: SalaryFrequency | str) -> Optional[int]:
    """Number of paydays per month, or None for an unrecognised frequency"""
    freq = _salary_frequency(frequency)
    if freq is None:
        return None
    return PAY_PERIODS_PER_MONTH[freq]


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def next_payday(cursor: date, frequency: SalaryFrequency | str) -> Optional[date]:
    """
    First payday on or after cursor (strictly after it for weekly pay).

    Rules:
    - monthly: the 15th; past the 15th rolls to the 15th of next month
    - fortnightly: the 1st and the 15th of each month
    - weekly: the next Monday after the cursor's weekday

    Returns None for an unrecognised frequency.
    """
    cursor = normalize_date(cursor)
    freq = _salary_frequency(frequency)

    if freq is SalaryFrequency.MONTHLY:
        payday = clamp_day(cursor.year, cursor.month, MONTHLY_PAYDAY)
        if payday < cursor:
            following = _first_of_next_month(cursor)
            payday = clamp_day(following.year, following.month, MONTHLY_PAYDAY)
        return payday

    if freq is SalaryFrequency.FORTNIGHTLY:
        if cursor.day <= 1:
            payday = cursor.replace(day=1)
        elif cursor.day <= 15:
            payday = cursor.replace(day=15)
        else:
            payday = _first_of_next_month(cursor)
        if payday < cursor:
            payday += timedelta(days=14)
        return payday

    if freq is SalaryFrequency.WEEKLY:
        # Monday -> +7, Sunday -> +1
        payday = cursor + timedelta(days=7 - cursor.weekday())
        if payday < cursor:
            payday += timedelta(days=7)
        return payday

    return None


def loan_payment_dates(loan: LoanObligation, start: date, end: date) -> List[date]:
    """
    Payment dates of a loan falling within [start, end].

    Dates are offsets of whole calendar months from the stored next payment
    date, so a loan due on the 31st is paid on the last day of shorter months
    and returns to the 31st afterwards. A next payment date before start is
    treated as stale and yields nothing. The loan itself is not modified.
    """
    anchor = normalize_date(loan.next_payment_date)
    if anchor < start or anchor > end:
        return []

    freq = _loan_frequency(loan.payment_frequency)
    if freq is None:
        return [anchor]

    step = LOAN_STEP_MONTHS[freq]
    dates = []
    n = 0
    payment = anchor
    while payment <= end:
        dates.append(payment)
        n += 1
        payment = add_months(anchor, n * step)
    return dates
