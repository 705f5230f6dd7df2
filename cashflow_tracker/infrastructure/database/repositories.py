"""Data access layer for incomes, expenses and profiles"""

import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session
from cashflow_tracker.infrastructure.database.models import Deduction, Expense, Income, Loan, Profile
from cashflow_tracker.domain.exceptions import RecordNotFoundError
from cashflow_tracker.domain.models import (
    DeductionItem,
    ExpenseRecord,
    FinancialProfile,
    IncomeRecord,
    IncomeStatus,
    LoanFrequency,
    LoanObligation,
    SalaryFrequency,
)


def income_to_domain(row: Income) -> IncomeRecord:
    return IncomeRecord(
        id=str(row.id),
        client=row.client,
        amount=row.amount,
        due_date=row.due_date,
        status=IncomeStatus(row.status),
    )


def expense_to_domain(row: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        id=str(row.id),
        vendor=row.vendor,
        amount=row.amount,
        category=row.category,
        date=row.date,
        description=row.description or "",
    )


def loan_to_domain(row: Loan) -> LoanObligation:
    return LoanObligation(
        id=str(row.id),
        name=row.name,
        amount=row.amount,
        payment_frequency=LoanFrequency(row.payment_frequency),
        next_payment_date=row.next_payment_date,
    )


def profile_to_domain(row: Profile) -> FinancialProfile:
    return FinancialProfile(
        current_balance=row.current_balance,
        salary_income=row.salary_income,
        salary_frequency=SalaryFrequency(row.salary_frequency),
        deductions=[DeductionItem(name=d.name, amount=d.amount) for d in row.deductions],
        loans=[loan_to_domain(loan) for loan in row.loans],
        days_off_per_month=row.days_off_per_month,
        name=row.name,
    )


class IncomeRepository:
    """Repository for incomes"""

    def __init__(self, db: Session):
        self.db = db

    def _next_seq(self, user_id: str) -> int:
        current = self.db.query(func.max(Income.seq)).filter(Income.user_id == user_id).scalar()
        return (current or 0) + 1

    def create_income(
        self,
        user_id: str,
        client: str,
        amount: float,
        due_date: date,
        status: IncomeStatus = IncomeStatus.OUTSTANDING,
    ) -> Income:
        """Persist a new income"""
        db_income = Income(
            user_id=user_id,
            client=client,
            amount=amount,
            due_date=due_date,
            status=IncomeStatus(status).value,
            seq=self._next_seq(user_id),
        )
        self.db.add(db_income)
        self.db.flush()  # Get ID without committing
        return db_income

    def get_incomes_by_user(self, user_id: str) -> List[Income]:
        """Fetch all incomes for a user, newest first"""
        return (
            self.db.query(Income)
            .filter(Income.user_id == user_id)
            .order_by(Income.created_at.desc(), Income.seq.desc())
            .all()
        )

    def get_income(self, user_id: str, income_id: uuid.UUID) -> Income:
        """Fetch one of the user's incomes; another user's income counts as missing"""
        income = (
            self.db.query(Income)
            .filter(Income.id == income_id, Income.user_id == user_id)
            .first()
        )
        if income is None:
            raise RecordNotFoundError("Income", str(income_id))
        return income

    def mark_paid(self, user_id: str, income_id: uuid.UUID) -> Income:
        income = self.get_income(user_id, income_id)
        income.status = IncomeStatus.PAID.value
        self.db.flush()
        return income

    def delete_income(self, user_id: str, income_id: uuid.UUID) -> None:
        self.db.delete(self.get_income(user_id, income_id))
        self.db.flush()


class ExpenseRepository:
    """Repository for expenses"""

    def __init__(self, db: Session):
        self.db = db

    def _next_seq(self, user_id: str) -> int:
        current = self.db.query(func.max(Expense.seq)).filter(Expense.user_id == user_id).scalar()
        return (current or 0) + 1

    def create_expense(
        self,
        user_id: str,
        vendor: str,
        amount: float,
        category: str,
        expense_date: date,
        description: str = "",
    ) -> Expense:
        """Persist a new expense"""
        db_expense = Expense(
            user_id=user_id,
            vendor=vendor,
            amount=amount,
            category=category,
            date=expense_date,
            description=description,
            seq=self._next_seq(user_id),
        )
        self.db.add(db_expense)
        self.db.flush()
        return db_expense

    def get_expenses_by_user(self, user_id: str) -> List[Expense]:
        """Fetch all expenses for a user, newest first"""
        return (
            self.db.query(Expense)
            .filter(Expense.user_id == user_id)
            .order_by(Expense.created_at.desc(), Expense.seq.desc())
            .all()
        )

    def get_expense(self, user_id: str, expense_id: uuid.UUID) -> Expense:
        expense = (
            self.db.query(Expense)
            .filter(Expense.id == expense_id, Expense.user_id == user_id)
            .first()
        )
        if expense is None:
            raise RecordNotFoundError("Expense", str(expense_id))
        return expense

    def delete_expense(self, user_id: str, expense_id: uuid.UUID) -> None:
        self.db.delete(self.get_expense(user_id, expense_id))
        self.db.flush()


class ProfileRepository:
    """Repository for the single per-user financial profile"""

    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def get_or_create_profile(self, user_id: str) -> Profile:
        """Fetch the profile, creating it with zero defaults on first access"""
        profile = self.get_profile(user_id)
        if profile is None:
            profile = Profile(
                user_id=user_id,
                name="",
                current_balance=0.0,
                salary_income=0.0,
                salary_frequency=SalaryFrequency.MONTHLY.value,
                days_off_per_month=0,
            )
            self.db.add(profile)
            self.db.flush()
        return profile

    def update_profile(self, user_id: str, changes: Dict[str, Any]) -> Profile:
        """
        Merge changes into the profile.

        Only keys present in changes are written. A "deductions" entry replaces
        the whole deduction list; loans are managed through add_loan/remove_loan.
        """
        profile = self.get_or_create_profile(user_id)

        for field in ("name", "current_balance", "salary_income", "days_off_per_month"):
            if field in changes:
                setattr(profile, field, changes[field])

        if "salary_frequency" in changes:
            profile.salary_frequency = SalaryFrequency(changes["salary_frequency"]).value

        if "deductions" in changes:
            profile.deductions = [
                Deduction(position=i, name=item["name"], amount=item["amount"])
                for i, item in enumerate(changes["deductions"])
            ]

        self.db.flush()
        return profile

    def reset_salary(self, user_id: str) -> Profile:
        """Zero gross salary, deductions and days off; balance and loans are kept"""
        return self.update_profile(
            user_id,
            {"salary_income": 0.0, "deductions": [], "days_off_per_month": 0},
        )

    def add_loan(
        self,
        user_id: str,
        name: str,
        amount: float,
        payment_frequency: LoanFrequency,
        next_payment_date: date,
    ) -> Loan:
        profile = self.get_or_create_profile(user_id)
        loan = Loan(
            name=name,
            amount=amount,
            payment_frequency=LoanFrequency(payment_frequency).value,
            next_payment_date=next_payment_date,
            position=max((existing.position for existing in profile.loans), default=-1) + 1,
        )
        profile.loans.append(loan)
        self.db.flush()
        return loan

    def remove_loan(self, user_id: str, loan_id: uuid.UUID) -> None:
        profile = self.get_or_create_profile(user_id)
        loan = next((loan for loan in profile.loans if loan.id == loan_id), None)
        if loan is None:
            raise RecordNotFoundError("Loan", str(loan_id))
        profile.loans.remove(loan)
        self.db.flush()


class RecordStore:
    """Per-session data-access context handed to the forecast and dashboard endpoints"""

    def __init__(self, db: Session):
        self.db = db
        self.incomes = IncomeRepository(db)
        self.expenses = ExpenseRepository(db)
        self.profiles = ProfileRepository(db)

    def snapshot(self, user_id: str) -> Tuple[List[IncomeRecord], List[ExpenseRecord], FinancialProfile]:
        """Load a user's records as domain objects"""
        incomes = [income_to_domain(row) for row in self.incomes.get_incomes_by_user(user_id)]
        expenses = [expense_to_domain(row) for row in self.expenses.get_expenses_by_user(user_id)]
        profile = profile_to_domain(self.profiles.get_or_create_profile(user_id))
        return incomes, expenses, profile
