"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from cashflow_tracker.api.main import create_app
from cashflow_tracker.infrastructure.database.models import Base
from cashflow_tracker.infrastructure.database.session import get_db
from cashflow_tracker.domain.models import (
    DeductionItem,
    ExpenseRecord,
    FinancialProfile,
    IncomeRecord,
    IncomeStatus,
    SalaryFrequency,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# A Friday; the following Monday is 2026-10-19
TODAY = date(2026, 10, 16)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_incomes(today: date) -> list[IncomeRecord]:
    """Two invoices, one already settled"""
    return [
        IncomeRecord(
            id="inc_1",
            client="Acme Corp",
            amount=5000.0,
            due_date=today + timedelta(days=5),
            status=IncomeStatus.OUTSTANDING,
        ),
        IncomeRecord(
            id="inc_2",
            client="Globex",
            amount=800.0,
            due_date=today + timedelta(days=2),
            status=IncomeStatus.PAID,
        ),
    ]


@pytest.fixture
def sample_expenses(today: date) -> list[ExpenseRecord]:
    return [
        ExpenseRecord(
            id="exp_1",
            vendor="Landlord",
            amount=2000.0,
            category="Rent",
            date=today + timedelta(days=10),
            description="November rent",
        ),
        ExpenseRecord(
            id="exp_2",
            vendor="Grocer",
            amount=150.0,
            category="Food",
            date=today - timedelta(days=3),
        ),
    ]


@pytest.fixture
def monthly_profile() -> FinancialProfile:
    """Gross 30000 a month, 5000 in deductions"""
    return FinancialProfile(
        current_balance=1000.0,
        salary_income=30000.0,
        salary_frequency=SalaryFrequency.MONTHLY,
        deductions=[
            DeductionItem(name="SSS", amount=1500.0),
            DeductionItem(name="Philhealth", amount=1000.0),
            DeductionItem(name="Pag-Ibig Fund", amount=2500.0),
        ],
        days_off_per_month=2,
    )
