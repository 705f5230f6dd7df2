"""GET /v1/forecast and GET /v1/dashboard - projected cash balance"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_tracker.api.v1.schemas import (
    CategoryTotal,
    DashboardResponse,
    ForecastResponse,
    ForecastSchema,
    ProjectionPointSchema,
    SalaryBreakdownSchema,
    SalaryEventSchema,
    UpcomingIncomeSchema,
)
from cashflow_tracker.api.dependencies import get_record_store, get_request_id
from cashflow_tracker.config import settings
from cashflow_tracker.infrastructure.database.repositories import RecordStore
from cashflow_tracker.infrastructure.observability.logging import log_forecast
from cashflow_tracker.infrastructure.observability.metrics import record_forecast
from cashflow_tracker.domain.forecast import project
from cashflow_tracker.domain.models import ForecastResult
from cashflow_tracker.domain.summary import build_dashboard, resolve_current_balance

router = APIRouter()


def _forecast_fields(result: ForecastResult) -> dict:
    return {
        "today": result.series[0].date,
        "horizon_days": result.horizon_days,
        "shortfall_date": result.shortfall_date,
        "series": [ProjectionPointSchema(date=p.date, balance=p.balance) for p in result.series],
        "salary_events": [
            SalaryEventSchema(id=e.id, label=e.label, amount=e.amount, date=e.date)
            for e in result.salary_events
        ],
    }


@router.get("/forecast", response_model=ForecastResponse)
def get_forecast(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    as_of: Optional[date] = Query(None, description="Project from this date instead of today"),
    store: RecordStore = Depends(get_record_store),
):
    """
    Project the user's daily cash balance.

    Flow:
    1. Load incomes, expenses and profile (profile created if missing)
    2. Run the forecast engine from the profile's current balance
    3. Record metrics and a structured log line
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        incomes, expenses, profile = store.snapshot(user_id)
        store.db.commit()

        current_balance = resolve_current_balance(incomes, expenses, profile)
        result = project(current_balance, incomes, expenses, profile, today=as_of)

        duration_ms = (time.time() - start_time) * 1000
        record_forecast(result)
        log_forecast(
            request_id, user_id, result.horizon_days, result.shortfall_date, len(result.salary_events), duration_ms
        )

        return ForecastResponse(user_id=user_id, current_balance=current_balance, **_forecast_fields(result))

    except Exception as e:
        store.db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    as_of: Optional[date] = Query(None, description="Summarise as of this date instead of today"),
    store: RecordStore = Depends(get_record_store),
):
    """Dashboard figures: balance, upcoming income/expenses, category totals and the forecast"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        incomes, expenses, profile = store.snapshot(user_id)
        store.db.commit()

        summary = build_dashboard(
            incomes, expenses, profile, today=as_of, window_days=settings.upcoming_window_days
        )
        result = summary.forecast

        duration_ms = (time.time() - start_time) * 1000
        record_forecast(result)
        log_forecast(
            request_id, user_id, result.horizon_days, result.shortfall_date, len(result.salary_events), duration_ms
        )

        return DashboardResponse(
            user_id=user_id,
            currency=settings.currency,
            current_balance=summary.current_balance,
            projected_balance=summary.projected_balance,
            upcoming_income_total=summary.upcoming_income_total,
            upcoming_expense_total=summary.upcoming_expense_total,
            current_month_expense_total=summary.current_month_expense_total,
            upcoming_incomes=[UpcomingIncomeSchema(**item.__dict__) for item in summary.upcoming_incomes],
            expenses_by_category=[
                CategoryTotal(category=category, amount=amount)
                for category, amount in summary.expenses_by_category
            ],
            salary=SalaryBreakdownSchema(**summary.salary.__dict__),
            forecast=ForecastSchema(**_forecast_fields(result)),
        )

    except Exception as e:
        store.db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
