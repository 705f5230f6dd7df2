"""/v1/profile - salary, deductions and loans"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_tracker.api.v1.schemas import (
    DeductionSchema,
    LoanCreate,
    LoanSchema,
    ProfileResponse,
    ProfileUpdate,
    SalaryBreakdownSchema,
    UserRequest,
)
from cashflow_tracker.api.dependencies import get_record_store, get_request_id, parse_record_id
from cashflow_tracker.infrastructure.database.repositories import RecordStore, loan_to_domain, profile_to_domain
from cashflow_tracker.infrastructure.database.models import Loan, Profile
from cashflow_tracker.infrastructure.observability.metrics import record_not_found_counter
from cashflow_tracker.domain.exceptions import RecordNotFoundError
from cashflow_tracker.domain.summary import salary_breakdown

router = APIRouter()


def _loan_schema(row: Loan) -> LoanSchema:
    loan = loan_to_domain(row)
    return LoanSchema(
        id=loan.id,
        name=loan.name,
        amount=loan.amount,
        payment_frequency=loan.payment_frequency,
        next_payment_date=loan.next_payment_date,
    )


def _profile_response(row: Profile) -> ProfileResponse:
    profile = profile_to_domain(row)
    breakdown = salary_breakdown(profile)
    return ProfileResponse(
        user_id=row.user_id,
        name=profile.name,
        current_balance=profile.current_balance,
        salary_income=profile.salary_income,
        salary_frequency=profile.salary_frequency,
        days_off_per_month=profile.days_off_per_month,
        deductions=[DeductionSchema(name=d.name, amount=d.amount) for d in profile.deductions],
        loans=[_loan_schema(loan) for loan in row.loans],
        salary=SalaryBreakdownSchema(**breakdown.__dict__),
    )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    """Fetch the user's profile, creating an empty one on first access"""
    profile = store.profiles.get_or_create_profile(user_id)
    store.db.commit()
    return _profile_response(profile)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(request_body: ProfileUpdate, store: RecordStore = Depends(get_record_store)):
    """
    Update profile fields.

    Only fields present in the body are changed. Sending "deductions" replaces
    the full deduction list.
    """
    changes = {
        field: value
        for field, value in request_body.model_dump(exclude_unset=True, exclude={"user_id"}).items()
        if value is not None
    }
    profile = store.profiles.update_profile(request_body.user_id, changes)
    store.db.commit()
    return _profile_response(profile)


@router.post("/profile/reset-salary", response_model=ProfileResponse)
def reset_salary(request_body: UserRequest, store: RecordStore = Depends(get_record_store)):
    """Zero gross salary, deductions and days off"""
    profile = store.profiles.reset_salary(request_body.user_id)
    store.db.commit()
    return _profile_response(profile)


@router.post("/profile/loans", response_model=LoanSchema, status_code=201)
def add_loan(request_body: LoanCreate, store: RecordStore = Depends(get_record_store)):
    loan = store.profiles.add_loan(
        user_id=request_body.user_id,
        name=request_body.name,
        amount=request_body.amount,
        payment_frequency=request_body.payment_frequency,
        next_payment_date=request_body.next_payment_date,
    )
    store.db.commit()
    return _loan_schema(loan)


@router.delete("/profile/loans/{loan_id}", status_code=204)
def remove_loan(
    loan_id: str,
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    loan_uuid = parse_record_id(loan_id, "loan")
    try:
        store.profiles.remove_loan(user_id, loan_uuid)
        store.db.commit()
    except RecordNotFoundError as e:
        store.db.rollback()
        record_not_found_counter.labels(entity=e.entity).inc()
        logging.warning(f"Loan not found: {loan_id}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))
