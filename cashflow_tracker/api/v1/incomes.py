"""/v1/incomes - record, list, settle and delete incomes"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_tracker.api.v1.schemas import IncomeCreate, IncomeSchema
from cashflow_tracker.api.dependencies import get_record_store, get_request_id, parse_record_id
from cashflow_tracker.infrastructure.database.repositories import RecordStore, income_to_domain
from cashflow_tracker.infrastructure.database.models import Income
from cashflow_tracker.infrastructure.observability.metrics import record_not_found_counter
from cashflow_tracker.domain.exceptions import RecordNotFoundError

router = APIRouter()


def _to_schema(row: Income) -> IncomeSchema:
    record = income_to_domain(row)
    return IncomeSchema(
        id=record.id,
        client=record.client,
        amount=record.amount,
        due_date=record.due_date,
        status=record.status,
    )


@router.post("/incomes", response_model=IncomeSchema, status_code=201)
def create_income(request_body: IncomeCreate, store: RecordStore = Depends(get_record_store)):
    """Record money owed to the user"""
    income = store.incomes.create_income(
        user_id=request_body.user_id,
        client=request_body.client,
        amount=request_body.amount,
        due_date=request_body.due_date,
        status=request_body.status,
    )
    store.db.commit()
    return _to_schema(income)


@router.get("/incomes", response_model=List[IncomeSchema])
def list_incomes(
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    """All incomes for a user, newest first"""
    return [_to_schema(row) for row in store.incomes.get_incomes_by_user(user_id)]


@router.post("/incomes/{income_id}/paid", response_model=IncomeSchema)
def mark_income_paid(
    income_id: str,
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    """
    Mark an income as paid.

    Paid incomes no longer feed the forecast or the upcoming-income list.
    """
    income_uuid = parse_record_id(income_id, "income")
    try:
        income = store.incomes.mark_paid(user_id, income_uuid)
        store.db.commit()
        return _to_schema(income)
    except RecordNotFoundError as e:
        store.db.rollback()
        record_not_found_counter.labels(entity=e.entity).inc()
        logging.warning(f"Income not found: {income_id}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/incomes/{income_id}", status_code=204)
def delete_income(
    income_id: str,
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    income_uuid = parse_record_id(income_id, "income")
    try:
        store.incomes.delete_income(user_id, income_uuid)
        store.db.commit()
    except RecordNotFoundError as e:
        store.db.rollback()
        record_not_found_counter.labels(entity=e.entity).inc()
        logging.warning(f"Income not found: {income_id}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))
