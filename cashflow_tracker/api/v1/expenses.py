"""/v1/expenses - record, list, inspect and delete expenses"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_tracker.api.v1.schemas import ExpenseCreate, ExpenseSchema
from cashflow_tracker.api.dependencies import get_record_store, get_request_id, parse_record_id
from cashflow_tracker.infrastructure.database.repositories import RecordStore, expense_to_domain
from cashflow_tracker.infrastructure.database.models import Expense
from cashflow_tracker.infrastructure.observability.metrics import record_not_found_counter
from cashflow_tracker.domain.exceptions import RecordNotFoundError

router = APIRouter()


def _to_schema(row: Expense) -> ExpenseSchema:
    record = expense_to_domain(row)
    return ExpenseSchema(
        id=record.id,
        vendor=record.vendor,
        amount=record.amount,
        category=record.category,
        date=record.date,
        description=record.description,
    )


@router.post("/expenses", response_model=ExpenseSchema, status_code=201)
def create_expense(request_body: ExpenseCreate, store: RecordStore = Depends(get_record_store)):
    expense = store.expenses.create_expense(
        user_id=request_body.user_id,
        vendor=request_body.vendor,
        amount=request_body.amount,
        category=request_body.category,
        expense_date=request_body.date,
        description=request_body.description,
    )
    store.db.commit()
    return _to_schema(expense)


@router.get("/expenses", response_model=List[ExpenseSchema])
def list_expenses(
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    """All expenses for a user, newest first"""
    return [_to_schema(row) for row in store.expenses.get_expenses_by_user(user_id)]


@router.get("/expenses/{expense_id}", response_model=ExpenseSchema)
def get_expense(
    expense_id: str,
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    expense_uuid = parse_record_id(expense_id, "expense")
    try:
        return _to_schema(store.expenses.get_expense(user_id, expense_uuid))
    except RecordNotFoundError as e:
        record_not_found_counter.labels(entity=e.entity).inc()
        logging.warning(f"Expense not found: {expense_id}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(
    expense_id: str,
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    store: RecordStore = Depends(get_record_store),
):
    expense_uuid = parse_record_id(expense_id, "expense")
    try:
        store.expenses.delete_expense(user_id, expense_uuid)
        store.db.commit()
    except RecordNotFoundError as e:
        store.db.rollback()
        record_not_found_counter.labels(entity=e.entity).inc()
        logging.warning(f"Expense not found: {expense_id}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=404, detail=str(e))
