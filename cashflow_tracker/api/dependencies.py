"""Dependency injection for FastAPI endpoints"""

import uuid
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session
from cashflow_tracker.infrastructure.database.session import get_db
from cashflow_tracker.infrastructure.database.repositories import RecordStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    """Provide a record store bound to the request's session"""
    return RecordStore(db)


def parse_record_id(record_id: str, entity: str) -> uuid.UUID:
    """Path IDs are UUIDs; anything else is a client error"""
    try:
        return uuid.UUID(record_id)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {entity} ID format")
