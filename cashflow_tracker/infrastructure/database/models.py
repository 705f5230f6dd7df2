"""SQLAlchemy ORM models for user financial records"""

import uuid
from sqlalchemy import Column, String, Float, DateTime, Date, Integer, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Income(Base):
    """Income owed to the user"""

    __tablename__ = "income"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    client = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="Outstanding")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    # Per-user insertion counter, orders records created within the same second
    seq = Column(Integer, nullable=False, default=0)


class Expense(Base):
    """Recorded expense"""

    __tablename__ = "expense"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    vendor = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    seq = Column(Integer, nullable=False, default=0)


class Profile(Base):
    """One financial profile per user"""

    __tablename__ = "profile"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, unique=True, index=True)
    name = Column(Text, nullable=False, default="")
    current_balance = Column(Float, nullable=False, default=0.0)
    salary_income = Column(Float, nullable=False, default=0.0)
    salary_frequency = Column(String(16), nullable=False, default="monthly")
    days_off_per_month = Column(Integer, nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    deductions = relationship(
        "Deduction", back_populates="profile", cascade="all, delete-orphan", order_by="Deduction.position"
    )
    loans = relationship("Loan", back_populates="profile", cascade="all, delete-orphan", order_by="Loan.position")


class Deduction(Base):
    """Monthly salary deduction"""

    __tablename__ = "profile_deduction"

    id = Column(Integer, primary_key=True, autoincrement=True)
    profile_id = Column(Uuid(as_uuid=True), ForeignKey("profile.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(Text, nullable=False)
    amount = Column(Float, nullable=False, default=0.0)

    profile = relationship("Profile", back_populates="deductions")


class Loan(Base):
    """Recurring loan repayment"""

    __tablename__ = "profile_loan"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    profile_id = Column(Uuid(as_uuid=True), ForeignKey("profile.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    amount = Column(Float, nullable=False)
    payment_frequency = Column(String(16), nullable=False, default="monthly")
    next_payment_date = Column(Date, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    profile = relationship("Profile", back_populates="loans")
