# pta_dashboard/schemas/payment_schemas.py
"""Pydantic schemas for Payment entity."""
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from ..models.payment import PaymentMethod
from .parent_schemas import ParentSummary


class PaymentCreate(BaseModel):
    parent_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_date: date = Field(default_factory=date.today)
    receipt_url: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class PaymentUpdate(BaseModel):
    parent_id: Optional[UUID] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[date] = None
    receipt_url: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class PaymentRead(BaseModel):
    id: UUID
    parent_id: UUID
    amount: Decimal
    payment_method: str
    payment_date: date
    receipt_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentDetail(PaymentRead):
    parent: Optional[ParentSummary] = None
