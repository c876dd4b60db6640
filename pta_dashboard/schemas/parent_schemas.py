# pta_dashboard/schemas/parent_schemas.py
"""Pydantic schemas for Parent entity."""
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ParentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Parent or guardian name")
    contact_number: str = Field(..., min_length=1, max_length=20, description="Phone number")
    email: EmailStr = Field(..., description="Email address")
    address: Optional[str] = Field(default=None, max_length=500, description="Home address")

    @field_validator('name', 'contact_number')
    @classmethod
    def strip_required(cls, v):
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError('Field cannot be blank')
        return v


class ParentCreate(ParentBase):
    """Schema for creating a parent. Payment state starts unpaid."""
    pass


class ParentUpdate(BaseModel):
    """Schema for updating a parent - payment fields are owned by payments"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    contact_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    email: Optional[EmailStr] = Field(default=None)
    address: Optional[str] = Field(default=None, max_length=500)

    model_config = ConfigDict(extra='forbid')

    @field_validator('name', 'contact_number', 'email')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class ParentSummary(BaseModel):
    id: UUID
    name: str
    email: str
    contact_number: str

    model_config = ConfigDict(from_attributes=True)


class ParentRead(ParentBase):
    id: UUID
    email: str
    payment_status: bool
    payment_date: Optional[date] = None
    payment_amount: Optional[Decimal] = None
    payment_method: Optional[str] = None
    receipt_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class LinkedStudent(BaseModel):
    id: UUID
    name: str
    class_name: str
    grade_level: str
    status: str
    payment_status: bool
    payment_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class ParentDetail(ParentRead):
    """Parent together with its linked students"""
    students: List[LinkedStudent] = []
