# pta_dashboard/schemas/teacher_schemas.py
"""Pydantic schemas for Teacher entity."""
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..models.teacher import TeacherStatus


def _clean_classes(classes):
    seen = []
    for name in classes or []:
        name = name.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


class TeacherBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    employee_id: str = Field(..., min_length=1, max_length=20, description="Unique employee number")
    contact_number: str = Field(..., min_length=1, max_length=20)
    email: EmailStr
    address: str = Field(..., min_length=1, max_length=500)
    date_of_birth: date
    hire_date: date
    department: str = Field(..., min_length=1, max_length=100)
    position: str = Field(..., min_length=1, max_length=100)
    assigned_classes: List[str] = Field(default_factory=list)
    status: TeacherStatus = TeacherStatus.ACTIVE
    salary: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator('assigned_classes')
    @classmethod
    def dedupe_classes(cls, v):
        return _clean_classes(v)

    @field_validator('employee_id')
    @classmethod
    def normalize_employee_id(cls, v):
        return v.strip()


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(BaseModel):
    """Schema for updating teacher - all fields optional"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    employee_id: Optional[str] = Field(default=None, min_length=1, max_length=20)
    contact_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    department: Optional[str] = Field(default=None, min_length=1, max_length=100)
    position: Optional[str] = Field(default=None, min_length=1, max_length=100)
    assigned_classes: Optional[List[str]] = None
    status: Optional[TeacherStatus] = None
    salary: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator('assigned_classes')
    @classmethod
    def dedupe_classes(cls, v):
        return _clean_classes(v) if v is not None else v

    @field_validator(
        'name', 'employee_id', 'contact_number', 'email', 'address', 'date_of_birth',
        'hire_date', 'department', 'position', 'assigned_classes', 'status',
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class TeacherRead(TeacherBase):
    id: UUID
    email: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TeacherAssignStudents(BaseModel):
    student_ids: List[UUID] = Field(..., min_length=1)
