# pta_dashboard/schemas/student_schemas.py
"""Pydantic schemas for Student entity."""
from typing import Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..models.student import StudentStatus
from .parent_schemas import ParentSummary


class TeacherSummary(BaseModel):
    id: UUID
    name: str
    employee_id: str

    model_config = ConfigDict(from_attributes=True)


class StudentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Student name")
    class_name: str = Field(..., min_length=1, max_length=50, description="Class or section name")
    grade_level: str = Field(..., min_length=1, max_length=20, description="Grade level")
    date_of_birth: date
    contact_number: str = Field(..., min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    address: str = Field(..., min_length=1, max_length=500)
    enrollment_date: date
    status: StudentStatus = StudentStatus.ACTIVE
    notes: Optional[str] = None
    parent_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None

    model_config = ConfigDict(use_enum_values=True)


class StudentCreate(StudentBase):
    pass


class StudentUpdate(BaseModel):
    """Schema for updating student - all fields optional"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    class_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    grade_level: Optional[str] = Field(default=None, min_length=1, max_length=20)
    date_of_birth: Optional[date] = None
    contact_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    enrollment_date: Optional[date] = None
    status: Optional[StudentStatus] = None
    notes: Optional[str] = None
    parent_id: Optional[UUID] = None
    teacher_id: Optional[UUID] = None

    model_config = ConfigDict(use_enum_values=True)

    @field_validator(
        'name', 'class_name', 'grade_level', 'date_of_birth', 'contact_number',
        'address', 'enrollment_date', 'status',
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class StudentRead(StudentBase):
    id: UUID
    email: Optional[str] = None
    status: str
    payment_status: bool
    payment_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudentListItem(StudentRead):
    parent_name: Optional[str] = None


class StudentDetail(StudentRead):
    """Student together with its parent and teacher"""
    parent: Optional[ParentSummary] = None
    teacher: Optional[TeacherSummary] = None
