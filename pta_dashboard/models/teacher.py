import enum

from sqlalchemy import Date, JSON, Numeric, String, Text
from sqlalchemy.orm import mapped_column, relationship

from .base import Base


class TeacherStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class Teacher(Base):
    __tablename__ = "teachers"

    # Basic Information
    name = mapped_column(String(100), nullable=False, index=True)
    employee_id = mapped_column(String(20), nullable=False, unique=True, index=True)
    contact_number = mapped_column(String(20), nullable=False)
    email = mapped_column(String(100), nullable=False, index=True)
    address = mapped_column(String(500), nullable=False)
    date_of_birth = mapped_column(Date, nullable=False)

    # Employment
    hire_date = mapped_column(Date, nullable=False)
    department = mapped_column(String(100), nullable=False)
    position = mapped_column(String(100), nullable=False)
    assigned_classes = mapped_column(JSON, default=list, nullable=False)  # List of class names
    salary = mapped_column(Numeric(12, 2), nullable=True)
    notes = mapped_column(Text, nullable=True)

    # Status
    status = mapped_column(String(20), default=TeacherStatus.ACTIVE.value, nullable=False)

    # Relationships
    students = relationship("Student", back_populates="teacher", lazy="raise", passive_deletes=True)
