import enum

from sqlalchemy import Boolean, Date, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import mapped_column, relationship

from .base import Base


class StudentStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TRANSFERRED = "transferred"


class Student(Base):
    __tablename__ = "students"

    # Foreign Keys
    parent_id = mapped_column(Uuid, ForeignKey("parents.id", ondelete="SET NULL"), nullable=True, index=True)
    teacher_id = mapped_column(Uuid, ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True, index=True)

    # Basic Information
    name = mapped_column(String(100), nullable=False, index=True)
    date_of_birth = mapped_column(Date, nullable=False)
    contact_number = mapped_column(String(20), nullable=False)
    email = mapped_column(String(100), nullable=True)
    address = mapped_column(String(500), nullable=False)
    notes = mapped_column(Text, nullable=True)

    # Academic Information
    class_name = mapped_column(String(50), nullable=False, index=True)
    grade_level = mapped_column(String(20), nullable=False)
    enrollment_date = mapped_column(Date, nullable=False)
    status = mapped_column(String(20), default=StudentStatus.ACTIVE.value, nullable=False)

    # Payment state, propagated from the parent's payments
    payment_status = mapped_column(Boolean, default=False, nullable=False)
    payment_date = mapped_column(Date, nullable=True)

    # Relationships
    parent = relationship("Parent", back_populates="students", lazy="raise")
    teacher = relationship("Teacher", back_populates="students", lazy="raise")
