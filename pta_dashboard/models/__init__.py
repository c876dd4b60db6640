# pta_dashboard/models/__init__.py
"""Import all models here so Alembic sees the full metadata."""
from .base import Base
from .parent import Parent
from .student import Student, StudentStatus
from .teacher import Teacher, TeacherStatus
from .payment import Payment, PaymentMethod

__all__ = [
    "Base",
    "Parent",
    "Student",
    "StudentStatus",
    "Teacher",
    "TeacherStatus",
    "Payment",
    "PaymentMethod",
]
