from .base_service import BaseService
from .parent_service import ParentService
from .student_service import StudentService
from .teacher_service import TeacherService
from .payment_service import PaymentService
from .statistics_service import StatisticsService, compute_statistics

__all__ = [
    "BaseService",
    "ParentService",
    "StudentService",
    "TeacherService",
    "PaymentService",
    "StatisticsService",
    "compute_statistics",
]
