from . import health, parents, students, teachers, payments, statistics

__all__ = [
    "health",
    "parents",
    "students",
    "teachers",
    "payments",
    "statistics",
]
