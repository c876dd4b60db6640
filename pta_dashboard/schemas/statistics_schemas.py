# pta_dashboard/schemas/statistics_schemas.py
"""Read-only dashboard statistics records."""
from typing import List, Optional
from datetime import date
from decimal import Decimal
from pydantic import BaseModel, ConfigDict


class ClassSummary(BaseModel):
    class_name: str
    total: int
    paid: int
    percentage_paid: int

    model_config = ConfigDict(frozen=True)


class RecentPayment(BaseModel):
    parent_name: Optional[str]
    amount: Decimal
    payment_date: date

    model_config = ConfigDict(frozen=True)


class DashboardStatistics(BaseModel):
    total_students: int
    paid_students: int
    unpaid_students: int
    percentage_paid: int
    total_collected: Decimal
    total_parents: int
    paid_parents: int
    target_amount: Optional[Decimal] = None
    percentage_collected: int = 0
    class_summary: List[ClassSummary] = []
    highest_class: Optional[ClassSummary] = None
    lowest_class: Optional[ClassSummary] = None
    recent_payments: List[RecentPayment] = []

    model_config = ConfigDict(frozen=True)
