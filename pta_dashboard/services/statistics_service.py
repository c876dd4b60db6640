# pta_dashboard/services/statistics_service.py
"""Dashboard statistics: a pure aggregate over the current snapshot."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from ..core.cache import cache_manager
from ..core.config import settings
from ..models.parent import Parent
from ..models.payment import Payment
from ..models.student import Student
from ..models.teacher import Teacher
from ..schemas.statistics_schemas import ClassSummary, DashboardStatistics, RecentPayment
from ..utils.cache_invalidation import STATISTICS_KEY

logger = logging.getLogger(__name__)


def percentage(part, whole) -> int:
    """Whole-number percentage rounded half up; 0 when there is nothing to divide by."""
    if not whole:
        return 0
    value = Decimal(part) * 100 / Decimal(whole)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_statistics(
    students: Iterable,
    payments: Iterable,
    parents: Iterable,
    known_classes: Iterable[str] = (),
    target_amount: Optional[Decimal] = None,
    recent_limit: int = 5,
) -> DashboardStatistics:
    """Build the dashboard summary. Has no side effects.

    ``known_classes`` adds classes that may have no students yet (e.g. a
    teacher's assigned classes); they report 0%.
    """
    students = list(students)
    payments = list(payments)
    parents = list(parents)

    total_students = len(students)
    paid_students = sum(1 for s in students if s.payment_status)
    total_collected = sum((Decimal(p.amount) for p in payments), Decimal("0"))
    paid_parents = sum(1 for p in parents if p.payment_status)

    groups = {name: [0, 0] for name in known_classes if name}
    for student in students:
        counts = groups.setdefault(student.class_name, [0, 0])
        counts[0] += 1
        if student.payment_status:
            counts[1] += 1

    class_summary = [
        ClassSummary(class_name=name, total=total, paid=paid, percentage_paid=percentage(paid, total))
        for name, (total, paid) in sorted(groups.items())
    ]

    highest = max(class_summary, key=lambda c: c.percentage_paid, default=None)
    lowest = min(class_summary, key=lambda c: c.percentage_paid, default=None)

    parent_names = {p.id: p.name for p in parents}
    newest_first = sorted(payments, key=lambda p: p.payment_date, reverse=True)
    recent = [
        RecentPayment(
            parent_name=parent_names.get(p.parent_id),
            amount=Decimal(p.amount),
            payment_date=p.payment_date,
        )
        for p in newest_first[:recent_limit]
    ]

    return DashboardStatistics(
        total_students=total_students,
        paid_students=paid_students,
        unpaid_students=total_students - paid_students,
        percentage_paid=percentage(paid_students, total_students),
        total_collected=total_collected,
        total_parents=len(parents),
        paid_parents=paid_parents,
        target_amount=target_amount,
        percentage_collected=percentage(total_collected, target_amount),
        class_summary=class_summary,
        highest_class=highest,
        lowest_class=lowest,
        recent_payments=recent,
    )


class StatisticsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_snapshot(self):
        students = (await self.db.execute(select(Student))).scalars().all()
        payments = (await self.db.execute(
            select(Payment).order_by(Payment.created_at.desc())
        )).scalars().all()
        parents = (await self.db.execute(select(Parent))).scalars().all()
        teachers = (await self.db.execute(select(Teacher))).scalars().all()
        known_classes = [name for t in teachers for name in (t.assigned_classes or [])]
        return students, payments, parents, known_classes

    async def get_statistics(self, use_cache: bool = True) -> DashboardStatistics:
        if use_cache:
            cached = await cache_manager.get(STATISTICS_KEY)
            if cached is not None:
                return DashboardStatistics.model_validate(cached)

        students, payments, parents, known_classes = await self.load_snapshot()
        stats = compute_statistics(
            students,
            payments,
            parents,
            known_classes=known_classes,
            target_amount=settings.collection_target,
        )

        await cache_manager.set(STATISTICS_KEY, stats.model_dump(), expire=settings.statistics_cache_ttl)
        logger.debug("Computed statistics for %d students", stats.total_students)
        return stats
