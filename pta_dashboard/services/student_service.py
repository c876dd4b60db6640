# pta_dashboard/services/student_service.py
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from ..core.config import settings
from ..core.exceptions import LinkConflictError, NotFoundError, ValidationError
from ..models.parent import Parent
from ..models.student import Student, StudentStatus
from ..models.teacher import Teacher
from ..utils.csv_export import students_to_csv
from ..utils.listing import natural_key, paginate, search, sort_records

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    lambda s: s.name,
    lambda s: s.class_name,
    lambda s: s.parent.name if s.parent else None,
)

STATUS_TABS = {
    "all": None,
    **{status.value: (lambda s, value=status.value: s.status == value) for status in StudentStatus},
}

PAYMENT_FILTERS = {
    None: None,
    "paid": lambda s: bool(s.payment_status),
    "unpaid": lambda s: not s.payment_status,
}

SORT_KEYS = {
    "name": lambda s: s.name.lower(),
    "class_name": lambda s: s.class_name.lower(),
    "grade_level": lambda s: natural_key(s.grade_level),
    "parent_name": lambda s: s.parent.name.lower() if s.parent else None,
    "payment_status": lambda s: bool(s.payment_status),
    "payment_date": lambda s: s.payment_date,
    "enrollment_date": lambda s: s.enrollment_date,
}


class StudentService(BaseService[Student]):
    resource_name = "Student"

    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)

    def _with_relations(self, stmt):
        return stmt.options(
            selectinload(Student.parent),
            selectinload(Student.teacher),
        ).execution_options(populate_existing=True)

    async def _check_references(self, obj_in: dict):
        """Unknown parent or teacher ids fail before anything is written"""
        parent_id = obj_in.get("parent_id")
        if parent_id is not None and await self.db.get(Parent, parent_id) is None:
            raise NotFoundError("Parent", parent_id)
        teacher_id = obj_in.get("teacher_id")
        if teacher_id is not None and await self.db.get(Teacher, teacher_id) is None:
            raise NotFoundError("Teacher", teacher_id)

    async def create(self, obj_in: dict) -> Student:
        """Create new student; payment state starts unpaid"""
        await self._check_references(obj_in)
        data = dict(obj_in)
        data["payment_status"] = False
        data.pop("payment_date", None)
        return await super().create(data)

    async def update(self, id: UUID, obj_in: dict) -> Student:
        """Update student details.

        Setting ``parent_id`` here is an explicit edit of the owning parent and
        replaces any existing link; use :meth:`link_to_parent` for the guarded
        operation.
        """
        await self.get_or_404(id)
        await self._check_references(obj_in)
        return await super().update(id, obj_in)

    async def get_detail(self, student_id: UUID) -> Student:
        """Get student together with parent and teacher"""
        stmt = self._with_relations(select(Student).where(Student.id == student_id))
        result = await self.db.execute(stmt)
        student = result.scalar_one_or_none()
        if student is None:
            raise NotFoundError(self.resource_name, student_id)
        return student

    async def get_all_with_relations(self) -> List[Student]:
        stmt = self._with_relations(select(Student).order_by(Student.name))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def filter_students(
        self,
        query: Optional[str] = None,
        status: str = "all",
        payment: Optional[str] = None,
    ) -> List[Student]:
        """Apply status tab, payment filter and text search, in that order"""
        if status not in STATUS_TABS:
            raise ValidationError(f"Unknown status '{status}'", field="status")
        if payment not in PAYMENT_FILTERS:
            raise ValidationError(f"Unknown payment filter '{payment}'", field="payment")

        status_check = STATUS_TABS[status]
        payment_check = PAYMENT_FILTERS[payment]

        def in_tab(student):
            if status_check and not status_check(student):
                return False
            return not payment_check or payment_check(student)

        students = await self.get_all_with_relations()
        return search(students, query, SEARCH_FIELDS, in_tab)

    async def list_students(
        self,
        query: Optional[str] = None,
        status: str = "all",
        payment: Optional[str] = None,
        sort_by: str = "name",
        descending: bool = False,
        page: int = 1,
        size: int = 20,
    ) -> dict:
        if sort_by not in SORT_KEYS:
            raise ValidationError(f"Cannot sort by '{sort_by}'", field="sort_by")
        students = await self.filter_students(query, status, payment)
        return paginate(sort_records(students, SORT_KEYS[sort_by], descending), page, size)

    async def export_csv(
        self,
        query: Optional[str] = None,
        status: str = "all",
        payment: Optional[str] = None,
    ) -> str:
        students = await self.filter_students(query, status, payment)
        return students_to_csv(students)

    async def get_available_students(self) -> List[Student]:
        """Students with no parent, i.e. the pool that can be linked"""
        stmt = select(Student).where(Student.parent_id.is_(None)).order_by(Student.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def link_to_parent(
        self,
        student_id: UUID,
        parent_id: UUID,
        replace: Optional[bool] = None,
    ) -> Student:
        """Link a student to a parent.

        Relinking a student that already belongs to another parent fails with
        LinkConflictError unless ``replace`` is true (defaults to the
        configured ``link_policy``). Payment flags are left untouched.
        """
        student = await self.get_or_404(student_id)
        if await self.db.get(Parent, parent_id) is None:
            raise NotFoundError("Parent", parent_id)

        if replace is None:
            replace = settings.link_policy == "replace"

        if student.parent_id == parent_id:
            return student
        if student.parent_id is not None and not replace:
            raise LinkConflictError(student_id, student.parent_id)

        previous = student.parent_id
        student.parent_id = parent_id
        await self.commit("link")
        await self.db.refresh(student)

        if previous:
            logger.info("Moved student %s from parent %s to %s", student_id, previous, parent_id)
        else:
            logger.info("Linked student %s to parent %s", student_id, parent_id)
        return student

    async def unlink_from_parent(self, student_id: UUID, parent_id: Optional[UUID] = None) -> Student:
        """Clear the student's parent. Payment flags are left untouched.

        When ``parent_id`` is given the student must not belong to a different
        parent. An already unlinked student is returned unchanged.
        """
        student = await self.get_or_404(student_id)
        if student.parent_id is None:
            return student
        if parent_id is not None and student.parent_id != parent_id:
            raise NotFoundError("Linked student", student_id)

        previous = student.parent_id
        student.parent_id = None
        await self.commit("unlink")
        await self.db.refresh(student)
        logger.info("Unlinked student %s from parent %s", student_id, previous)
        return student
