# pta_dashboard/services/teacher_service.py
from typing import List, Optional, Sequence
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from .base_service import BaseService
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.student import Student
from ..models.teacher import Teacher, TeacherStatus
from ..utils.listing import paginate, search

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    lambda t: t.name,
    lambda t: t.employee_id,
    lambda t: t.email,
)

TABS = {
    "all": None,
    **{status.value: (lambda t, value=status.value: t.status == value) for status in TeacherStatus},
}


class TeacherService(BaseService[Teacher]):
    resource_name = "Teacher"

    def __init__(self, db: AsyncSession):
        super().__init__(Teacher, db)

    async def get_by_employee_id(self, employee_id: str) -> Optional[Teacher]:
        stmt = select(self.model).where(self.model.employee_id == employee_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _ensure_unique_employee_id(self, employee_id: str, exclude_id: Optional[UUID] = None):
        existing = await self.get_by_employee_id(employee_id)
        if existing and existing.id != exclude_id:
            raise ConflictError(
                f"Teacher with employee ID {employee_id} already exists",
                field="employee_id",
                value=employee_id,
            )

    async def create(self, obj_in: dict) -> Teacher:
        """Create new teacher with unique employee id"""
        await self._ensure_unique_employee_id(obj_in["employee_id"])
        return await super().create(obj_in)

    async def update(self, id: UUID, obj_in: dict) -> Teacher:
        await self.get_or_404(id)
        if obj_in.get("employee_id"):
            await self._ensure_unique_employee_id(obj_in["employee_id"], exclude_id=id)
        return await super().update(id, obj_in)

    async def list_teachers(
        self,
        query: Optional[str] = None,
        tab: str = "all",
        page: int = 1,
        size: int = 20,
    ) -> dict:
        """Search by name, employee id or email within a status tab"""
        if tab not in TABS:
            raise ValidationError(f"Unknown tab '{tab}'", field="tab")
        teachers = await self.get_all(order_by="name")
        return paginate(search(teachers, query, SEARCH_FIELDS, TABS[tab]), page, size)

    async def get_students(self, teacher_id: UUID) -> List[Student]:
        await self.get_or_404(teacher_id)
        stmt = select(Student).where(Student.teacher_id == teacher_id).order_by(Student.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def assign_students(self, teacher_id: UUID, student_ids: Sequence[UUID]) -> List[Student]:
        """Assign every listed student to the teacher, or none if any is unknown"""
        await self.get_or_404(teacher_id)

        wanted = list(dict.fromkeys(student_ids))
        result = await self.db.execute(select(Student).where(Student.id.in_(wanted)))
        students = list(result.scalars().all())

        missing = set(wanted) - {s.id for s in students}
        if missing:
            raise NotFoundError("Student", ", ".join(sorted(str(m) for m in missing)))

        for student in students:
            student.teacher_id = teacher_id
        await self.commit("assign students to")

        logger.info("Assigned %d student(s) to teacher %s", len(students), teacher_id)
        return await self.get_students(teacher_id)

    async def unassign_student(self, teacher_id: UUID, student_id: UUID) -> Student:
        await self.get_or_404(teacher_id)
        student = await self.db.get(Student, student_id)
        if student is None or student.teacher_id != teacher_id:
            raise NotFoundError("Assigned student", student_id)

        student.teacher_id = None
        await self.commit("unassign student from")
        await self.db.refresh(student)
        return student

    async def delete(self, id: UUID) -> bool:
        """Delete teacher; their students become unassigned"""
        teacher = await self.get_or_404(id)
        await self.db.execute(
            update(Student).where(Student.teacher_id == id).values(teacher_id=None)
        )
        await self.db.delete(teacher)
        await self.commit("delete")
        logger.info("Deleted teacher %s", id)
        return True
