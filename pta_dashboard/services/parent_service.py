# pta_dashboard/services/parent_service.py
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.parent import Parent
from ..models.payment import Payment
from ..models.student import Student
from ..utils.listing import paginate, search

logger = logging.getLogger(__name__)

PAYMENT_FIELDS = ("payment_status", "payment_date", "payment_amount", "payment_method", "receipt_url")

SEARCH_FIELDS = (
    lambda p: p.name,
    lambda p: p.email,
)

TABS = {
    "all": None,
    "paid": lambda p: bool(p.payment_status),
    "unpaid": lambda p: not p.payment_status,
}


class ParentService(BaseService[Parent]):
    resource_name = "Parent"

    def __init__(self, db: AsyncSession):
        super().__init__(Parent, db)

    async def create(self, obj_in: dict) -> Parent:
        """Create a parent; payment state always starts unpaid"""
        data = {k: v for k, v in obj_in.items() if k not in PAYMENT_FIELDS}
        data["payment_status"] = False
        return await super().create(data)

    async def update(self, id: UUID, obj_in: dict) -> Parent:
        """Update contact details. Payment state is only changed by payments."""
        blocked = [field for field in PAYMENT_FIELDS if field in obj_in]
        if blocked:
            raise ValidationError(
                "Payment fields are derived from recorded payments and cannot be edited",
                field=blocked[0],
            )
        return await super().update(id, obj_in)

    async def get_detail(self, parent_id: UUID) -> Parent:
        """Get parent together with linked students"""
        stmt = (
            select(Parent)
            .where(Parent.id == parent_id)
            .options(selectinload(Parent.students))
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        parent = result.scalar_one_or_none()
        if parent is None:
            raise NotFoundError(self.resource_name, parent_id)
        return parent

    async def get_linked_students(self, parent_id: UUID) -> List[Student]:
        await self.get_or_404(parent_id)
        stmt = select(Student).where(Student.parent_id == parent_id).order_by(Student.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_parents(
        self,
        query: Optional[str] = None,
        tab: str = "all",
        page: int = 1,
        size: int = 20,
    ) -> dict:
        """Search by name or email within the paid/unpaid tab, ordered by name"""
        if tab not in TABS:
            raise ValidationError(f"Unknown tab '{tab}'", field="tab")
        parents = await self.get_all(order_by="name")
        return paginate(search(parents, query, SEARCH_FIELDS, TABS[tab]), page, size)

    async def count_payments(self, parent_id: UUID) -> int:
        stmt = select(func.count()).select_from(Payment).where(Payment.parent_id == parent_id)
        result = await self.db.execute(stmt)
        return result.scalar()

    async def delete(self, id: UUID, cascade_payments: bool = False) -> bool:
        """Delete a parent, returning its students to the unlinked pool.

        A parent with recorded payments is only deleted when
        ``cascade_payments`` is set; the payments go in the same transaction.
        """
        parent = await self.get_or_404(id)

        payment_count = await self.count_payments(id)
        if payment_count and not cascade_payments:
            raise ConflictError(
                f"Parent has {payment_count} recorded payment(s); pass cascade_payments to delete them",
                field="cascade_payments",
                value=False,
            )

        await self.db.execute(
            update(Student).where(Student.parent_id == id).values(parent_id=None)
        )
        if payment_count:
            await self.db.execute(delete(Payment).where(Payment.parent_id == id))
        await self.db.delete(parent)
        await self.commit("delete")

        logger.info("Deleted parent %s (%d payment(s) removed)", id, payment_count)
        return True
