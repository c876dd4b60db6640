# pta_dashboard/services/payment_service.py
"""Payment recording and parent/student payment-status reconciliation."""
from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from ..core.exceptions import NotFoundError, ValidationError
from ..models.parent import Parent
from ..models.payment import Payment, PaymentMethod
from ..models.student import Student

logger = logging.getLogger(__name__)


def _method_value(payment_method) -> str:
    try:
        return PaymentMethod(payment_method).value
    except ValueError:
        raise ValidationError(f"Unknown payment method '{payment_method}'", field="payment_method")


class PaymentService(BaseService[Payment]):
    resource_name = "Payment"

    def __init__(self, db: AsyncSession):
        super().__init__(Payment, db)

    async def _linked_students(self, parent_id: UUID) -> List[Student]:
        result = await self.db.execute(select(Student).where(Student.parent_id == parent_id))
        return list(result.scalars().all())

    async def record_payment(
        self,
        parent_id: UUID,
        amount: Decimal,
        payment_method,
        payment_date: date,
        receipt_url: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Payment:
        """Record a parent's contribution and mark every linked student paid.

        The payment row, the parent's cached payment fields and the linked
        students' flags are written in one transaction. An unknown parent
        raises NotFoundError before anything is written.
        """
        parent = await self.db.get(Parent, parent_id)
        if parent is None:
            raise NotFoundError("Parent", parent_id)

        amount = Decimal(amount)
        if amount <= 0:
            raise ValidationError("Payment amount must be greater than zero", field="amount")
        method = _method_value(payment_method)

        payment = Payment(
            parent_id=parent_id,
            amount=amount,
            payment_method=method,
            payment_date=payment_date,
            receipt_url=receipt_url,
            notes=notes,
        )
        self.db.add(payment)

        parent.payment_status = True
        parent.payment_date = payment_date
        parent.payment_amount = amount
        parent.payment_method = method
        if receipt_url:
            parent.receipt_url = receipt_url

        students = await self._linked_students(parent_id)
        for student in students:
            student.payment_status = True
            student.payment_date = payment_date

        await self.commit("record")
        await self.db.refresh(payment)

        logger.info(
            "Recorded %s %s payment for parent %s; %d linked student(s) marked paid",
            amount, method, parent_id, len(students),
        )
        return payment

    async def refresh_parent_status(self, parent: Parent):
        """Re-derive the parent's cached payment fields from its payment rows.

        Does not commit. Linked students follow the parent: paid as of the
        latest remaining payment, or unpaid when no payments are left.
        """
        await self.db.flush()
        stmt = (
            select(Payment)
            .where(Payment.parent_id == parent.id)
            .order_by(Payment.payment_date.desc(), Payment.created_at.desc())
            .limit(1)
        )
        latest = (await self.db.execute(stmt)).scalar_one_or_none()

        if latest is not None:
            parent.payment_status = True
            parent.payment_date = latest.payment_date
            parent.payment_amount = latest.amount
            parent.payment_method = latest.payment_method
            parent.receipt_url = latest.receipt_url
            for student in await self._linked_students(parent.id):
                student.payment_status = True
                student.payment_date = latest.payment_date
            return

        parent.payment_status = False
        parent.payment_date = None
        parent.payment_amount = None
        parent.payment_method = None
        parent.receipt_url = None
        for student in await self._linked_students(parent.id):
            student.payment_status = False
            student.payment_date = None
        logger.info("Parent %s has no payments left; marked unpaid", parent.id)

    async def get_detail(self, payment_id: UUID) -> Payment:
        stmt = (
            select(Payment)
            .where(Payment.id == payment_id)
            .options(selectinload(Payment.parent))
            .execution_options(populate_existing=True)
        )
        payment = (await self.db.execute(stmt)).scalar_one_or_none()
        if payment is None:
            raise NotFoundError(self.resource_name, payment_id)
        return payment

    async def list_payments(
        self,
        parent_id: Optional[UUID] = None,
        payment_method: Optional[str] = None,
        page: int = 1,
        size: int = 20,
    ) -> dict:
        """Payments newest first, each with its parent"""
        stmt = select(Payment).options(selectinload(Payment.parent))
        count_stmt = select(func.count()).select_from(Payment)
        if parent_id is not None:
            stmt = stmt.where(Payment.parent_id == parent_id)
            count_stmt = count_stmt.where(Payment.parent_id == parent_id)
        if payment_method is not None:
            method = _method_value(payment_method)
            stmt = stmt.where(Payment.payment_method == method)
            count_stmt = count_stmt.where(Payment.payment_method == method)

        total = (await self.db.execute(count_stmt)).scalar()
        stmt = (
            stmt.order_by(Payment.payment_date.desc(), Payment.created_at.desc())
            .offset((page - 1) * size)
            .limit(size)
            .execution_options(populate_existing=True)
        )
        items = list((await self.db.execute(stmt)).scalars().all())

        return {
            "items": items,
            "total": total,
            "page": page,
            "size": size,
            "total_pages": (total + size - 1) // size,
            "has_next": page * size < total,
            "has_previous": page > 1,
        }

    async def update_payment(self, payment_id: UUID, obj_in: dict) -> Payment:
        """Edit a payment and re-derive the affected parents"""
        payment = await self.get_or_404(payment_id)
        old_parent_id = payment.parent_id

        new_parent_id = obj_in.get("parent_id") or old_parent_id
        new_parent = await self.db.get(Parent, new_parent_id)
        if new_parent is None:
            raise NotFoundError("Parent", new_parent_id)

        for key, value in obj_in.items():
            if key == "payment_method" and value is not None:
                value = _method_value(value)
            if value is None and key in ("parent_id", "amount", "payment_method", "payment_date"):
                continue
            setattr(payment, key, value)

        await self.refresh_parent_status(new_parent)
        if old_parent_id != new_parent_id:
            old_parent = await self.db.get(Parent, old_parent_id)
            if old_parent is not None:
                await self.refresh_parent_status(old_parent)

        await self.commit("update")
        await self.db.refresh(payment)
        logger.info("Updated payment %s", payment_id)
        return payment

    async def delete_payment(self, payment_id: UUID) -> bool:
        """Delete a payment and re-derive its parent"""
        payment = await self.get_or_404(payment_id)
        parent = await self.db.get(Parent, payment.parent_id)

        await self.db.delete(payment)
        if parent is not None:
            await self.refresh_parent_status(parent)
        await self.commit("delete")
        logger.info("Deleted payment %s", payment_id)
        return True
