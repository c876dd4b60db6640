from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..models.payment import PaymentMethod
from ..schemas.pagination import PaginatedResponse
from ..schemas.payment_schemas import PaymentCreate, PaymentDetail, PaymentRead, PaymentUpdate
from ..services.payment_service import PaymentService

router = APIRouter(prefix="/api/v1/payments", tags=["Payments"])


@router.get("/", response_model=PaginatedResponse[PaymentDetail])
async def get_payments(
    parent_id: Optional[UUID] = Query(None),
    payment_method: Optional[PaymentMethod] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Get payments, newest first"""
    service = PaymentService(db)
    return await service.list_payments(
        parent_id=parent_id,
        payment_method=payment_method.value if payment_method else None,
        page=page,
        size=size,
    )


@router.post("/", response_model=PaymentRead, status_code=201)
async def record_payment(
    payment_data: PaymentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Record a parent's payment and mark all linked students paid"""
    service = PaymentService(db)
    return await service.record_payment(**payment_data.model_dump())


@router.get("/{payment_id}", response_model=PaymentDetail)
async def get_payment(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    service = PaymentService(db)
    return await service.get_detail(payment_id)


@router.put("/{payment_id}", response_model=PaymentRead)
async def update_payment(
    payment_id: UUID,
    payment_data: PaymentUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = PaymentService(db)
    return await service.update_payment(payment_id, payment_data.model_dump(exclude_unset=True))


@router.delete("/{payment_id}")
async def delete_payment(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    service = PaymentService(db)
    await service.delete_payment(payment_id)
    return {"message": "Payment deleted successfully", "id": str(payment_id)}
