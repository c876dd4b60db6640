from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.pagination import PaginatedResponse
from ..schemas.parent_schemas import ParentCreate, ParentDetail, ParentRead, ParentUpdate, LinkedStudent
from ..schemas.student_schemas import StudentRead
from ..services.parent_service import ParentService
from ..services.student_service import StudentService

router = APIRouter(prefix="/api/v1/parents", tags=["Parent Management"])


@router.get("/", response_model=PaginatedResponse[ParentRead])
async def get_parents(
    q: Optional[str] = Query(None, description="Search by name or email"),
    tab: str = Query("all", pattern="^(all|paid|unpaid)$"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated parents filtered by payment tab and search text"""
    service = ParentService(db)
    result = await service.list_parents(query=q, tab=tab, page=page, size=size)
    return result


@router.post("/", response_model=ParentRead, status_code=201)
async def create_parent(
    parent_data: ParentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create new parent"""
    service = ParentService(db)
    return await service.create(parent_data.model_dump())


@router.get("/{parent_id}", response_model=ParentDetail)
async def get_parent(
    parent_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get parent with linked students"""
    service = ParentService(db)
    return await service.get_detail(parent_id)


@router.put("/{parent_id}", response_model=ParentRead)
async def update_parent(
    parent_id: UUID,
    parent_data: ParentUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = ParentService(db)
    return await service.update(parent_id, parent_data.model_dump(exclude_unset=True))


@router.delete("/{parent_id}")
async def delete_parent(
    parent_id: UUID,
    cascade_payments: bool = Query(False, description="Also delete the parent's payments"),
    db: AsyncSession = Depends(get_db)
):
    """Delete parent; linked students become unlinked"""
    service = ParentService(db)
    await service.delete(parent_id, cascade_payments=cascade_payments)
    return {"message": "Parent deleted successfully", "id": str(parent_id)}


@router.get("/{parent_id}/students", response_model=List[LinkedStudent])
async def get_linked_students(
    parent_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    service = ParentService(db)
    return await service.get_linked_students(parent_id)


@router.post("/{parent_id}/students/{student_id}", response_model=StudentRead)
async def link_student(
    parent_id: UUID,
    student_id: UUID,
    replace: Optional[bool] = Query(None, description="Move the student if linked elsewhere"),
    db: AsyncSession = Depends(get_db)
):
    """Link a student to this parent"""
    service = StudentService(db)
    return await service.link_to_parent(student_id, parent_id, replace=replace)


@router.delete("/{parent_id}/students/{student_id}", response_model=StudentRead)
async def unlink_student(
    parent_id: UUID,
    student_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Unlink a student from this parent"""
    service = StudentService(db)
    return await service.unlink_from_parent(student_id, parent_id=parent_id)
