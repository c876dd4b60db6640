from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.pagination import PaginatedResponse
from ..schemas.student_schemas import (
    StudentCreate, StudentDetail, StudentListItem, StudentRead, StudentUpdate
)
from ..services.student_service import StudentService

router = APIRouter(prefix="/api/v1/students", tags=["Student Management"])

STATUS_PATTERN = "^(all|active|inactive|transferred)$"
PAYMENT_PATTERN = "^(paid|unpaid)$"


def _list_item(student) -> StudentListItem:
    item = StudentListItem.model_validate(student)
    return item.model_copy(update={"parent_name": student.parent.name if student.parent else None})


@router.get("/", response_model=PaginatedResponse[StudentListItem])
async def get_students(
    q: Optional[str] = Query(None, description="Search by name, class or parent name"),
    status: str = Query("all", pattern=STATUS_PATTERN),
    payment: Optional[str] = Query(None, pattern=PAYMENT_PATTERN),
    sort_by: str = Query("name"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated students with filtering and sorting"""
    service = StudentService(db)
    result = await service.list_students(
        query=q,
        status=status,
        payment=payment,
        sort_by=sort_by,
        descending=(order == "desc"),
        page=page,
        size=size,
    )
    result["items"] = [_list_item(s) for s in result["items"]]
    return result


@router.get("/available", response_model=List[StudentRead])
async def get_available_students(db: AsyncSession = Depends(get_db)):
    """Students not linked to any parent"""
    service = StudentService(db)
    return await service.get_available_students()


@router.get("/export")
async def export_students(
    q: Optional[str] = Query(None),
    status: str = Query("all", pattern=STATUS_PATTERN),
    payment: Optional[str] = Query(None, pattern=PAYMENT_PATTERN),
    db: AsyncSession = Depends(get_db)
):
    """Download the student payment sheet as CSV"""
    service = StudentService(db)
    content = await service.export_csv(query=q, status=status, payment=payment)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="student_payment_status.csv"'},
    )


@router.post("/", response_model=StudentRead, status_code=201)
async def create_student(
    student_data: StudentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create new student"""
    service = StudentService(db)
    return await service.create(student_data.model_dump())


@router.get("/{student_id}", response_model=StudentDetail)
async def get_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get student with parent and teacher"""
    service = StudentService(db)
    return await service.get_detail(student_id)


@router.put("/{student_id}", response_model=StudentRead)
async def update_student(
    student_id: UUID,
    student_data: StudentUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = StudentService(db)
    return await service.update(student_id, student_data.model_dump(exclude_unset=True))


@router.delete("/{student_id}")
async def delete_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    service = StudentService(db)
    await service.delete(student_id)
    return {"message": "Student deleted successfully", "id": str(student_id)}
