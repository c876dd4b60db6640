from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.pagination import PaginatedResponse
from ..schemas.student_schemas import StudentRead
from ..schemas.teacher_schemas import TeacherAssignStudents, TeacherCreate, TeacherRead, TeacherUpdate
from ..services.teacher_service import TeacherService

router = APIRouter(prefix="/api/v1/teachers", tags=["Teacher Management"])


@router.get("/", response_model=PaginatedResponse[TeacherRead])
async def get_teachers(
    q: Optional[str] = Query(None, description="Search by name, employee id or email"),
    tab: str = Query("all", pattern="^(all|active|inactive|on_leave)$"),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated teachers with filtering"""
    service = TeacherService(db)
    return await service.list_teachers(query=q, tab=tab, page=page, size=size)


@router.post("/", response_model=TeacherRead, status_code=201)
async def create_teacher(
    teacher_data: TeacherCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create new teacher"""
    service = TeacherService(db)
    return await service.create(teacher_data.model_dump())


@router.get("/{teacher_id}", response_model=TeacherRead)
async def get_teacher(
    teacher_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    service = TeacherService(db)
    return await service.get_or_404(teacher_id)


@router.put("/{teacher_id}", response_model=TeacherRead)
async def update_teacher(
    teacher_id: UUID,
    teacher_data: TeacherUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = TeacherService(db)
    return await service.update(teacher_id, teacher_data.model_dump(exclude_unset=True))


@router.delete("/{teacher_id}")
async def delete_teacher(
    teacher_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    """Delete teacher; assigned students are kept without a teacher"""
    service = TeacherService(db)
    await service.delete(teacher_id)
    return {"message": "Teacher deleted successfully", "id": str(teacher_id)}


@router.get("/{teacher_id}/students", response_model=List[StudentRead])
async def get_teacher_students(
    teacher_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    service = TeacherService(db)
    return await service.get_students(teacher_id)


@router.post("/{teacher_id}/students", response_model=List[StudentRead])
async def assign_students(
    teacher_id: UUID,
    assignment: TeacherAssignStudents,
    db: AsyncSession = Depends(get_db)
):
    """Assign students to teacher"""
    service = TeacherService(db)
    return await service.assign_students(teacher_id, assignment.student_ids)


@router.delete("/{teacher_id}/students/{student_id}", response_model=StudentRead)
async def unassign_student(
    teacher_id: UUID,
    student_id: UUID,
    db: AsyncSession = Depends(get_db)
):
    service = TeacherService(db)
    return await service.unassign_student(teacher_id, student_id)
