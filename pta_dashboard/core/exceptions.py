# pta_dashboard/core/exceptions.py
"""Custom exceptions for the PTA payment tracker."""
from fastapi import HTTPException
from typing import Any, Dict, Optional


class PTATrackerException(HTTPException):
    """Base exception for the application."""
    def __init__(
        self,
        status_code: int,
        detail: Any,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(PTATrackerException):
    """Raised when a referenced entity does not exist."""
    def __init__(self, resource: str, id: Any = None):
        message = f"{resource} not found"
        if id is not None:
            message += f" with id: {id}"
        self.resource = resource
        super().__init__(status_code=404, detail=message)


class ValidationError(PTATrackerException):
    """Exception raised for validation errors."""
    def __init__(self, message: str, field: Optional[str] = None):
        detail = {"error": "Validation Error", "message": message}
        if field:
            detail["field"] = field
        super().__init__(status_code=422, detail=detail)


class ConflictError(PTATrackerException):
    """Exception raised when a write would break a uniqueness or ownership rule."""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        detail = {"error": "Conflict", "message": message}
        if field:
            detail["field"] = field
            detail["value"] = str(value) if value is not None else None
        super().__init__(status_code=409, detail=detail)


class LinkConflictError(ConflictError):
    """Student is already linked to a different parent."""
    def __init__(self, student_id: Any, current_parent_id: Any):
        super().__init__(
            f"Student {student_id} is already linked to parent {current_parent_id}",
            field="parent_id",
            value=current_parent_id,
        )


class DatabaseError(PTATrackerException):
    """Exception raised for database errors."""
    def __init__(self, message: str):
        super().__init__(
            status_code=500,
            detail={
                "error": "Database Error",
                "message": message
            }
        )
