"""
Domain Errors
Raised by services and rendered by FastAPI as JSON error responses
"""

from typing import Optional
from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Malformed or missing input, reported with field-level detail"""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid input", "details": details or {}}
        )


class AuthorizationError(HTTPException):
    """Role or ownership mismatch"""

    def __init__(self):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")


class NotFoundError(HTTPException):
    def __init__(self, entity: str = "Resource"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found")


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class GenerationError(HTTPException):
    """Renderer or storage failure while creating a certificate"""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Certificate generation failed"
        )
