"""
Pydantic schemas for request/response validation
"""

from hackhub.schemas.event import (
    EventStatus,
    CertificateTemplate,
    CreateEventRequest,
    UpdateEventRequest,
    EventResponse,
)
from hackhub.schemas.certificate import GenerateCertificateRequest, CertificateResponse

__all__ = [
    "EventStatus",
    "CertificateTemplate",
    "CreateEventRequest",
    "UpdateEventRequest",
    "EventResponse",
    "GenerateCertificateRequest",
    "CertificateResponse",
]
