"""
Certificate Request/Response Models
"""

from pydantic import BaseModel, Field, AliasChoices
from typing import Optional, List
from datetime import datetime


class GenerateCertificateRequest(BaseModel):
    """Manual certificate generation; presence of event and name is checked by the service"""
    event_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("event_id", "eventId"))
    recipient_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("recipient_name", "recipientName")
    )
    recipient_email: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("recipient_email", "recipientEmail")
    )
    role: Optional[str] = Field(default="participant")


class CertificateResponse(BaseModel):
    id: str
    event_id: str
    recipient_name: str
    recipient_email: Optional[str] = None
    role: Optional[str] = None
    certificate_url: Optional[str] = None
    certificate_id: Optional[str] = None
    created_at: Optional[datetime] = None


class GenerateCertificateResponse(BaseModel):
    success: bool
    certificate: CertificateResponse


class CertificateListResponse(BaseModel):
    total: int
    certificates: List[CertificateResponse]


class CertificateVerifyResponse(BaseModel):
    valid: bool
    certificate_id: str
    recipient_name: str
    role: Optional[str] = None
    event_id: str
    event_title: str
    certificate_url: Optional[str] = None
    issued_at: Optional[datetime] = None
