"""
Certificate Routes
Manual generation, listings and public verification
"""

from fastapi import APIRouter, Depends, Query, status

from hackhub.auth import get_current_user, get_event_manager
from hackhub.schemas.certificate import (
    CertificateListResponse,
    CertificateVerifyResponse,
    GenerateCertificateRequest,
    GenerateCertificateResponse,
)
from hackhub.services.certificate_service import certificate_service

router = APIRouter()


@router.post("", response_model=GenerateCertificateResponse, status_code=status.HTTP_201_CREATED)
async def generate_certificate(
    request: GenerateCertificateRequest,
    current_user: dict = Depends(get_event_manager)
):
    """
    Generate a certificate for one recipient (Admin or the event's Organizer)

    - **eventId**: Event the certificate is for (required)
    - **recipientName**: Name printed on the certificate (required)
    - **recipientEmail**: Recipient email, copied onto the record
    - **role**: Role printed on the certificate

    Returns: the stored certificate with the public URL of its PDF
    """
    certificate = await certificate_service.generate_certificate(
        request.event_id,
        request.recipient_name,
        request.recipient_email,
        request.role,
        current_user
    )
    return {"success": True, "certificate": certificate}


@router.get("", response_model=CertificateListResponse)
async def list_event_certificates(
    event_id: str = Query(..., min_length=1),
    current_user: dict = Depends(get_event_manager)
):
    """List certificates issued for an event (Admin or the event's Organizer)"""
    return await certificate_service.list_certificates(event_id, current_user)


@router.get("/mine", response_model=CertificateListResponse)
async def list_my_certificates(current_user: dict = Depends(get_current_user)):
    """Certificates issued to the logged-in user's email"""
    return await certificate_service.list_my_certificates(current_user)


@router.get("/verify/{certificate_id}", response_model=CertificateVerifyResponse)
async def verify_certificate(certificate_id: str):
    """Check a certificate id (public)"""
    return await certificate_service.verify_certificate(certificate_id)
