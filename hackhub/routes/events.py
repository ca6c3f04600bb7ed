"""
Event Routes
Event CRUD and lifecycle updates
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from hackhub.auth import get_admin, get_event_manager
from hackhub.errors import AuthorizationError
from hackhub.schemas.event import (
    CertificateTemplate,
    CreateEventRequest,
    EventEnvelope,
    EventListResponse,
    EventResponse,
    UpdateEventRequest,
)
from hackhub.services.certificate_service import certificate_service
from hackhub.services.event_service import EventService, event_service

router = APIRouter()


async def get_managed_event(
    event_id: str,
    current_user: dict = Depends(get_event_manager)
) -> dict:
    """
    Event the caller may manage

    Resolved before the request body is validated, so callers who may not
    touch the event learn nothing about the body schema.
    """
    event = await event_service.get_event(event_id)
    if not EventService.can_manage(current_user, event):
        raise AuthorizationError()
    return event


@router.get("", response_model=EventListResponse)
async def list_events(
    status_filter: Optional[str] = Query(
        None,
        alias="status",
        description="A status or comma-separated statuses (matched as OR)"
    )
):
    """List events, newest first"""
    return {"events": await event_service.list_events(status_filter)}


@router.post("", response_model=EventEnvelope, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: CreateEventRequest,
    current_user: dict = Depends(get_event_manager)
):
    """
    Create an event (Admin or Organizer)

    The caller becomes the event organizer. Status defaults to draft and
    every module is enabled unless specified.
    """
    return {"event": await event_service.create_event(request, current_user)}


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str):
    return await event_service.get_event(event_id)


@router.put("/{event_id}", response_model=EventResponse, dependencies=[Depends(get_managed_event)])
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    background_tasks: BackgroundTasks,
    current_user: dict = Depends(get_event_manager)
):
    """
    Update an event (Admin or the owning Organizer)

    Only fields present in the body change. Moving the event into
    `completed` with the certificates module on issues participation
    certificates to every team after the response is sent.
    """
    event, completed = await event_service.apply_update(event_id, request, current_user)
    if completed:
        background_tasks.add_task(certificate_service.issue_completion_certificates, event)
    return event


@router.put(
    "/{event_id}/certificate-template",
    response_model=EventResponse,
    dependencies=[Depends(get_managed_event)]
)
async def update_certificate_template(
    event_id: str,
    request: CertificateTemplate,
    current_user: dict = Depends(get_event_manager)
):
    """Replace the event's certificate template (Admin or the owning Organizer)"""
    return await event_service.set_certificate_template(event_id, request, current_user)


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    current_user: dict = Depends(get_admin)
):
    """Delete an event with its teams and certificates (Admin only)"""
    await event_service.delete_event(event_id, current_user)
    return {"success": True}
