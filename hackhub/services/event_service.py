"""
Event Service
Event CRUD and status lifecycle
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from hackhub.auth.roles import Role
from hackhub.database import database
from hackhub.errors import AuthorizationError, NotFoundError
from hackhub.schemas.event import (
    CertificateTemplate,
    CreateEventRequest,
    EventModules,
    EventStatus,
    UpdateEventRequest,
)
from hackhub.services.activity_log_service import ActivityLogService

logger = logging.getLogger(__name__)

EVENT_SELECT = """
    SELECT e.*, u.name AS organizer_name, u.email AS organizer_email
    FROM events e
    LEFT JOIN users u ON u.id = e.organizer_id
"""

# Patch fields that map straight onto a column
SIMPLE_FIELDS = ("title", "description", "start_date", "end_date", "registration_deadline")
JSON_FIELDS = ("rules", "tracks")


def _parse_json(value, default):
    if value is None:
        return default
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return default
    return value


def _event_from_row(row) -> dict:
    event = dict(row._mapping)
    event["rules"] = _parse_json(event.get("rules"), [])
    event["tracks"] = _parse_json(event.get("tracks"), [])
    event["modules"] = {**EventModules().model_dump(), **_parse_json(event.get("modules"), {})}
    event["certificate_template"] = _parse_json(event.get("certificate_template"), None)

    organizer_name = event.pop("organizer_name", None)
    organizer_email = event.pop("organizer_email", None)
    event["organizer"] = None
    if event.get("organizer_id") and organizer_name is not None:
        event["organizer"] = {
            "id": event["organizer_id"],
            "name": organizer_name,
            "email": organizer_email,
        }
    return event


def _status_value(status) -> Optional[str]:
    return status.value if isinstance(status, EventStatus) else status


class EventService:
    """Service for event operations"""

    @staticmethod
    def can_manage(actor: dict, event: dict) -> bool:
        """Admins manage every event, organizers only their own"""
        if actor["role"] == Role.ADMIN:
            return True
        return actor["role"] == Role.ORGANIZER and event.get("organizer_id") == actor["id"]

    @staticmethod
    async def get_event(event_id: str) -> dict:
        row = await database.fetch_one(
            f"{EVENT_SELECT} WHERE e.id = :event_id",
            {"event_id": event_id}
        )
        if not row:
            raise NotFoundError("Event")
        return _event_from_row(row)

    @staticmethod
    async def list_events(status: Optional[str] = None) -> List[dict]:
        """
        List events newest first

        Args:
            status: A single status or a comma-separated list matched as OR
        """
        params = {}
        where_clause = ""
        statuses = [s.strip() for s in (status or "").split(",") if s.strip()]
        if statuses:
            placeholders = []
            for i, value in enumerate(statuses):
                params[f"status_{i}"] = value
                placeholders.append(f":status_{i}")
            where_clause = f"WHERE e.status IN ({', '.join(placeholders)})"

        rows = await database.fetch_all(
            f"{EVENT_SELECT} {where_clause} ORDER BY e.created_at DESC",
            params
        )
        return [_event_from_row(row) for row in rows]

    @staticmethod
    async def create_event(data: CreateEventRequest, actor: dict) -> dict:
        event_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        template = data.certificate_template.model_dump() if data.certificate_template else None

        await database.execute(
            """
            INSERT INTO events
            (id, organizer_id, title, description, start_date, end_date, registration_deadline,
             rules, tracks, status, modules, certificate_template, created_at, updated_at)
            VALUES (:id, :organizer_id, :title, :description, :start_date, :end_date, :registration_deadline,
                    :rules, :tracks, :status, :modules, :certificate_template, :created_at, :updated_at)
            """,
            {
                "id": event_id,
                "organizer_id": actor["id"],
                "title": data.title,
                "description": data.description,
                "start_date": data.start_date,
                "end_date": data.end_date,
                "registration_deadline": data.registration_deadline,
                "rules": json.dumps(data.rules),
                "tracks": json.dumps(data.tracks),
                "status": _status_value(data.status),
                "modules": json.dumps(data.modules.model_dump()),
                "certificate_template": json.dumps(template) if template else None,
                "created_at": now,
                "updated_at": now
            }
        )

        await ActivityLogService.try_log_activity(
            actor["id"],
            "create_event",
            resource_type="event",
            resource_id=event_id,
            details={"title": data.title}
        )

        return await EventService.get_event(event_id)

    @staticmethod
    async def apply_update(event_id: str, patch: UpdateEventRequest, actor: dict) -> Tuple[dict, bool]:
        """
        Apply a partial update to an event

        Only fields present in the patch are written; `modules` is merged
        key by key. The update is persisted before anything else happens.

        Returns:
            Tuple of (updated event, whether the event just became completed
            with certificates enabled)

        Raises:
            NotFoundError: event does not exist
            AuthorizationError: actor may not manage the event
        """
        event = await EventService.get_event(event_id)
        if not EventService.can_manage(actor, event):
            raise AuthorizationError()

        changes = patch.model_dump(exclude_unset=True)
        old_status = event["status"]

        values = {}
        for field in SIMPLE_FIELDS:
            if field in changes:
                values[field] = changes[field]
        for field in JSON_FIELDS:
            if field in changes:
                values[field] = json.dumps(changes[field])
        if "status" in changes:
            values["status"] = _status_value(changes["status"])
        if "modules" in changes:
            merged = dict(event["modules"])
            merged.update({k: v for k, v in changes["modules"].items() if v is not None})
            values["modules"] = json.dumps(merged)

        values["updated_at"] = datetime.now(timezone.utc)
        assignments = ", ".join(f"{column} = :{column}" for column in values)
        await database.execute(
            f"UPDATE events SET {assignments} WHERE id = :event_id",
            {**values, "event_id": event_id}
        )

        updated = await EventService.get_event(event_id)
        new_status = updated["status"]
        completed = (
            old_status != EventStatus.COMPLETED.value
            and new_status == EventStatus.COMPLETED.value
            and bool(updated["modules"].get("certificates"))
        )

        details = {"fields": sorted(k for k in values if k != "updated_at")}
        if old_status != new_status:
            details["status"] = {"from": old_status, "to": new_status}
        await ActivityLogService.try_log_activity(
            actor["id"],
            "update_event",
            resource_type="event",
            resource_id=event_id,
            details=details
        )

        return updated, completed

    @staticmethod
    async def set_certificate_template(event_id: str, template: CertificateTemplate, actor: dict) -> dict:
        event = await EventService.get_event(event_id)
        if not EventService.can_manage(actor, event):
            raise AuthorizationError()

        await database.execute(
            """
            UPDATE events
            SET certificate_template = :certificate_template, updated_at = :updated_at
            WHERE id = :event_id
            """,
            {
                "certificate_template": json.dumps(template.model_dump()),
                "updated_at": datetime.now(timezone.utc),
                "event_id": event_id
            }
        )

        await ActivityLogService.try_log_activity(
            actor["id"],
            "update_certificate_template",
            resource_type="event",
            resource_id=event_id,
            details={"elements": len(template.elements)}
        )

        return await EventService.get_event(event_id)

    @staticmethod
    async def delete_event(event_id: str, actor: dict) -> None:
        event = await EventService.get_event(event_id)

        async with database.transaction():
            await database.execute(
                "DELETE FROM team_members WHERE team_id IN (SELECT id FROM teams WHERE event_id = :event_id)",
                {"event_id": event_id}
            )
            await database.execute("DELETE FROM teams WHERE event_id = :event_id", {"event_id": event_id})
            await database.execute("DELETE FROM certificates WHERE event_id = :event_id", {"event_id": event_id})
            await database.execute("DELETE FROM events WHERE id = :event_id", {"event_id": event_id})

        await ActivityLogService.try_log_activity(
            actor["id"],
            "delete_event",
            resource_type="event",
            resource_id=event_id,
            details={"title": event["title"]}
        )


# Create singleton instance
event_service = EventService()
