"""
Certificate Service
Certificate generation, artifact storage and lookups
"""

import logging
import os
import re
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from PIL import Image

from hackhub.config import settings
from hackhub.database import database
from hackhub.errors import AuthorizationError, GenerationError, NotFoundError, ValidationError
from hackhub.services.activity_log_service import ActivityLogService
from hackhub.services.certificate_renderer import (
    CertificateVariables,
    load_background,
    render,
    render_certificate,
)
from hackhub.services.event_service import EventService
from hackhub.services.team_service import TeamService

logger = logging.getLogger(__name__)

PARTICIPANT_ROLE = "participant"

CERTIFICATE_COLUMNS = (
    "id, event_id, recipient_name, recipient_email, role, certificate_url, certificate_id, created_at"
)


def _issue_date() -> str:
    return datetime.now().strftime("%B %d, %Y")


def artifact_filename(recipient_name: str) -> str:
    """Collision-resistant artifact name from the recipient name and the current time"""
    stem = re.sub(r"\s+", "_", recipient_name.strip())
    stem = re.sub(r"[^\w\-]", "", stem) or "certificate"
    return f"{stem}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}.pdf"


class CertificateService:
    """Service for certificate operations"""

    @staticmethod
    def certificate_variables(event: dict, recipient_name: str, role: Optional[str]) -> CertificateVariables:
        return CertificateVariables(
            recipient_name=recipient_name,
            event_title=event.get("title"),
            role=role,
            date=_issue_date(),
        )

    @staticmethod
    def store_artifact(recipient_name: str, pdf_bytes: bytes) -> str:
        """
        Write a rendered certificate under the public certificates directory

        The file is flushed and closed before this returns.

        Returns:
            Public URL path of the artifact
        """
        target_dir = settings.certificates_path
        target_dir.mkdir(parents=True, exist_ok=True)

        file_name = artifact_filename(recipient_name)
        with open(target_dir / file_name, "wb") as fh:
            fh.write(pdf_bytes)
            fh.flush()
            os.fsync(fh.fileno())

        return f"/{settings.CERTIFICATES_DIR_NAME}/{file_name}"

    @staticmethod
    def remove_artifact(certificate_url: Optional[str]) -> None:
        """Delete an artifact that ended up without a certificate row"""
        if not certificate_url:
            return
        path = settings.certificates_path / certificate_url.rsplit("/", 1)[-1]
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove unused certificate file %s: %s", path, exc)

    @staticmethod
    def write_artifact(
        event: dict,
        recipient_name: str,
        role: Optional[str],
        background: Optional[Image.Image] = None
    ) -> str:
        """Render with an already loaded background and store the artifact"""
        variables = CertificateService.certificate_variables(event, recipient_name, role)
        pdf_bytes = render_certificate(event.get("certificate_template"), variables, background)
        return CertificateService.store_artifact(recipient_name, pdf_bytes)
    @staticmethod
    async def load_event_background(event: dict) -> Optional[Image.Image]:
        template = event.get("certificate_template") or {}
        return await load_background(template.get("background_url"))

    @staticmethod
    async def get_certificate(certificate_pk: str) -> dict:
        row = await database.fetch_one(
            f"SELECT {CERTIFICATE_COLUMNS} FROM certificates WHERE id = :id",
            {"id": certificate_pk}
        )
        if not row:
            raise NotFoundError("Certificate")
        return dict(row._mapping)

    @staticmethod
    async def generate_certificate(
        event_id: Optional[str],
        recipient_name: Optional[str],
        recipient_email: Optional[str],
        role: Optional[str],
        actor: dict
    ) -> dict:
        """
        Generate a single certificate for a recipient

        Validates input, checks the actor may manage the event, renders and
        writes the artifact, and only then records the certificate.

        Raises:
            ValidationError: recipient name or event missing
            NotFoundError: event does not exist
            AuthorizationError: actor is neither admin nor the event organizer
            GenerationError: rendering or storage failed
        """
        missing = {}
        if not event_id:
            missing["event_id"] = "Event is required"
        if not recipient_name or not recipient_name.strip():
            missing["recipient_name"] = "Recipient name is required"
        if missing:
            raise ValidationError(missing)

        event = await EventService.get_event(event_id)

        if not EventService.can_manage(actor, event):
            raise AuthorizationError()

        recipient_name = recipient_name.strip()
        try:
            variables = CertificateService.certificate_variables(event, recipient_name, role)
            pdf_bytes = await render(event.get("certificate_template"), variables)
            certificate_url = CertificateService.store_artifact(recipient_name, pdf_bytes)
        except Exception:
            logger.exception(
                "Certificate generation failed for event %s, recipient %r", event_id, recipient_name
            )
            raise GenerationError()

        certificate_pk = str(uuid.uuid4())
        await database.execute(
            """
            INSERT INTO certificates
            (id, event_id, recipient_name, recipient_email, role, certificate_url, certificate_id, created_at)
            VALUES (:id, :event_id, :recipient_name, :recipient_email, :role, :certificate_url, :certificate_id, :created_at)
            """,
            {
                "id": certificate_pk,
                "event_id": event_id,
                "recipient_name": recipient_name,
                "recipient_email": recipient_email,
                "role": role,
                "certificate_url": certificate_url,
                "certificate_id": f"CERT-{uuid.uuid4().hex[:12].upper()}",
                "created_at": datetime.now(timezone.utc)
            }
        )

        await ActivityLogService.try_log_activity(
            actor["id"],
            "generate_certificate",
            resource_type="certificate",
            resource_id=certificate_pk,
            details={"event_id": event_id, "recipient_name": recipient_name}
        )

        return await CertificateService.get_certificate(certificate_pk)

    @staticmethod
    async def bulk_insert(records: List[dict]) -> List[str]:
        """
        Insert certificate rows as one unordered batch

        Rows whose certificate_id already exists are skipped; every other row
        is kept. Each statement reports its own row, so inserts running
        elsewhere at the same time do not affect the result.

        Returns:
            Primary key (`id`) of every row actually inserted
        """
        inserted = []
        if not records:
            return inserted

        async with database.transaction():
            for record in records:
                rows = await database.fetch_all(
                    """
                    INSERT INTO certificates
                    (id, event_id, recipient_name, recipient_email, role, certificate_url, certificate_id, created_at)
                    VALUES (:id, :event_id, :recipient_name, :recipient_email, :role, :certificate_url, :certificate_id, :created_at)
                    ON CONFLICT (certificate_id) DO NOTHING
                    RETURNING id
                    """,
                    record
                )
                if rows:
                    inserted.append(record["id"])
        return inserted

    @staticmethod
    async def issue_completion_certificates(event: dict) -> int:
        """
        Issue participation certificates to every team leader and member of a
        completed event

        Runs after the event update has been committed. A recipient whose
        artifact cannot be rendered is skipped, duplicate certificate ids are
        skipped by the insert, and nothing here is raised to the caller.

        Returns:
            Number of certificates recorded
        """
        event_id = event["id"]
        try:
            recipients = await TeamService.list_recipients(event_id)
            logger.info("Event %s completed, generating certificates for %d recipients", event_id, len(recipients))
            if not recipients:
                return 0

            background = await CertificateService.load_event_background(event)

            records = []
            for recipient in recipients:
                try:
                    certificate_url = CertificateService.write_artifact(
                        event, recipient["name"], PARTICIPANT_ROLE, background
                    )
                except Exception:
                    logger.exception(
                        "Skipping certificate for user %s in event %s", recipient["user_id"], event_id
                    )
                    continue
                records.append({
                    "id": str(uuid.uuid4()),
                    "event_id": event_id,
                    "recipient_name": recipient["name"],
                    "recipient_email": recipient["email"],
                    "role": PARTICIPANT_ROLE,
                    "certificate_url": certificate_url,
                    "certificate_id": f"CERT-{event_id}-{recipient['user_id']}-{int(time.time() * 1000)}",
                    "created_at": datetime.now(timezone.utc),
                })

            inserted_ids = set(await CertificateService.bulk_insert(records))
            skipped = [r for r in records if r["id"] not in inserted_ids]
            for record in skipped:
                CertificateService.remove_artifact(record["certificate_url"])
            if skipped:
                logger.warning("Skipped %d duplicate certificates for event %s", len(skipped), event_id)

            inserted = len(records) - len(skipped)
            logger.info("Generated %d certificates for event %s", inserted, event_id)

            await ActivityLogService.try_log_activity(
                None,
                "issue_certificates",
                resource_type="event",
                resource_id=event_id,
                details={"recipients": len(recipients), "issued": inserted}
            )
            return inserted
        except Exception:
            logger.exception("Certificate generation failed for completed event %s", event_id)
            return 0

    @staticmethod
    async def list_certificates(event_id: str, actor: dict) -> dict:
        event = await EventService.get_event(event_id)
        if not EventService.can_manage(actor, event):
            raise AuthorizationError()

        rows = await database.fetch_all(
            f"""
            SELECT {CERTIFICATE_COLUMNS} FROM certificates
            WHERE event_id = :event_id
            ORDER BY created_at DESC
            """,
            {"event_id": event_id}
        )
        return {"total": len(rows), "certificates": [dict(r._mapping) for r in rows]}

    @staticmethod
    async def list_my_certificates(actor: dict) -> dict:
        rows = await database.fetch_all(
            f"""
            SELECT {CERTIFICATE_COLUMNS} FROM certificates
            WHERE LOWER(recipient_email) = LOWER(:email)
            ORDER BY created_at DESC
            """,
            {"email": actor.get("email") or ""}
        )
        return {"total": len(rows), "certificates": [dict(r._mapping) for r in rows]}

    @staticmethod
    async def verify_certificate(certificate_id: str) -> dict:
        row = await database.fetch_one(
            """
            SELECT c.certificate_id, c.recipient_name, c.role, c.event_id,
                   c.certificate_url, c.created_at, e.title AS event_title
            FROM certificates c
            JOIN events e ON e.id = c.event_id
            WHERE c.certificate_id = :certificate_id
            """,
            {"certificate_id": certificate_id}
        )
        if not row:
            raise NotFoundError("Certificate")

        row = dict(row._mapping)
        return {
            "valid": True,
            "certificate_id": row["certificate_id"],
            "recipient_name": row["recipient_name"],
            "role": row["role"],
            "event_id": row["event_id"],
            "event_title": row["event_title"],
            "certificate_url": row["certificate_url"],
            "issued_at": row["created_at"],
        }


# Create singleton instance
certificate_service = CertificateService()
