"""
Activity Logging Service
Audit trail writes and queries
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from hackhub.database import database

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Service for activity logging operations"""

    @staticmethod
    async def log_activity(
        actor_id: Optional[str],
        action: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ) -> str:
        """
        Log an activity

        Args:
            actor_id: User who performed the action
            action: Action type (e.g., 'create_event', 'issue_certificates')
            resource_type: Type of resource affected (e.g., 'event', 'certificate')
            resource_id: ID of the resource
            details: Additional JSON details

        Returns:
            ID of the created log entry
        """
        log_id = str(uuid.uuid4())
        await database.execute(
            """
            INSERT INTO activity_logs (id, actor_id, action, resource_type, resource_id, details, created_at)
            VALUES (:id, :actor_id, :action, :resource_type, :resource_id, :details, :created_at)
            """,
            {
                "id": log_id,
                "actor_id": actor_id,
                "action": action,
                "resource_type": resource_type,
                "resource_id": resource_id,
                "details": json.dumps(details) if details else None,
                "created_at": datetime.now(timezone.utc)
            }
        )
        return log_id

    @staticmethod
    async def try_log_activity(
        actor_id: Optional[str],
        action: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ) -> None:
        """Log an activity without letting a failed audit write fail the caller"""
        try:
            await ActivityLogService.log_activity(actor_id, action, resource_type, resource_id, details)
        except Exception as exc:
            logger.warning("Activity log write failed for %s: %s", action, exc)

    @staticmethod
    async def list_activity_logs(
        limit: int = 50,
        offset: int = 0,
        action_filter: Optional[str] = None
    ) -> tuple[List[dict], int]:
        """
        Get activity logs, newest first

        Returns:
            Tuple of (activity logs list, total count)
        """
        where_clause = "1 = 1"
        params = {}
        if action_filter:
            where_clause = "action = :action"
            params["action"] = action_filter

        total = await database.fetch_val(
            f"SELECT COUNT(*) FROM activity_logs WHERE {where_clause}",
            params
        )

        logs = await database.fetch_all(
            f"""
            SELECT id, actor_id, action, resource_type, resource_id, details, created_at
            FROM activity_logs
            WHERE {where_clause}
            ORDER BY created_at DESC
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": limit, "offset": offset}
        )

        return [dict(log._mapping) for log in logs], total or 0
