"""
Admin Routes
Platform-wide views for admins
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hackhub.auth import get_admin
from hackhub.schemas.activity_log import ActivityLogResponse
from hackhub.services.activity_log_service import ActivityLogService

router = APIRouter()


@router.get("/activity-logs", response_model=ActivityLogResponse)
async def get_activity_logs(
    limit: int = Query(50, ge=1, le=100, description="Number of records to return"),
    offset: int = Query(0, ge=0, description="Number of records to skip"),
    action: Optional[str] = Query(None, description="Filter by action type"),
    current_admin: dict = Depends(get_admin)
):
    """
    Audit trail of event and certificate actions (Admin only)

    Newest entries first, optionally filtered by action
    (e.g. `update_event`, `issue_certificates`).
    """
    logs, total = await ActivityLogService.list_activity_logs(
        limit=limit,
        offset=offset,
        action_filter=action
    )
    return {
        "logs": logs,
        "total": total,
        "limit": limit,
        "offset": offset,
        "has_more": offset + len(logs) < total
    }
