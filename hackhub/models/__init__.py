"""
Database Models
Import all models here for Alembic migrations
"""

from hackhub.models.user import User
from hackhub.models.event import Event
from hackhub.models.team import Team, TeamMember
from hackhub.models.certificate import Certificate
from hackhub.models.activity_log import ActivityLog

__all__ = [
    "User",
    "Event",
    "Team",
    "TeamMember",
    "Certificate",
    "ActivityLog",
]
