"""
User Roles
Closed set of roles and the dashboard each one lands on
"""

from enum import Enum
from typing import Optional


class Role(str, Enum):
    ADMIN = "admin"
    ORGANIZER = "organizer"
    JUDGE = "judge"
    MENTOR = "mentor"
    PARTICIPANT = "participant"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """Map a stored or token role to a Role, defaulting to participant"""
        try:
            return cls(value)
        except ValueError:
            return cls.PARTICIPANT

    @property
    def dashboard_path(self) -> str:
        return f"/{self.value}"


EVENT_MANAGERS = frozenset({Role.ADMIN, Role.ORGANIZER})
