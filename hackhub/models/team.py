"""
Team Models
Teams registered for an event and their members
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, JSON, func
from sqlalchemy.orm import relationship
import uuid
from hackhub.database import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    leader_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    max_members = Column(Integer, nullable=False, default=4)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    event = relationship("Event", backref="teams")
    leader = relationship("User", backref="led_teams")


class TeamMember(Base):
    __tablename__ = "team_members"

    team_id = Column(String(36), ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    team = relationship("Team", backref="memberships")
    user = relationship("User", backref="team_memberships")
