"""
Event Model
Hackathons and their per-event feature modules
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Text, JSON, func
from sqlalchemy.orm import relationship
import uuid
from hackhub.database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    organizer_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Event info
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    registration_deadline = Column(DateTime(timezone=True), nullable=True)
    rules = Column(JSON, nullable=False, default=list)
    tracks = Column(JSON, nullable=False, default=list)

    # draft, upcoming, ongoing, completed, ended
    status = Column(String(20), nullable=False, default="draft", index=True)

    # {"judging": bool, "certificates": bool, "gallery": bool, "teams": bool}
    modules = Column(JSON, nullable=False, default=dict)

    # {"background_url": str | None, "elements": [...]}
    certificate_template = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    organizer = relationship("User", backref="organized_events")
