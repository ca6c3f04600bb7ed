"""
Certificate Model
One row per issued certificate artifact
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
import uuid
from hackhub.database import Base


class Certificate(Base):
    __tablename__ = "certificates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)

    # Recipient identity is copied, not referenced
    recipient_name = Column(String(200), nullable=False)
    recipient_email = Column(String(255), nullable=True, index=True)
    role = Column(String(50), nullable=True)

    certificate_url = Column(Text, nullable=True)
    certificate_id = Column(String(200), unique=True, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    event = relationship("Event", backref="certificates")
