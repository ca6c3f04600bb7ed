"""
User Model
Accounts for admins, organizers, judges, mentors and participants
"""

from sqlalchemy import Column, String, DateTime, func
import uuid
from hackhub.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # One of hackhub.auth.roles.Role
    role = Column(String(20), nullable=False, default="participant")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
