"""
Team Request/Response Models
"""

from pydantic import BaseModel, Field, AliasChoices
from typing import Optional, List
from datetime import datetime


class CreateTeamRequest(BaseModel):
    event_id: str = Field(..., validation_alias=AliasChoices("event_id", "eventId"))
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    max_members: int = Field(default=4, ge=1, le=20, validation_alias=AliasChoices("max_members", "maxMembers"))


class TeamMemberResponse(BaseModel):
    id: str
    name: str
    email: str


class TeamResponse(BaseModel):
    id: str
    event_id: str
    name: str
    description: Optional[str] = None
    tags: List[str] = []
    max_members: int
    leader: Optional[TeamMemberResponse] = None
    members: List[TeamMemberResponse] = []
    created_at: Optional[datetime] = None


class TeamListResponse(BaseModel):
    total: int
    teams: List[TeamResponse]
