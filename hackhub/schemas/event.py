"""
Event Request/Response Models
"""

from pydantic import BaseModel, Field, AliasChoices
from typing import Optional, List, Literal
from datetime import datetime
from enum import Enum


class EventStatus(str, Enum):
    DRAFT = "draft"
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    ENDED = "ended"


class CertificateElement(BaseModel):
    """One positioned text unit on a certificate"""
    content: str = Field(..., description="Text, may contain {{RECIPIENT_NAME}}, {{EVENT_TITLE}}, {{ROLE}}, {{DATE}}")
    x: float = Field(..., ge=0, description="X coordinate in points")
    y: float = Field(..., ge=0, description="Y coordinate in points")
    font_size: float = Field(
        default=24,
        gt=0,
        le=300,
        validation_alias=AliasChoices("font_size", "fontSize"),
        description="Font size in points"
    )
    color: str = Field(
        default="#000000",
        validation_alias=AliasChoices("color", "font_color", "fontColor"),
        description="Hex color code (e.g., #000000)"
    )
    align: Literal["left", "center", "right"] = Field(default="left")


class CertificateTemplate(BaseModel):
    """Background plus ordered text elements"""
    background_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("background_url", "backgroundUrl"),
        description="Remote http(s) URL or path under the public directory"
    )
    elements: List[CertificateElement] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "background_url": "/backgrounds/hackathon.png",
                "elements": [
                    {"content": "{{RECIPIENT_NAME}}", "x": 221, "y": 260, "font_size": 36, "align": "center"},
                    {"content": "{{ROLE}} at {{EVENT_TITLE}}", "x": 221, "y": 320, "align": "center"},
                ]
            }
        }


class EventModules(BaseModel):
    """Per-event feature toggles"""
    judging: bool = True
    certificates: bool = True
    gallery: bool = True
    teams: bool = True


class EventModulesPatch(BaseModel):
    judging: bool = None
    certificates: bool = None
    gallery: bool = None
    teams: bool = None


class CreateEventRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Title is required")
    description: str = Field(..., min_length=1, description="Description is required")
    start_date: datetime = Field(..., validation_alias=AliasChoices("start_date", "startDate"))
    end_date: datetime = Field(..., validation_alias=AliasChoices("end_date", "endDate"))
    registration_deadline: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("registration_deadline", "registrationDeadline")
    )
    rules: List[str] = Field(default_factory=list)
    tracks: List[str] = Field(default_factory=list)
    status: EventStatus = EventStatus.DRAFT
    modules: EventModules = Field(default_factory=EventModules)
    certificate_template: Optional[CertificateTemplate] = Field(
        default=None,
        validation_alias=AliasChoices("certificate_template", "certificateTemplate")
    )


class UpdateEventRequest(BaseModel):
    """Partial update: only fields present in the body are applied"""
    title: str = Field(None, min_length=1)
    description: str = Field(None, min_length=1)
    start_date: datetime = Field(None, validation_alias=AliasChoices("start_date", "startDate"))
    end_date: datetime = Field(None, validation_alias=AliasChoices("end_date", "endDate"))
    registration_deadline: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("registration_deadline", "registrationDeadline")
    )
    rules: List[str] = None
    tracks: List[str] = None
    status: EventStatus = None
    modules: EventModulesPatch = None


class OrganizerSummary(BaseModel):
    id: str
    name: str
    email: str


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    registration_deadline: Optional[datetime] = None
    rules: List[str] = []
    tracks: List[str] = []
    status: EventStatus
    organizer_id: Optional[str] = None
    organizer: Optional[OrganizerSummary] = None
    modules: EventModules
    certificate_template: Optional[CertificateTemplate] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EventEnvelope(BaseModel):
    event: EventResponse


class EventListResponse(BaseModel):
    events: List[EventResponse]
