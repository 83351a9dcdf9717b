# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Core entity models for the RESPOND platform.
"""

import re
from datetime import datetime
from typing import List, Optional, Dict, Any
from pydantic import Field, field_validator

from .base import BaseEntity, CamelModel, utcnow
from .enums import VolunteerStatus, RequestUrgency, RequestStatus, AssignmentStatus

EMAIL_PATTERN = r'^[^\s@]+@[^\s@]+\.[^\s@]+$'
DEFAULT_SPECIALTY = "Volunteer"


def clean_labels(labels: List[str]) -> List[str]:
    """Strip free-form labels and drop blank ones, keeping order."""
    return [label.strip() for label in labels if label and label.strip()]


class NotificationPreferences(CamelModel):
    """Channels a volunteer agreed to be contacted on."""

    sms: bool = True
    email: bool = True
    push: bool = True
    whatsapp: bool = False


class Availability(CamelModel):
    """Volunteer availability settings."""

    max_distance: float = Field(default=10, ge=0, description="Maximum travel distance")
    selected_days: List[str] = Field(default_factory=list, description="Weekday labels")
    selected_emergencies: List[str] = Field(default_factory=list, description="Emergency types")
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)

    @field_validator('notifications', mode='before')
    @classmethod
    def default_notifications(cls, v):
        return NotificationPreferences() if v is None else v


class Volunteer(BaseEntity):
    """Registered volunteer with skills, verification status and availability."""

    full_name: str = Field(..., min_length=1, max_length=200, description="Volunteer full name")
    email: str = Field(..., description="Volunteer email address")
    phone: str = Field(..., min_length=1, description="Contact phone number")
    date_of_birth: Optional[str] = Field(None, description="Date of birth")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State")
    pincode: Optional[str] = Field(None, description="Postal code")
    emergency_contact_name: Optional[str] = Field(None, description="Emergency contact name")
    emergency_contact_phone: Optional[str] = Field(None, description="Emergency contact phone")
    skills: List[str] = Field(default_factory=list, description="Skill labels, primary first")
    experience: Dict[str, float] = Field(default_factory=dict, description="Years of experience per skill")
    license_number: Optional[str] = Field(None, description="Professional license number")
    verification: Dict[str, Any] = Field(default_factory=dict, description="Verification document metadata")
    availability: Availability = Field(default_factory=Availability)
    status: VolunteerStatus = Field(default=VolunteerStatus.PENDING, description="Verification status")
    rating: float = Field(default=0, ge=0, description="Average rating")
    tasks_completed: int = Field(default=0, ge=0, description="Completed task count")
    hours_served: int = Field(default=0, ge=0, description="Total hours served")

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Validate email format and normalize to lowercase."""
        v = v.strip().lower()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError('Invalid email format')
        return v

    @field_validator('full_name')
    @classmethod
    def validate_name(cls, v):
        """Validate volunteer name."""
        if not v.strip():
            raise ValueError('Full name cannot be empty')
        return v.strip()

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        return clean_labels(v)

    @property
    def is_verified(self) -> bool:
        return self.status == VolunteerStatus.VERIFIED

    @property
    def primary_specialty(self) -> str:
        """First listed skill, or a generic label when none are listed."""
        return self.skills[0] if self.skills else DEFAULT_SPECIALTY


class AidRequest(BaseEntity):
    """Emergency-aid request posted by an organization."""

    title: str = Field(..., min_length=1, max_length=200, description="Request title")
    description: Optional[str] = Field(None, max_length=2000, description="Request description")
    location: str = Field(..., min_length=1, description="Free-text location")
    skills: List[str] = Field(default_factory=list, description="Required skill labels")
    urgency: RequestUrgency = Field(default=RequestUrgency.MEDIUM, description="Urgency level")
    status: RequestStatus = Field(default=RequestStatus.ACTIVE, description="Request status")
    volunteers_needed: int = Field(default=1, ge=1, description="Number of volunteers needed")
    organization_name: Optional[str] = Field(None, description="Posting organization")

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        return clean_labels(v)


class Assignment(BaseEntity):
    """Link between one volunteer and one aid request."""

    request_id: str = Field(..., description="Aid request ID")
    volunteer_id: str = Field(..., description="Volunteer ID")
    status: AssignmentStatus = Field(default=AssignmentStatus.PENDING, description="Assignment status")
    assigned_at: datetime = Field(default_factory=utcnow, description="Assignment timestamp")
    accepted_at: Optional[datetime] = Field(None, description="Acceptance timestamp")
    completed_at: Optional[datetime] = Field(None, description="Completion timestamp")

    @property
    def pair_key(self) -> tuple:
        """Unique (request, volunteer) key."""
        return (self.request_id, self.volunteer_id)
