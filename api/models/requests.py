# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request models for API endpoints.
"""

import re
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator

from .base import CamelModel
from .entities import Availability, EMAIL_PATTERN, clean_labels
from .enums import RequestUrgency


class CreateAidRequestRequest(CamelModel):
    """Request model for posting an emergency-aid request."""

    title: str = Field(default="", max_length=200, validate_default=True, description="Request title")
    location: str = Field(default="", validate_default=True, description="Free-text location")
    skills: List[str] = Field(default_factory=list, validate_default=True, description="Required skill labels")
    urgency: RequestUrgency = Field(default=RequestUrgency.MEDIUM, description="Urgency level")
    volunteers_needed: int = Field(default=1, ge=1, description="Number of volunteers needed")
    description: Optional[str] = Field(None, max_length=2000, description="Request description")
    organization_name: Optional[str] = Field(None, description="Posting organization")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v or not v.strip():
            raise ValueError('Title is required')
        return v.strip()

    @field_validator('location')
    @classmethod
    def validate_location(cls, v):
        if not v or not v.strip():
            raise ValueError('Location is required')
        return v.strip()

    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        skills = clean_labels(v)
        if not skills:
            raise ValueError('At least one skill is required')
        return skills

    @field_validator('urgency', mode='before')
    @classmethod
    def default_urgency(cls, v):
        # Missing or null urgency falls back to medium
        return v or RequestUrgency.MEDIUM

    @field_validator('volunteers_needed', mode='before')
    @classmethod
    def default_volunteers_needed(cls, v):
        return 1 if v is None else v

    @field_validator('description', 'organization_name')
    @classmethod
    def strip_optional(cls, v):
        if v is None:
            return None
        return v.strip() or None


class AssignVolunteersRequest(CamelModel):
    """Request model for assigning volunteers to an aid request."""

    volunteer_ids: List[str] = Field(default_factory=list, validate_default=True, description="Volunteer IDs to assign")

    @field_validator('volunteer_ids')
    @classmethod
    def validate_volunteer_ids(cls, v):
        if not v:
            raise ValueError('volunteerIds array is required')
        return v


class PersonalInfo(CamelModel):
    """Personal details captured during volunteer onboarding."""

    full_name: str = Field(default="", validate_default=True, description="Full name")
    email: str = Field(default="", validate_default=True, description="Email address")
    phone: str = Field(default="", validate_default=True, description="Phone number")
    date_of_birth: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None

    @field_validator('full_name')
    @classmethod
    def validate_full_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Full name is required')
        return v.strip()

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if not v or not v.strip():
            raise ValueError('Email is required')
        v = v.strip().lower()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError('Invalid email format')
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            raise ValueError('Phone number is required')
        return v.strip()

    @field_validator(
        'city', 'state', 'pincode',
        'emergency_contact_name', 'emergency_contact_phone'
    )
    @classmethod
    def strip_optional(cls, v):
        if v is None:
            return None
        return v.strip() or None


class SkillsProfile(CamelModel):
    """Skills and certifications captured during volunteer onboarding."""

    selected_skills: List[str] = Field(default_factory=list, validate_default=True, description="Selected skill labels")
    experience: Dict[str, float] = Field(default_factory=dict, description="Years per skill")
    license_number: Optional[str] = Field(None, description="Professional license number")

    @field_validator('selected_skills')
    @classmethod
    def validate_selected_skills(cls, v):
        skills = clean_labels(v)
        if not skills:
            raise ValueError('At least one skill must be selected')
        return skills

    @field_validator('license_number')
    @classmethod
    def strip_license(cls, v):
        if v is None:
            return None
        return v.strip() or None


class VolunteerAvailability(Availability):
    """Availability block of a registration; at least one day is required."""

    selected_days: List[str] = Field(default_factory=list, validate_default=True, description="Weekday labels")

    @field_validator('selected_days')
    @classmethod
    def validate_selected_days(cls, v):
        if not v:
            raise ValueError('Availability days must be selected')
        return v

    @field_validator('max_distance', mode='before')
    @classmethod
    def default_max_distance(cls, v):
        return 10 if not v else v


class VolunteerRegistrationRequest(CamelModel):
    """Request model for volunteer onboarding submissions."""

    personal_info: PersonalInfo = Field(..., description="Personal information")
    skills: SkillsProfile = Field(..., description="Skills and certifications")
    availability: VolunteerAvailability = Field(..., description="Availability settings")
    verification: Dict[str, Any] = Field(default_factory=dict, description="Verification documents")

    @field_validator('verification', mode='before')
    @classmethod
    def default_verification(cls, v):
        return v or {}


class PaginationParams(BaseModel):
    """Pagination parameters for collection endpoints."""

    page: int = Field(default=1, ge=1, description="Page number")
    page_size: int = Field(default=20, ge=1, le=100, description="Items per page")


class RequestPath(BaseModel):
    """Path parameters for aid request endpoints."""

    request_id: str = Field(..., description="Aid request ID")


class TaskPath(BaseModel):
    """Path parameters for task endpoints."""

    task_id: str = Field(..., description="Task (assignment) ID")


class VolunteerPath(BaseModel):
    """Path parameters for volunteer endpoints."""

    volunteer_id: str = Field(..., description="Volunteer ID")
