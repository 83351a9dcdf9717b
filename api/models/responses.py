# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Response models for API endpoints with HAL support.
"""

from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from .base import CamelModel


class HalLink(BaseModel):
    """HAL link representation."""

    href: str = Field(..., description="Link URL")
    method: Optional[str] = Field(None, description="HTTP method")
    type: Optional[str] = Field(None, description="Content type")
    title: Optional[str] = Field(None, description="Link title")
    templated: Optional[bool] = Field(None, description="Whether URL is templated")


class VolunteerCounts(CamelModel):
    """Headcount summary for an aid request."""

    needed: int = Field(..., description="Volunteers needed")
    matched: int = Field(..., description="Assignments in any status")
    confirmed: int = Field(..., description="Assignments accepted or completed")


class AssignedVolunteerSummary(CamelModel):
    """Volunteer assigned to a request, as shown on the request card."""

    volunteer_id: str
    name: str
    verified: bool
    rating: float
    specialty: str


class RequestView(CamelModel):
    """Aid request enriched with live assignment data."""

    id: str
    title: str
    description: Optional[str] = None
    location: str
    skills: List[str]
    urgency: str
    status: str
    volunteers: VolunteerCounts
    organization_name: Optional[str] = None
    created_at: datetime
    matches: List[AssignedVolunteerSummary] = Field(default_factory=list)


class MatchCandidateView(CamelModel):
    """Skill-eligible volunteer returned by the matches endpoint."""

    id: str
    name: str
    verified: bool
    rating: float
    specialty: str
    skills: List[str]
    tasks_completed: int


class AssignmentBatchResponse(CamelModel):
    """Outcome of a batch assignment call."""

    request_id: str
    assignments_created: int


class AssignmentAcceptedResponse(CamelModel):
    """Outcome of accepting a task."""

    id: str
    status: str
    accepted_at: Optional[datetime] = None


class VolunteerRegistrationResponse(CamelModel):
    """Echo of a newly registered volunteer."""

    id: str
    full_name: str
    email: str
    status: str
    created_at: datetime


class VolunteerView(CamelModel):
    """Volunteer directory entry."""

    id: str
    name: str
    email: str
    phone: str
    city: Optional[str] = None
    state: Optional[str] = None
    skills: List[str]
    verified: bool
    status: str
    rating: float
    tasks_completed: int
    hours_served: int


class VolunteerStatsView(CamelModel):
    """Service record of a volunteer."""

    tasks_completed: int
    hours_served: int
    rating: float


class TaskRequestSummary(CamelModel):
    """Request details embedded in a volunteer task."""

    id: str
    title: str
    location: str
    urgency: str


class VolunteerTaskView(CamelModel):
    """Assignment as seen from the volunteer's dashboard."""

    id: str
    volunteer_id: str
    status: str
    assigned_at: datetime
    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    request: TaskRequestSummary
