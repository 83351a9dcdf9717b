# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas and data models for the RESPOND platform.
"""

# Base models
from .base import BaseEntity, CamelModel

# Enumerations
from .enums import (
    VolunteerStatus,
    RequestUrgency,
    RequestStatus,
    AssignmentStatus
)

# Core entities
from .entities import (
    Volunteer,
    AidRequest,
    Assignment,
    Availability,
    NotificationPreferences
)

# Request models
from .requests import (
    CreateAidRequestRequest,
    AssignVolunteersRequest,
    VolunteerRegistrationRequest,
    PersonalInfo,
    SkillsProfile,
    PaginationParams
)

# Response models
from .responses import (
    HalLink,
    RequestView,
    VolunteerCounts,
    AssignedVolunteerSummary,
    MatchCandidateView,
    VolunteerView,
    VolunteerStatsView,
    VolunteerTaskView
)

__all__ = [
    # Base models
    "BaseEntity",
    "CamelModel",

    # Enumerations
    "VolunteerStatus",
    "RequestUrgency",
    "RequestStatus",
    "AssignmentStatus",

    # Core entities
    "Volunteer",
    "AidRequest",
    "Assignment",
    "Availability",
    "NotificationPreferences",

    # Request models
    "CreateAidRequestRequest",
    "AssignVolunteersRequest",
    "VolunteerRegistrationRequest",
    "PersonalInfo",
    "SkillsProfile",
    "PaginationParams",

    # Response models
    "HalLink",
    "RequestView",
    "VolunteerCounts",
    "AssignedVolunteerSummary",
    "MatchCandidateView",
    "VolunteerView",
    "VolunteerStatsView",
    "VolunteerTaskView"
]
