# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Enumeration types for the RESPOND volunteer coordination platform.
"""

from enum import Enum


class VolunteerStatus(str, Enum):
    """Volunteer verification status enumeration."""
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class RequestUrgency(str, Enum):
    """Urgency levels for aid requests."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RequestStatus(str, Enum):
    """Aid request lifecycle status enumeration."""
    ACTIVE = "active"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


class AssignmentStatus(str, Enum):
    """Assignment workflow status enumeration."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"


# Statuses that count a volunteer as confirmed for a request
CONFIRMED_ASSIGNMENT_STATUSES = frozenset({
    AssignmentStatus.ACCEPTED.value,
    AssignmentStatus.COMPLETED.value
})
