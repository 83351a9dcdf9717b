# SPDX-License-Identifier: Apache-2.0

"""
Volunteer registration and read projections.
"""

import logging
from typing import List

from domain.errors import ConflictError, NotFoundError
from models.entities import Volunteer
from models.enums import VolunteerStatus
from models.requests import VolunteerRegistrationRequest
from models.responses import (
    VolunteerView, VolunteerStatsView, VolunteerTaskView, TaskRequestSummary
)
from services.store import EntityStore, AssignmentFilters

logger = logging.getLogger(__name__)


def register_volunteer(store: EntityStore, registration: VolunteerRegistrationRequest) -> Volunteer:
    """
    Create a pending volunteer from an onboarding submission.

    Raises:
        ConflictError: if a volunteer with the same email already exists
    """
    info = registration.personal_info
    volunteer = Volunteer(
        full_name=info.full_name,
        email=info.email,
        phone=info.phone,
        date_of_birth=info.date_of_birth,
        city=info.city,
        state=info.state,
        pincode=info.pincode,
        emergency_contact_name=info.emergency_contact_name,
        emergency_contact_phone=info.emergency_contact_phone,
        skills=registration.skills.selected_skills,
        experience=registration.skills.experience,
        license_number=registration.skills.license_number,
        verification=registration.verification,
        availability=registration.availability.model_dump(),
        status=VolunteerStatus.PENDING
    )

    if not store.insert_volunteer(volunteer):
        raise ConflictError("A volunteer with this email is already registered")

    logger.info(
        f"New volunteer registration: {volunteer.full_name}",
        extra={
            "volunteer_id": volunteer.id,
            "skills": volunteer.skills
        }
    )
    return volunteer


def get_volunteer(store: EntityStore, volunteer_id: str) -> Volunteer:
    volunteer = store.get_volunteer(volunteer_id)
    if volunteer is None:
        raise NotFoundError(f"Volunteer {volunteer_id} not found")
    return volunteer


def to_volunteer_view(volunteer: Volunteer) -> VolunteerView:
    return VolunteerView(
        id=volunteer.id,
        name=volunteer.full_name,
        email=volunteer.email,
        phone=volunteer.phone,
        city=volunteer.city,
        state=volunteer.state,
        skills=volunteer.skills,
        verified=volunteer.is_verified,
        status=volunteer.status,
        rating=volunteer.rating,
        tasks_completed=volunteer.tasks_completed,
        hours_served=volunteer.hours_served
    )


def list_volunteers(store: EntityStore) -> List[VolunteerView]:
    return [to_volunteer_view(v) for v in store.list_volunteers()]


def get_volunteer_stats(store: EntityStore, volunteer_id: str) -> VolunteerStatsView:
    volunteer = get_volunteer(store, volunteer_id)
    return VolunteerStatsView(
        tasks_completed=volunteer.tasks_completed,
        hours_served=volunteer.hours_served,
        rating=volunteer.rating
    )


def get_volunteer_tasks(store: EntityStore, volunteer_id: str) -> List[VolunteerTaskView]:
    """
    List a volunteer's assignments with their request details, newest first.

    Assignments whose request no longer resolves are left out.

    Raises:
        NotFoundError: if the volunteer does not exist
    """
    get_volunteer(store, volunteer_id)

    assignments = store.list_assignments(AssignmentFilters(volunteer_id=volunteer_id))
    tasks = []
    for assignment in sorted(assignments, key=lambda a: a.assigned_at, reverse=True):
        aid_request = store.get_request(assignment.request_id)
        if aid_request is None:
            continue
        tasks.append(VolunteerTaskView(
            id=assignment.id,
            volunteer_id=assignment.volunteer_id,
            status=assignment.status,
            assigned_at=assignment.assigned_at,
            accepted_at=assignment.accepted_at,
            completed_at=assignment.completed_at,
            request=TaskRequestSummary(
                id=aid_request.id,
                title=aid_request.title,
                location=aid_request.location,
                urgency=aid_request.urgency
            )
        ))
    return tasks
