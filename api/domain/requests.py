# SPDX-License-Identifier: Apache-2.0

"""
Aid request creation and presentation.

A request's display state is rebuilt from the store on every read: the
matched/confirmed counts and the assigned volunteer list come from the
request's assignments, never from cached counters. The volunteers listed
here are the ones actually assigned, which is a different population from
the skill-match candidates computed in domain.matching.
"""

import logging
from typing import List, Tuple

from domain.errors import NotFoundError
from models.entities import AidRequest, Assignment
from models.enums import CONFIRMED_ASSIGNMENT_STATUSES, RequestStatus
from models.requests import CreateAidRequestRequest
from models.responses import RequestView, VolunteerCounts, AssignedVolunteerSummary
from services.store import EntityStore, AssignmentFilters

logger = logging.getLogger(__name__)


def create_request(store: EntityStore, payload: CreateAidRequestRequest) -> AidRequest:
    """
    Persist a new active aid request from a validated payload.

    Args:
        store: Entity store
        payload: Validated creation payload

    Returns:
        The stored AidRequest
    """
    aid_request = AidRequest(
        title=payload.title,
        description=payload.description,
        location=payload.location,
        skills=payload.skills,
        urgency=payload.urgency,
        status=RequestStatus.ACTIVE,
        volunteers_needed=payload.volunteers_needed,
        organization_name=payload.organization_name
    )
    store.insert_request(aid_request)

    logger.info(
        f"New request created: {aid_request.title}",
        extra={
            "request_id": aid_request.id,
            "skills": aid_request.skills,
            "urgency": aid_request.urgency
        }
    )
    return aid_request


def count_confirmed(assignments: List[Assignment]) -> int:
    """Number of assignments accepted or completed."""
    return sum(1 for a in assignments if a.status in CONFIRMED_ASSIGNMENT_STATUSES)


class RequestAggregator:
    """Builds request views enriched with live assignment and volunteer data."""

    def __init__(self, store: EntityStore):
        self.store = store

    def present(self, aid_request: AidRequest) -> RequestView:
        assignments = self.store.list_assignments(AssignmentFilters(request_id=aid_request.id))

        matches = []
        for assignment in assignments:
            volunteer = self.store.get_volunteer(assignment.volunteer_id)
            # Dangling references are counted but not listed
            if volunteer is None:
                continue
            matches.append(AssignedVolunteerSummary(
                volunteer_id=volunteer.id,
                name=volunteer.full_name,
                verified=volunteer.is_verified,
                rating=volunteer.rating,
                specialty=volunteer.primary_specialty
            ))

        return RequestView(
            id=aid_request.id,
            title=aid_request.title,
            description=aid_request.description,
            location=aid_request.location,
            skills=aid_request.skills,
            urgency=aid_request.urgency,
            status=aid_request.status,
            volunteers=VolunteerCounts(
                needed=aid_request.volunteers_needed,
                matched=len(assignments),
                confirmed=count_confirmed(assignments)
            ),
            organization_name=aid_request.organization_name,
            created_at=aid_request.created_at,
            matches=matches
        )

    def present_by_id(self, request_id: str) -> RequestView:
        aid_request = self.store.get_request(request_id)
        if aid_request is None:
            raise NotFoundError(f"Request {request_id} not found")
        return self.present(aid_request)

    def list_requests(self) -> List[RequestView]:
        """Present every request, newest first."""
        return [self.present(r) for r in self.store.list_requests()]

    def list_requests_page(self, page: int, page_size: int) -> Tuple[List[RequestView], int]:
        """
        Present one page of requests, newest first.

        Returns:
            Tuple of (views on the page, total number of requests)
        """
        requests = self.store.list_requests()
        start = (page - 1) * page_size
        return [self.present(r) for r in requests[start:start + page_size]], len(requests)
