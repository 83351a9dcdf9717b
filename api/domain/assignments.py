# SPDX-License-Identifier: Apache-2.0

"""
Assignment creation and status transitions.

Assignments move pending -> accepted -> completed. This module creates
pending assignments in batches and drives the pending -> accepted step;
completion is recorded by processes outside the API.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from domain.errors import InvalidInputError, NotFoundError
from models.base import utcnow
from models.entities import Assignment
from models.enums import AssignmentStatus
from services.store import EntityStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass
class AssignmentBatchResult:
    """Outcome of a batch assignment call."""
    request_id: str
    created: List[Assignment] = field(default_factory=list)
    skipped_volunteer_ids: List[str] = field(default_factory=list)
    existing_volunteer_ids: List[str] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.created)


class AssignmentManager:
    """Creates assignments and records their acceptance."""

    def __init__(self, store: EntityStore, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    def create_assignments(
        self,
        request_id: str,
        volunteer_ids: Optional[Sequence[str]]
    ) -> AssignmentBatchResult:
        """
        Assign volunteers to an aid request.

        Volunteer ids that do not resolve are skipped, and pairs that are
        already assigned are left untouched, so the batch can partially
        succeed. Callers detect that by comparing created_count with the
        number of ids they sent.

        Args:
            request_id: Aid request ID
            volunteer_ids: Volunteer IDs to assign (non-empty)

        Returns:
            AssignmentBatchResult with the assignments actually created

        Raises:
            InvalidInputError: if volunteer_ids is empty
            NotFoundError: if the request does not exist
        """
        if not volunteer_ids:
            raise InvalidInputError(
                "volunteerIds array is required",
                [{"field": "volunteerIds", "message": "At least one volunteer ID is required"}]
            )

        if self.store.get_request(request_id) is None:
            raise NotFoundError(f"Request {request_id} not found")

        result = AssignmentBatchResult(request_id=request_id)
        now = self.clock()

        for volunteer_id in volunteer_ids:
            if self.store.get_volunteer(volunteer_id) is None:
                result.skipped_volunteer_ids.append(volunteer_id)
                continue

            assignment = Assignment(
                request_id=request_id,
                volunteer_id=volunteer_id,
                status=AssignmentStatus.PENDING,
                assigned_at=now,
                created_at=now,
                updated_at=now
            )
            if self.store.insert_assignment(assignment):
                result.created.append(assignment)
            else:
                result.existing_volunteer_ids.append(volunteer_id)

        logger.info(
            f"Assigned {result.created_count} volunteers to request {request_id}",
            extra={
                "request_id": request_id,
                "requested": len(volunteer_ids),
                "created": result.created_count,
                "skipped": len(result.skipped_volunteer_ids),
                "already_assigned": len(result.existing_volunteer_ids)
            }
        )
        return result

    def accept_assignment(self, assignment_id: str) -> Assignment:
        """
        Mark an assignment accepted and stamp accepted_at.

        The transition is applied whatever the current status is, so
        accepting twice re-stamps accepted_at.

        Raises:
            NotFoundError: if the assignment does not exist
        """
        now = self.clock()
        if not self.store.update_assignment_status(assignment_id, AssignmentStatus.ACCEPTED, now):
            raise NotFoundError(f"Task/Assignment {assignment_id} not found")

        assignment = self.store.get_assignment(assignment_id)
        if assignment is None:
            raise NotFoundError(f"Task/Assignment {assignment_id} not found")

        logger.info(f"Task {assignment_id} accepted")
        return assignment
