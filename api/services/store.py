# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Entity store interface shared by the in-memory and MongoDB backings.

The store owns the volunteer, request and assignment collections. Every
operation is atomic with respect to concurrent callers; in particular
insert_assignment is an insert-or-ignore on the (request, volunteer) pair.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Dict, Any

from models.entities import Volunteer, AidRequest, Assignment
from models.enums import AssignmentStatus


class StoreError(Exception):
    """Raised when the backing store fails unexpectedly (I/O, driver errors)."""
    pass


@dataclass
class AssignmentFilters:
    """Filters for assignment queries. Unset fields match everything."""
    request_id: Optional[str] = None
    volunteer_id: Optional[str] = None
    status: Optional[AssignmentStatus] = None

    def matches(self, assignment: Assignment) -> bool:
        if self.request_id is not None and assignment.request_id != self.request_id:
            return False
        if self.volunteer_id is not None and assignment.volunteer_id != self.volunteer_id:
            return False
        if self.status is not None and assignment.status != _status_value(self.status):
            return False
        return True


def _status_value(status) -> str:
    return status.value if isinstance(status, AssignmentStatus) else status


def timestamp_field_for(status) -> Optional[str]:
    """Name of the assignment timestamp stamped when entering a status."""
    return {
        AssignmentStatus.ACCEPTED.value: "accepted_at",
        AssignmentStatus.COMPLETED.value: "completed_at",
    }.get(_status_value(status))


class EntityStore(ABC):
    """Keyed storage with query support for the matching workflow."""

    # Volunteers

    @abstractmethod
    def get_volunteer(self, volunteer_id: str) -> Optional[Volunteer]:
        """Look up a volunteer by id."""

    @abstractmethod
    def list_volunteers(self) -> List[Volunteer]:
        """All volunteers, newest first."""

    @abstractmethod
    def list_verified_volunteers(self) -> List[Volunteer]:
        """Verified volunteers in the store's natural (insertion) order."""

    @abstractmethod
    def insert_volunteer(self, volunteer: Volunteer) -> bool:
        """Insert a volunteer. Returns False if the email is already registered."""

    # Requests

    @abstractmethod
    def get_request(self, request_id: str) -> Optional[AidRequest]:
        """Look up an aid request by id."""

    @abstractmethod
    def list_requests(self) -> List[AidRequest]:
        """All aid requests ordered by creation time, newest first."""

    @abstractmethod
    def insert_request(self, aid_request: AidRequest) -> None:
        """Insert a new aid request."""

    # Assignments

    @abstractmethod
    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        """Look up an assignment by id."""

    @abstractmethod
    def list_assignments(self, filters: Optional[AssignmentFilters] = None) -> List[Assignment]:
        """Assignments matching the filters, in insertion order."""

    @abstractmethod
    def insert_assignment(self, assignment: Assignment) -> bool:
        """
        Insert an assignment unless its (request, volunteer) pair exists.

        Returns:
            True if inserted, False if the pair was already assigned
        """

    @abstractmethod
    def update_assignment_status(
        self,
        assignment_id: str,
        status: AssignmentStatus,
        timestamp: datetime
    ) -> bool:
        """
        Set an assignment's status and stamp the matching timestamp field.

        Returns:
            True if the assignment exists, False otherwise
        """

    @abstractmethod
    def health_check(self) -> Dict[str, Any]:
        """Report backing store health."""
