# SPDX-License-Identifier: Apache-2.0

"""
In-memory entity store for tests and local development.

All state lives in insertion-ordered dicts guarded by a single re-entrant
lock, so each operation is indivisible for concurrent request threads.
Entities are copied on the way in and out; callers never share state
with the store.
"""

import threading
import logging
from datetime import datetime
from typing import List, Optional, Dict, Any, Tuple

from opentelemetry import trace

from models.entities import Volunteer, AidRequest, Assignment
from models.enums import AssignmentStatus, VolunteerStatus
from services.store import EntityStore, AssignmentFilters, timestamp_field_for

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


class InMemoryEntityStore(EntityStore):
    """Thread-safe dict-backed EntityStore."""

    def __init__(self):
        self._lock = threading.RLock()
        self._volunteers: Dict[str, Volunteer] = {}
        self._volunteer_emails: Dict[str, str] = {}
        self._requests: Dict[str, AidRequest] = {}
        self._assignments: Dict[str, Assignment] = {}
        self._assignment_pairs: Dict[Tuple[str, str], str] = {}

        logger.info("In-memory entity store initialized")

    # Volunteers

    def get_volunteer(self, volunteer_id: str) -> Optional[Volunteer]:
        with self._lock:
            volunteer = self._volunteers.get(volunteer_id)
            return volunteer.model_copy(deep=True) if volunteer else None

    def list_volunteers(self) -> List[Volunteer]:
        with self._lock:
            volunteers = [v.model_copy(deep=True) for v in self._volunteers.values()]
        return sorted(volunteers, key=lambda v: v.created_at, reverse=True)

    def list_verified_volunteers(self) -> List[Volunteer]:
        with self._lock:
            return [
                v.model_copy(deep=True)
                for v in self._volunteers.values()
                if v.status == VolunteerStatus.VERIFIED
            ]

    def insert_volunteer(self, volunteer: Volunteer) -> bool:
        with self._lock:
            if volunteer.email in self._volunteer_emails:
                logger.debug(f"Volunteer email already registered: {volunteer.email}")
                return False
            self._volunteers[volunteer.id] = volunteer.model_copy(deep=True)
            self._volunteer_emails[volunteer.email] = volunteer.id
            return True

    # Requests

    def get_request(self, request_id: str) -> Optional[AidRequest]:
        with self._lock:
            aid_request = self._requests.get(request_id)
            return aid_request.model_copy(deep=True) if aid_request else None

    def list_requests(self) -> List[AidRequest]:
        with self._lock:
            requests = [r.model_copy(deep=True) for r in self._requests.values()]
        return sorted(requests, key=lambda r: r.created_at, reverse=True)

    def insert_request(self, aid_request: AidRequest) -> None:
        with self._lock:
            self._requests[aid_request.id] = aid_request.model_copy(deep=True)

    # Assignments

    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        with self._lock:
            assignment = self._assignments.get(assignment_id)
            return assignment.model_copy(deep=True) if assignment else None

    def list_assignments(self, filters: Optional[AssignmentFilters] = None) -> List[Assignment]:
        filters = filters or AssignmentFilters()
        with self._lock:
            return [
                a.model_copy(deep=True)
                for a in self._assignments.values()
                if filters.matches(a)
            ]

    def insert_assignment(self, assignment: Assignment) -> bool:
        with tracer.start_as_current_span("store.memory.insert_assignment") as span:
            span.set_attributes({
                "assignment.request_id": assignment.request_id,
                "assignment.volunteer_id": assignment.volunteer_id
            })
            with self._lock:
                if assignment.pair_key in self._assignment_pairs:
                    span.set_attribute("store.result", "conflict")
                    return False
                self._assignments[assignment.id] = assignment.model_copy(deep=True)
                self._assignment_pairs[assignment.pair_key] = assignment.id
            span.set_attribute("store.result", "inserted")
            return True

    def update_assignment_status(
        self,
        assignment_id: str,
        status: AssignmentStatus,
        timestamp: datetime
    ) -> bool:
        with self._lock:
            assignment = self._assignments.get(assignment_id)
            if assignment is None:
                return False

            updates = {"status": status, "updated_at": timestamp}
            timestamp_field = timestamp_field_for(status)
            if timestamp_field:
                updates[timestamp_field] = timestamp

            for field, value in updates.items():
                setattr(assignment, field, value)
            return True

    def health_check(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'status': 'healthy',
                'backend': 'memory',
                'volunteers': len(self._volunteers),
                'requests': len(self._requests),
                'assignments': len(self._assignments)
            }

    def clear(self) -> None:
        """Drop every entity (test helper)."""
        with self._lock:
            self._volunteers.clear()
            self._volunteer_emails.clear()
            self._requests.clear()
            self._assignments.clear()
            self._assignment_pairs.clear()
