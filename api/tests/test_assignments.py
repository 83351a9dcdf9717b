# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for assignment creation and acceptance.
"""

import threading
import pytest

from domain.assignments import AssignmentManager
from domain.errors import InvalidInputError, NotFoundError
from models.enums import AssignmentStatus
from services.store import AssignmentFilters


class TestCreateAssignments:
    """Test batch assignment creation."""

    def test_creates_pending_assignments(self, store, clock, make_volunteer, make_request):
        aid_request = make_request()
        a = make_volunteer()
        b = make_volunteer()

        result = AssignmentManager(store, clock).create_assignments(aid_request.id, [a.id, b.id])

        assert result.created_count == 2
        assignments = store.list_assignments(AssignmentFilters(request_id=aid_request.id))
        assert {x.volunteer_id for x in assignments} == {a.id, b.id}
        for assignment in assignments:
            assert assignment.status == AssignmentStatus.PENDING.value
            assert assignment.assigned_at == clock.now
            assert assignment.accepted_at is None

    def test_empty_list_is_invalid_even_for_unknown_request(self, store):
        manager = AssignmentManager(store)

        with pytest.raises(InvalidInputError) as exc_info:
            manager.create_assignments("missing", [])

        assert exc_info.value.message == "volunteerIds array is required"

    def test_missing_list_is_invalid(self, store, make_request):
        aid_request = make_request()

        with pytest.raises(InvalidInputError):
            AssignmentManager(store).create_assignments(aid_request.id, None)

    def test_unknown_request(self, store, make_volunteer):
        volunteer = make_volunteer()

        with pytest.raises(NotFoundError):
            AssignmentManager(store).create_assignments("missing", [volunteer.id])

        assert store.list_assignments() == []

    def test_unknown_volunteers_are_skipped(self, store, make_volunteer, make_request):
        aid_request = make_request()
        v1 = make_volunteer()

        result = AssignmentManager(store).create_assignments(aid_request.id, [v1.id, "ghost"])

        assert result.created_count == 1
        assert result.skipped_volunteer_ids == ["ghost"]
        assert [a.volunteer_id for a in store.list_assignments()] == [v1.id]

    def test_all_unknown_volunteers_create_nothing(self, store, make_request):
        aid_request = make_request()

        result = AssignmentManager(store).create_assignments(aid_request.id, ["ghost-1", "ghost-2"])

        assert result.created_count == 0
        assert store.list_assignments() == []

    def test_assigning_twice_is_idempotent(self, store, make_volunteer, make_request):
        aid_request = make_request()
        volunteer = make_volunteer()
        manager = AssignmentManager(store)

        first = manager.create_assignments(aid_request.id, [volunteer.id])
        second = manager.create_assignments(aid_request.id, [volunteer.id])

        assert first.created_count == 1
        assert second.created_count == 0
        assert second.existing_volunteer_ids == [volunteer.id]
        assert len(store.list_assignments()) == 1

    def test_duplicate_ids_in_one_batch(self, store, make_volunteer, make_request):
        aid_request = make_request()
        volunteer = make_volunteer()

        result = AssignmentManager(store).create_assignments(aid_request.id, [volunteer.id, volunteer.id])

        assert result.created_count == 1
        assert len(store.list_assignments()) == 1

    def test_no_headcount_cap(self, store, make_volunteer, make_request):
        aid_request = make_request(volunteers_needed=1)
        ids = [make_volunteer().id for _ in range(3)]

        result = AssignmentManager(store).create_assignments(aid_request.id, ids)

        assert result.created_count == 3

    def test_concurrent_batches_create_one_assignment(self, store, make_volunteer, make_request):
        aid_request = make_request()
        volunteer = make_volunteer()
        manager = AssignmentManager(store)
        barrier = threading.Barrier(8)
        results = []

        def assign():
            barrier.wait()
            results.append(manager.create_assignments(aid_request.id, [volunteer.id]).created_count)

        threads = [threading.Thread(target=assign) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sum(results) == 1
        assert len(store.list_assignments()) == 1


class TestAcceptAssignment:
    """Test the pending -> accepted transition."""

    def _assign(self, store, clock, make_volunteer, make_request):
        aid_request = make_request()
        volunteer = make_volunteer()
        AssignmentManager(store, clock).create_assignments(aid_request.id, [volunteer.id])
        return store.list_assignments()[0]

    def test_accept_stamps_accepted_at(self, store, clock, make_volunteer, make_request):
        assignment = self._assign(store, clock, make_volunteer, make_request)
        accepted_time = clock.advance(minutes=5)

        accepted = AssignmentManager(store, clock).accept_assignment(assignment.id)

        assert accepted.status == AssignmentStatus.ACCEPTED.value
        assert accepted.accepted_at == accepted_time
        assert accepted.assigned_at == assignment.assigned_at

    def test_unknown_assignment(self, store):
        with pytest.raises(NotFoundError):
            AssignmentManager(store).accept_assignment("missing")

    def test_accepting_twice_restamps(self, store, clock, make_volunteer, make_request):
        """Accept has no guard: a repeat accept moves accepted_at forward."""
        assignment = self._assign(store, clock, make_volunteer, make_request)
        manager = AssignmentManager(store, clock)

        clock.advance(minutes=1)
        first = manager.accept_assignment(assignment.id)
        clock.advance(minutes=1)
        second = manager.accept_assignment(assignment.id)

        assert second.status == AssignmentStatus.ACCEPTED.value
        assert second.accepted_at > first.accepted_at

    def test_completed_assignment_can_be_accepted_again(self, store, clock, make_volunteer, make_request):
        """Accept is permitted from completed and resets the status to accepted."""
        assignment = self._assign(store, clock, make_volunteer, make_request)
        store.update_assignment_status(assignment.id, AssignmentStatus.COMPLETED, clock.advance(hours=2))

        accepted = AssignmentManager(store, clock).accept_assignment(assignment.id)

        assert accepted.status == AssignmentStatus.ACCEPTED.value
        assert accepted.completed_at is not None
