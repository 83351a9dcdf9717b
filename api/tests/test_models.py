# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for Pydantic models.
"""

import pytest
from pydantic import ValidationError

from models.entities import Volunteer, AidRequest, Assignment, Availability, NotificationPreferences
from models.enums import (
    VolunteerStatus, RequestUrgency, RequestStatus, AssignmentStatus,
    CONFIRMED_ASSIGNMENT_STATUSES
)
from models.requests import (
    CreateAidRequestRequest, AssignVolunteersRequest, VolunteerRegistrationRequest,
    PaginationParams
)
from models.responses import RequestView, VolunteerCounts


class TestVolunteerModel:
    """Test Volunteer model validation and derived fields."""

    def test_volunteer_defaults(self):
        volunteer = Volunteer(full_name="Asha Rao", email="asha@example.com", phone="555-0100")

        assert volunteer.status == VolunteerStatus.PENDING.value
        assert volunteer.rating == 0
        assert volunteer.tasks_completed == 0
        assert volunteer.hours_served == 0
        assert volunteer.availability.max_distance == 10
        assert len(volunteer.id) == 24

    def test_email_is_normalized(self):
        volunteer = Volunteer(full_name="Asha Rao", email="  Asha@Example.COM ", phone="555-0100")

        assert volunteer.email == "asha@example.com"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            Volunteer(full_name="Asha Rao", email="not-an-email", phone="555-0100")

    def test_blank_skills_are_dropped(self):
        volunteer = Volunteer(
            full_name="Asha Rao", email="asha@example.com", phone="555-0100",
            skills=["  Medical ", "", "   ", "Driving"]
        )

        assert volunteer.skills == ["Medical", "Driving"]

    def test_primary_specialty(self):
        with_skills = Volunteer(
            full_name="Asha Rao", email="asha@example.com", phone="555-0100",
            skills=["Paramedic", "Driving"]
        )
        without_skills = Volunteer(full_name="Ben Ito", email="ben@example.com", phone="555-0101")

        assert with_skills.primary_specialty == "Paramedic"
        assert without_skills.primary_specialty == "Volunteer"

    def test_is_verified(self):
        verified = Volunteer(
            full_name="Asha Rao", email="asha@example.com", phone="555-0100",
            status=VolunteerStatus.VERIFIED
        )
        rejected = Volunteer(
            full_name="Ben Ito", email="ben@example.com", phone="555-0101",
            status=VolunteerStatus.REJECTED
        )

        assert verified.is_verified is True
        assert rejected.is_verified is False


class TestAvailabilityModel:
    """Test availability and notification defaults."""

    def test_notification_defaults(self):
        prefs = NotificationPreferences()

        assert (prefs.sms, prefs.email, prefs.push, prefs.whatsapp) == (True, True, True, False)

    def test_null_notifications_use_defaults(self):
        availability = Availability.model_validate({"selectedDays": ["Monday"], "notifications": None})

        assert availability.notifications == NotificationPreferences()


class TestAidRequestModel:
    """Test AidRequest model."""

    def test_request_defaults(self):
        aid_request = AidRequest(title="Shelter setup", location="Hall 3", skills=["Setup"])

        assert aid_request.urgency == RequestUrgency.MEDIUM.value
        assert aid_request.status == RequestStatus.ACTIVE.value
        assert aid_request.volunteers_needed == 1

    def test_volunteers_needed_must_be_positive(self):
        with pytest.raises(ValidationError):
            AidRequest(title="Shelter setup", location="Hall 3", skills=["Setup"], volunteers_needed=0)


class TestAssignmentModel:
    """Test Assignment model."""

    def test_assignment_defaults(self):
        assignment = Assignment(request_id="r1", volunteer_id="v1")

        assert assignment.status == AssignmentStatus.PENDING.value
        assert assignment.accepted_at is None
        assert assignment.completed_at is None
        assert assignment.pair_key == ("r1", "v1")

    def test_confirmed_statuses(self):
        assert AssignmentStatus.ACCEPTED.value in CONFIRMED_ASSIGNMENT_STATUSES
        assert AssignmentStatus.COMPLETED.value in CONFIRMED_ASSIGNMENT_STATUSES
        assert AssignmentStatus.PENDING.value not in CONFIRMED_ASSIGNMENT_STATUSES


class TestCreateAidRequestRequest:
    """Test aid request creation payload validation."""

    def test_valid_payload_with_defaults(self):
        payload = CreateAidRequestRequest.model_validate({
            "title": " Flood relief ",
            "location": "Riverside",
            "skills": ["Medical", " "]
        })

        assert payload.title == "Flood relief"
        assert payload.skills == ["Medical"]
        assert payload.urgency == RequestUrgency.MEDIUM.value
        assert payload.volunteers_needed == 1

    def test_camel_case_fields(self):
        payload = CreateAidRequestRequest.model_validate({
            "title": "Flood relief",
            "location": "Riverside",
            "skills": ["Medical"],
            "urgency": "high",
            "volunteersNeeded": 4,
            "organizationName": "Red Cross"
        })

        assert payload.urgency == "high"
        assert payload.volunteers_needed == 4
        assert payload.organization_name == "Red Cross"

    def test_null_optionals_use_defaults(self):
        payload = CreateAidRequestRequest.model_validate({
            "title": "Flood relief",
            "location": "Riverside",
            "skills": ["Medical"],
            "urgency": None,
            "volunteersNeeded": None
        })

        assert payload.urgency == RequestUrgency.MEDIUM.value
        assert payload.volunteers_needed == 1

    @pytest.mark.parametrize("missing,message", [
        ("title", "Title is required"),
        ("location", "Location is required"),
        ("skills", "At least one skill is required"),
    ])
    def test_missing_required_field(self, missing, message):
        data = {"title": "Flood relief", "location": "Riverside", "skills": ["Medical"]}
        del data[missing]

        with pytest.raises(ValidationError) as exc_info:
            CreateAidRequestRequest.model_validate(data)

        assert message in str(exc_info.value)

    def test_invalid_urgency(self):
        with pytest.raises(ValidationError):
            CreateAidRequestRequest.model_validate({
                "title": "Flood relief", "location": "Riverside",
                "skills": ["Medical"], "urgency": "critical"
            })


class TestAssignVolunteersRequest:
    """Test assignment payload validation."""

    def test_volunteer_ids_required(self):
        with pytest.raises(ValidationError) as exc_info:
            AssignVolunteersRequest.model_validate({})

        assert "volunteerIds array is required" in str(exc_info.value)

    def test_empty_volunteer_ids_rejected(self):
        with pytest.raises(ValidationError):
            AssignVolunteersRequest.model_validate({"volunteerIds": []})

    def test_volunteer_ids_accepted(self):
        payload = AssignVolunteersRequest.model_validate({"volunteerIds": ["a", "b"]})

        assert payload.volunteer_ids == ["a", "b"]


class TestVolunteerRegistrationRequest:
    """Test volunteer onboarding payload validation."""

    def test_valid_registration(self, registration_payload):
        registration = VolunteerRegistrationRequest.model_validate(registration_payload)

        assert registration.personal_info.email == "ravi.menon@example.com"
        assert registration.skills.selected_skills == ["Medical Doctor", "First Aid"]
        assert registration.availability.max_distance == 25
        assert registration.availability.notifications.whatsapp is True

    def test_missing_notifications_use_defaults(self, registration_payload):
        del registration_payload["availability"]["notifications"]

        registration = VolunteerRegistrationRequest.model_validate(registration_payload)

        assert registration.availability.notifications == NotificationPreferences()

    def test_missing_max_distance_defaults_to_ten(self, registration_payload):
        registration_payload["availability"]["maxDistance"] = None

        registration = VolunteerRegistrationRequest.model_validate(registration_payload)

        assert registration.availability.max_distance == 10

    @pytest.mark.parametrize("section,field,message", [
        ("personalInfo", "fullName", "Full name is required"),
        ("personalInfo", "email", "Email is required"),
        ("personalInfo", "phone", "Phone number is required"),
        ("skills", "selectedSkills", "At least one skill must be selected"),
        ("availability", "selectedDays", "Availability days must be selected"),
    ])
    def test_missing_required_field(self, registration_payload, section, field, message):
        del registration_payload[section][field]

        with pytest.raises(ValidationError) as exc_info:
            VolunteerRegistrationRequest.model_validate(registration_payload)

        assert message in str(exc_info.value)

    def test_invalid_email_format(self, registration_payload):
        registration_payload["personalInfo"]["email"] = "ravi@nowhere"

        with pytest.raises(ValidationError) as exc_info:
            VolunteerRegistrationRequest.model_validate(registration_payload)

        assert "Invalid email format" in str(exc_info.value)


class TestPaginationParams:
    """Test pagination parameter validation."""

    def test_defaults(self):
        params = PaginationParams()

        assert params.page == 1
        assert params.page_size == 20

    def test_page_size_limit(self):
        with pytest.raises(ValidationError):
            PaginationParams(page_size=101)


class TestResponseSerialization:
    """Test camelCase wire format."""

    def test_request_view_uses_camel_case(self):
        aid_request = AidRequest(title="Shelter", location="Hall 3", skills=["Setup"])
        view = RequestView(
            id=aid_request.id,
            title=aid_request.title,
            location=aid_request.location,
            skills=aid_request.skills,
            urgency=aid_request.urgency,
            status=aid_request.status,
            volunteers=VolunteerCounts(needed=2, matched=1, confirmed=0),
            organization_name="Red Cross",
            created_at=aid_request.created_at
        )

        data = view.to_json_dict()

        assert data["organizationName"] == "Red Cross"
        assert data["volunteers"] == {"needed": 2, "matched": 1, "confirmed": 0}
        assert isinstance(data["createdAt"], str)
        assert data["matches"] == []
