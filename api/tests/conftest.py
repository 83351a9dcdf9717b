# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Pytest configuration and fixtures.
"""

import os
import uuid
import pytest
from datetime import datetime, timedelta, timezone

# Set test environment
os.environ['ENVIRONMENT'] = 'test'
os.environ['OTEL_ENABLED'] = 'false'
os.environ['STORE_BACKEND'] = 'memory'
os.environ['BASE_URL'] = 'http://localhost:5000'
os.environ['MONGODB_DATABASE'] = 'respond_test'

from models.entities import Volunteer, AidRequest
from models.enums import VolunteerStatus
from services.memory_store import InMemoryEntityStore

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock returning a controllable time, advanced by hand."""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def store():
    """Empty in-memory entity store."""
    return InMemoryEntityStore()


@pytest.fixture
def clock():
    """Controllable clock starting at BASE_TIME."""
    return FixedClock()


@pytest.fixture
def make_volunteer(store):
    """Factory inserting a volunteer into the store."""
    def _make(
        skills=None,
        status=VolunteerStatus.VERIFIED,
        full_name="Asha Rao",
        email=None,
        insert=True,
        **kwargs
    ) -> Volunteer:
        volunteer = Volunteer(
            full_name=full_name,
            email=email or f"{uuid.uuid4().hex[:10]}@example.com",
            phone="555-0100",
            skills=skills if skills is not None else ["Medical"],
            status=status,
            **kwargs
        )
        if insert:
            assert store.insert_volunteer(volunteer)
        return volunteer
    return _make


@pytest.fixture
def make_request(store):
    """Factory inserting an aid request into the store."""
    def _make(skills=None, title="Flood relief camp", insert=True, **kwargs) -> AidRequest:
        aid_request = AidRequest(
            title=title,
            location="Riverside Shelter",
            skills=skills if skills is not None else ["Medical", "Setup"],
            **kwargs
        )
        if insert:
            store.insert_request(aid_request)
        return aid_request
    return _make


@pytest.fixture
def app(store):
    """Application wired to the in-memory test store."""
    from app import create_app

    application = create_app(store=store)
    application.config['TESTING'] = True
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def registration_payload():
    """Valid volunteer onboarding submission."""
    return {
        "personalInfo": {
            "fullName": "Ravi Menon",
            "email": "Ravi.Menon@Example.com",
            "phone": "+91 98765 43210",
            "city": "Kochi",
            "state": "Kerala"
        },
        "skills": {
            "selectedSkills": ["Medical Doctor", "First Aid"],
            "experience": {"Medical Doctor": 6},
            "licenseNumber": "KMC-4411"
        },
        "availability": {
            "maxDistance": 25,
            "selectedDays": ["Saturday", "Sunday"],
            "selectedEmergencies": ["Flood"],
            "notifications": {"sms": True, "email": False, "push": True, "whatsapp": True}
        },
        "verification": {"idDocument": "aadhaar.pdf"}
    }
