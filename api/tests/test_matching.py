# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for skill matching.
"""

import itertools
import pytest

from domain.errors import NotFoundError
from domain.matching import SkillMatcher, skills_overlap, has_skill_overlap
from models.enums import VolunteerStatus


class TestSkillsOverlap:
    """Test the default overlap predicate."""

    @pytest.mark.parametrize("needed,offered", [
        ("Medical", "Medical"),
        ("Medical", "Medical Doctor"),
        ("Doctor", "Medical Doctor"),
        ("medical doctor", "MEDICAL"),
        ("First Aid", "first aid certified"),
    ])
    def test_overlapping_labels(self, needed, offered):
        assert skills_overlap(needed, offered) is True

    @pytest.mark.parametrize("needed,offered", [
        ("Nurse", "Nursing"),
        ("Medical", "Driving"),
        ("Setup", "Cooking"),
    ])
    def test_disjoint_labels(self, needed, offered):
        assert skills_overlap(needed, offered) is False

    @pytest.mark.parametrize("needed,offered", [
        ("", "Medical"),
        ("Medical", ""),
        ("   ", "Medical"),
    ])
    def test_blank_labels_never_match(self, needed, offered):
        assert skills_overlap(needed, offered) is False

    def test_any_pair_is_enough(self):
        assert has_skill_overlap(["Setup", "Medical"], ["Driving", "Medical Doctor"]) is True
        assert has_skill_overlap(["Setup"], ["Driving", "Cooking"]) is False

    def test_empty_sides_never_overlap(self):
        assert has_skill_overlap([], ["Medical"]) is False
        assert has_skill_overlap(["Medical"], []) is False


class TestSkillMatcher:
    """Test candidate selection against the store."""

    def test_scenario_matches(self, store, make_volunteer, make_request):
        """Verified overlap is included; no overlap or unverified is excluded."""
        r1 = make_request(skills=["Medical", "Setup"])
        a = make_volunteer(skills=["Medical", "First Aid"])
        make_volunteer(skills=["Driving"])
        make_volunteer(skills=["Medical"], status=VolunteerStatus.PENDING)

        candidates = SkillMatcher(store).match(r1.id)

        assert [c.volunteer.id for c in candidates] == [a.id]
        assert candidates[0].specialty == "Medical"

    def test_unknown_request(self, store):
        with pytest.raises(NotFoundError):
            SkillMatcher(store).match("missing")

    def test_request_without_skills_matches_nobody(self, store, make_volunteer, make_request):
        make_volunteer(skills=["Medical"])
        aid_request = make_request(skills=[])

        assert SkillMatcher(store).match(aid_request.id) == []

    def test_volunteer_without_skills_never_matches(self, store, make_volunteer, make_request):
        make_volunteer(skills=[])
        aid_request = make_request(skills=["Medical"])

        assert SkillMatcher(store).match(aid_request.id) == []

    def test_rejected_volunteers_excluded(self, store, make_volunteer, make_request):
        make_volunteer(skills=["Medical"], status=VolunteerStatus.REJECTED)
        aid_request = make_request(skills=["Medical"])

        assert SkillMatcher(store).match(aid_request.id) == []

    def test_results_keep_store_order(self, store, make_volunteer, make_request):
        first = make_volunteer(skills=["Medical"], rating=1.0)
        second = make_volunteer(skills=["Medical Doctor"], rating=5.0)
        third = make_volunteer(skills=["Doctor"], rating=3.0)
        aid_request = make_request(skills=["Medical Doctor"])

        candidates = SkillMatcher(store).match(aid_request.id)

        assert [c.volunteer.id for c in candidates] == [first.id, second.id, third.id]

    def test_custom_predicate(self, store, make_volunteer, make_request):
        exact = make_volunteer(skills=["Medical"])
        make_volunteer(skills=["Medical Doctor"])
        aid_request = make_request(skills=["medical"])

        matcher = SkillMatcher(store, predicate=lambda a, b: a.lower() == b.lower())

        assert [c.volunteer.id for c in matcher.match(aid_request.id)] == [exact.id]

    def test_inclusion_iff_some_pair_overlaps(self, store, make_volunteer, make_request):
        labels = ["Medical", "Medical Doctor", "Doctor", "Driving", "Nursing", "Nurse"]
        volunteers = [
            make_volunteer(skills=list(combo))
            for combo in itertools.combinations(labels, 2)
        ]

        for request_skills in itertools.combinations(labels, 2):
            aid_request = make_request(skills=list(request_skills))
            matched = {c.volunteer.id for c in SkillMatcher(store).match(aid_request.id)}

            for volunteer in volunteers:
                expected = any(
                    a.lower() in b.lower() or b.lower() in a.lower()
                    for a in request_skills
                    for b in volunteer.skills
                )
                assert (volunteer.id in matched) == expected
