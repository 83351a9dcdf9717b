# SPDX-License-Identifier: Apache-2.0

"""
Skill matching between aid requests and verified volunteers.

Matching is a boolean eligibility check with no ranking: a verified
volunteer is a candidate for a request when any of their skills overlaps
any skill the request needs. The overlap test is a pluggable predicate;
the default is case-insensitive substring containment in either
direction, so "Medical" matches "Medical Doctor" and "Doctor" matches
"Medical Doctor", while "Nurse" does not match "Nursing".
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List

from domain.errors import NotFoundError
from models.entities import AidRequest, Volunteer
from services.store import EntityStore

logger = logging.getLogger(__name__)

SkillPredicate = Callable[[str, str], bool]


def skills_overlap(request_skill: str, volunteer_skill: str) -> bool:
    """
    Case-insensitive substring containment in either direction.

    Blank labels never overlap anything; an empty string is not treated
    as contained in every skill.
    """
    needed = request_skill.strip().lower()
    offered = volunteer_skill.strip().lower()
    if not needed or not offered:
        return False
    return needed in offered or offered in needed


def has_skill_overlap(
    request_skills: Iterable[str],
    volunteer_skills: Iterable[str],
    predicate: SkillPredicate = skills_overlap
) -> bool:
    """True if any (request skill, volunteer skill) pair satisfies the predicate."""
    volunteer_skills = list(volunteer_skills)
    return any(
        predicate(needed, offered)
        for needed in request_skills
        for offered in volunteer_skills
    )


@dataclass
class MatchCandidate:
    """A volunteer deemed skill-eligible for a request."""
    volunteer: Volunteer
    specialty: str


class SkillMatcher:
    """Computes the verified volunteers eligible for an aid request."""

    def __init__(self, store: EntityStore, predicate: SkillPredicate = skills_overlap):
        self.store = store
        self.predicate = predicate

    def match(self, request_id: str) -> List[MatchCandidate]:
        """
        Find the candidate volunteers for a request.

        Args:
            request_id: Aid request ID

        Returns:
            Candidates in the store's natural volunteer order

        Raises:
            NotFoundError: if the request does not exist
        """
        aid_request = self.store.get_request(request_id)
        if aid_request is None:
            raise NotFoundError(f"Request {request_id} not found")

        candidates = self.match_request(aid_request)

        logger.debug(
            "Computed skill matches",
            extra={
                "request_id": request_id,
                "request_skills": aid_request.skills,
                "candidates": len(candidates)
            }
        )
        return candidates

    def match_request(self, aid_request: AidRequest) -> List[MatchCandidate]:
        """Match an already-loaded request against the verified volunteer pool."""
        if not aid_request.skills:
            return []

        return [
            MatchCandidate(volunteer=volunteer, specialty=volunteer.primary_specialty)
            for volunteer in self.store.list_verified_volunteers()
            if has_skill_overlap(aid_request.skills, volunteer.skills, self.predicate)
        ]
