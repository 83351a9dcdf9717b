# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Aid request endpoints: posting, listing, skill matches and assignment.
"""

from flask import current_app, jsonify
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
import logging

from domain.requests import create_request
from models.requests import (
    CreateAidRequestRequest,
    AssignVolunteersRequest,
    PaginationParams,
    RequestPath
)
from models.responses import MatchCandidateView, AssignmentBatchResponse

# Set up logging and tracing
logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

requests_tag = Tag(name="Requests", description="Emergency-aid requests, matching and assignment")
requests_bp = APIBlueprint(
    'requests',
    __name__,
    url_prefix='/api',
    abp_tags=[requests_tag]
)


@requests_bp.get('/requests')
def list_requests():
    """
    List aid requests, newest first.

    Each request carries its needed/matched/confirmed volunteer counts and
    the volunteers currently assigned to it.
    """
    with tracer.start_as_current_span("requests.list") as span:
        params = current_app.validation_middleware.parse_query_params(PaginationParams)
        span.set_attributes({
            "pagination.page": params.page,
            "pagination.page_size": params.page_size
        })

        views, total = current_app.request_aggregator.list_requests_page(params.page, params.page_size)

        response_data = current_app.hal_formatter.format_request_collection(
            [view.to_json_dict() for view in views],
            total,
            params.page,
            params.page_size
        )
        return jsonify(response_data), 200


@requests_bp.post('/requests')
def post_request():
    """
    Post a new emergency-aid request.

    Title, location and at least one skill are required. Urgency defaults
    to medium and the volunteer headcount to one.
    """
    with tracer.start_as_current_span("requests.create") as span:
        payload = current_app.validation_middleware.parse_json_body(CreateAidRequestRequest)

        aid_request = create_request(current_app.entity_store, payload)
        span.set_attribute("request.id", aid_request.id)

        view = current_app.request_aggregator.present(aid_request)
        response_data = current_app.hal_formatter.format_request(view.to_json_dict())
        return jsonify(response_data), 201, {"Location": response_data['_links']['self']['href']}


@requests_bp.get('/requests/<request_id>')
def get_request(path: RequestPath):
    """Get an aid request with its live assignment counts."""
    with tracer.start_as_current_span(
        "requests.get",
        attributes={"request.id": path.request_id}
    ):
        view = current_app.request_aggregator.present_by_id(path.request_id)
        return jsonify(current_app.hal_formatter.format_request(view.to_json_dict())), 200


@requests_bp.get('/requests/<request_id>/matches')
def get_matches(path: RequestPath):
    """
    List verified volunteers whose skills overlap the request's skills.

    Volunteers are not ranked; they are returned in directory order.
    """
    with tracer.start_as_current_span(
        "requests.matches",
        attributes={"request.id": path.request_id}
    ) as span:
        candidates = current_app.skill_matcher.match(path.request_id)
        span.set_attribute("matches.count", len(candidates))

        items = []
        for candidate in candidates:
            volunteer = candidate.volunteer
            view = MatchCandidateView(
                id=volunteer.id,
                name=volunteer.full_name,
                verified=volunteer.is_verified,
                rating=volunteer.rating,
                specialty=candidate.specialty,
                skills=volunteer.skills,
                tasks_completed=volunteer.tasks_completed
            )
            items.append(current_app.hal_formatter.format_volunteer(view.to_json_dict()))

        response_data = current_app.hal_formatter.format_collection(
            items, f"/api/requests/{path.request_id}/matches"
        )
        return jsonify(response_data), 200


@requests_bp.post('/requests/<request_id>/assign')
def assign_volunteers(path: RequestPath):
    """
    Assign volunteers to an aid request.

    Unknown volunteer IDs and volunteers already assigned are skipped, so
    assignmentsCreated may be lower than the number of IDs sent.
    """
    with tracer.start_as_current_span(
        "requests.assign",
        attributes={"request.id": path.request_id}
    ) as span:
        payload = current_app.validation_middleware.parse_json_body(AssignVolunteersRequest)

        result = current_app.assignment_manager.create_assignments(path.request_id, payload.volunteer_ids)
        span.set_attributes({
            "assignments.requested": len(payload.volunteer_ids),
            "assignments.created": result.created_count
        })

        if result.created_count < len(payload.volunteer_ids):
            logger.info(
                f"Partial assignment batch for request {path.request_id}",
                extra={
                    "request_id": path.request_id,
                    "skipped_volunteer_ids": result.skipped_volunteer_ids,
                    "existing_volunteer_ids": result.existing_volunteer_ids
                }
            )

        response = AssignmentBatchResponse(
            request_id=result.request_id,
            assignments_created=result.created_count
        )
        return jsonify(response.to_json_dict()), 201
