# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Volunteer endpoints: onboarding, directory and dashboard data.
"""

from flask import current_app, jsonify
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace

from domain import volunteers
from models.requests import VolunteerRegistrationRequest, PaginationParams, VolunteerPath
from models.responses import VolunteerRegistrationResponse

tracer = trace.get_tracer(__name__)

volunteers_tag = Tag(name="Volunteers", description="Volunteer onboarding and dashboard")
volunteers_bp = APIBlueprint(
    'volunteers',
    __name__,
    url_prefix='/api',
    abp_tags=[volunteers_tag]
)


@volunteers_bp.post('/volunteers/register')
def register_volunteer():
    """
    Register a volunteer.

    The volunteer starts out pending and only becomes matchable once
    verified. Registering an email that is already in use returns 409.
    """
    with tracer.start_as_current_span("volunteers.register") as span:
        registration = current_app.validation_middleware.parse_json_body(VolunteerRegistrationRequest)

        volunteer = volunteers.register_volunteer(current_app.entity_store, registration)
        span.set_attribute("volunteer.id", volunteer.id)

        response = VolunteerRegistrationResponse(
            id=volunteer.id,
            full_name=volunteer.full_name,
            email=volunteer.email,
            status=volunteer.status,
            created_at=volunteer.created_at
        )
        response_data = current_app.hal_formatter.format_volunteer(response.to_json_dict())
        return jsonify(response_data), 201, {"Location": response_data['_links']['self']['href']}


@volunteers_bp.get('/volunteers')
def list_volunteers():
    """List registered volunteers, newest first."""
    with tracer.start_as_current_span("volunteers.list") as span:
        params = current_app.validation_middleware.parse_query_params(PaginationParams)

        views = volunteers.list_volunteers(current_app.entity_store)
        span.set_attribute("volunteers.total", len(views))

        start = (params.page - 1) * params.page_size
        items = [
            current_app.hal_formatter.format_volunteer(view.to_json_dict())
            for view in views[start:start + params.page_size]
        ]
        response_data = current_app.hal_formatter.builder.build_collection_response(
            items,
            len(views),
            params.page,
            params.page_size,
            "/api/volunteers"
        )
        return jsonify(response_data), 200


@volunteers_bp.get('/volunteers/<volunteer_id>')
def get_volunteer(path: VolunteerPath):
    """Get a volunteer's directory entry."""
    with tracer.start_as_current_span(
        "volunteers.get",
        attributes={"volunteer.id": path.volunteer_id}
    ):
        volunteer = volunteers.get_volunteer(current_app.entity_store, path.volunteer_id)
        view = volunteers.to_volunteer_view(volunteer)
        return jsonify(current_app.hal_formatter.format_volunteer(view.to_json_dict())), 200


@volunteers_bp.get('/volunteers/<volunteer_id>/stats')
def get_volunteer_stats(path: VolunteerPath):
    """Get a volunteer's completed tasks, hours served and rating."""
    with tracer.start_as_current_span(
        "volunteers.stats",
        attributes={"volunteer.id": path.volunteer_id}
    ):
        stats = volunteers.get_volunteer_stats(current_app.entity_store, path.volunteer_id)
        return jsonify(stats.to_json_dict()), 200


@volunteers_bp.get('/volunteers/<volunteer_id>/tasks')
def get_volunteer_tasks(path: VolunteerPath):
    """
    List a volunteer's tasks with the request each one belongs to.

    Most recently assigned first. Pending tasks carry an accept link.
    """
    with tracer.start_as_current_span(
        "volunteers.tasks",
        attributes={"volunteer.id": path.volunteer_id}
    ) as span:
        tasks = volunteers.get_volunteer_tasks(current_app.entity_store, path.volunteer_id)
        span.set_attribute("tasks.count", len(tasks))

        items = [current_app.hal_formatter.format_task(task.to_json_dict()) for task in tasks]
        response_data = current_app.hal_formatter.format_collection(
            items, f"/api/volunteers/{path.volunteer_id}/tasks"
        )
        return jsonify(response_data), 200
