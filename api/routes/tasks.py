# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Volunteer task endpoints.
"""

from flask import current_app, jsonify
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace

from models.requests import TaskPath
from models.responses import AssignmentAcceptedResponse

tracer = trace.get_tracer(__name__)

tasks_tag = Tag(name="Tasks", description="Volunteer task responses")
tasks_bp = APIBlueprint(
    'tasks',
    __name__,
    url_prefix='/api',
    abp_tags=[tasks_tag]
)


@tasks_bp.put('/tasks/<task_id>/accept')
def accept_task(path: TaskPath):
    """
    Accept a task.

    Accepting is allowed from any status and re-stamps acceptedAt.
    """
    with tracer.start_as_current_span(
        "tasks.accept",
        attributes={"task.id": path.task_id}
    ):
        assignment = current_app.assignment_manager.accept_assignment(path.task_id)

        response = AssignmentAcceptedResponse(
            id=assignment.id,
            status=assignment.status,
            accepted_at=assignment.accepted_at
        )
        return jsonify(response.to_json_dict()), 200
