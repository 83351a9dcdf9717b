# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
HAL (Hypertext Application Language) response formatting utilities.
Implements HATEOAS responses with state-dependent affordance links.
"""

from typing import Dict, List, Any, Optional
from urllib.parse import urlencode
import math

from models.enums import AssignmentStatus
from models.responses import HalLink

PROBLEM_TYPE_BASE = "https://api.respond.org/problems/"


class HalLinkBuilder:
    """Builder for HAL links with proper URL construction."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')

    def build_link(
        self,
        path: str,
        method: str = "GET",
        content_type: Optional[str] = None,
        title: Optional[str] = None,
        templated: bool = False
    ) -> HalLink:
        """Build a HAL link with proper URL construction."""
        href = f"{self.base_url}/{path.lstrip('/')}"

        return HalLink(
            href=href,
            method=method,
            type=content_type,
            title=title,
            templated=templated
        )

    def build_self_link(self, resource_path: str) -> HalLink:
        """Build self link for a resource."""
        return self.build_link(resource_path, title="Self")

    def build_collection_link(self, collection_path: str) -> HalLink:
        """Build link to parent collection."""
        return self.build_link(collection_path, title="Collection")

    def build_action_link(
        self,
        resource_path: str,
        action: str,
        method: str = "POST",
        title: Optional[str] = None
    ) -> HalLink:
        """Build action link for a resource."""
        action_path = f"{resource_path}/{action}"
        return self.build_link(
            action_path,
            method=method,
            content_type="application/json",
            title=title or action.title()
        )


class PaginationLinkBuilder:
    """Builder for pagination links in HAL collections."""

    def __init__(self, base_url: str):
        self.link_builder = HalLinkBuilder(base_url)

    def _page_link(self, base_path: str, params: Dict[str, Any], page: int, page_size: int, title: str) -> HalLink:
        query = urlencode({**params, 'page': page, 'page_size': page_size})
        return self.link_builder.build_link(f"{base_path}?{query}", title=title)

    def build_pagination_links(
        self,
        base_path: str,
        current_page: int,
        total_pages: int,
        page_size: int,
        query_params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, HalLink]:
        """Build pagination links for a collection."""
        params = query_params or {}
        links = {
            'self': self._page_link(base_path, params, current_page, page_size, "Current page")
        }

        if current_page > 1:
            links['first'] = self._page_link(base_path, params, 1, page_size, "First page")
            links['prev'] = self._page_link(base_path, params, current_page - 1, page_size, "Previous page")

        if current_page < total_pages:
            links['next'] = self._page_link(base_path, params, current_page + 1, page_size, "Next page")
            links['last'] = self._page_link(base_path, params, total_pages, page_size, "Last page")

        return links


class AffordanceLinkBuilder:
    """Builder for affordance links that depend on resource state."""

    def __init__(self, base_url: str):
        self.link_builder = HalLinkBuilder(base_url)

    def build_request_affordances(self, request_id: str) -> Dict[str, HalLink]:
        """Build links for an aid request."""
        base_path = f"/api/requests/{request_id}"
        return {
            'self': self.link_builder.build_self_link(base_path),
            'collection': self.link_builder.build_collection_link("/api/requests"),
            'matches': self.link_builder.build_link(
                f"{base_path}/matches",
                title="Skill-matched volunteers"
            ),
            'assign': self.link_builder.build_action_link(
                base_path, "assign", title="Assign volunteers"
            )
        }

    def build_volunteer_affordances(self, volunteer_id: str) -> Dict[str, HalLink]:
        """Build links for a volunteer."""
        base_path = f"/api/volunteers/{volunteer_id}"
        return {
            'self': self.link_builder.build_self_link(base_path),
            'collection': self.link_builder.build_collection_link("/api/volunteers"),
            'stats': self.link_builder.build_link(f"{base_path}/stats", title="Volunteer stats"),
            'tasks': self.link_builder.build_link(f"{base_path}/tasks", title="Volunteer tasks")
        }

    def build_task_affordances(
        self,
        task_id: str,
        task_status: str,
        volunteer_id: Optional[str] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, HalLink]:
        """Build links for a volunteer task (assignment)."""
        links = {}

        if volunteer_id:
            links['collection'] = self.link_builder.build_collection_link(
                f"/api/volunteers/{volunteer_id}/tasks"
            )
        if request_id:
            links['request'] = self.link_builder.build_link(
                f"/api/requests/{request_id}",
                title="Aid request"
            )

        # Accept link only while the task awaits a response
        if task_status == AssignmentStatus.PENDING.value:
            links['accept'] = self.link_builder.build_action_link(
                f"/api/tasks/{task_id}", "accept", method="PUT", title="Accept task"
            )

        return links


class HalResponseBuilder:
    """Main HAL response builder with comprehensive formatting capabilities."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')
        self.link_builder = HalLinkBuilder(base_url)
        self.pagination_builder = PaginationLinkBuilder(base_url)
        self.affordance_builder = AffordanceLinkBuilder(base_url)

    def build_resource_response(
        self,
        data: Dict[str, Any],
        resource_type: str,
        resource_id: str
    ) -> Dict[str, Any]:
        """Build a HAL resource response with appropriate affordance links."""
        response = dict(data)

        if resource_type == "request":
            links = self.affordance_builder.build_request_affordances(resource_id)
        elif resource_type == "volunteer":
            links = self.affordance_builder.build_volunteer_affordances(resource_id)
        elif resource_type == "task":
            links = self.affordance_builder.build_task_affordances(
                resource_id,
                data.get('status', ''),
                volunteer_id=data.get('volunteerId'),
                request_id=(data.get('request') or {}).get('id')
            )
        else:
            # Generic resource links
            links = {
                'self': self.link_builder.build_self_link(f"/api/{resource_type}s/{resource_id}")
            }

        response['_links'] = {
            rel: link.model_dump(exclude_none=True) for rel, link in links.items()
        }
        return response

    def build_collection_response(
        self,
        items: List[Dict[str, Any]],
        total: int,
        page: int,
        page_size: int,
        collection_path: str,
        query_params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Build a HAL collection response with pagination links."""
        total_pages = max(1, math.ceil(total / page_size)) if page_size > 0 else 1

        pagination_links = self.pagination_builder.build_pagination_links(
            collection_path,
            page,
            total_pages,
            page_size,
            query_params
        )

        return {
            'total': total,
            'count': len(items),
            'page': page,
            'page_size': page_size,
            'total_pages': total_pages,
            '_links': {
                rel: link.model_dump(exclude_none=True) for rel, link in pagination_links.items()
            },
            '_embedded': {
                'items': items
            }
        }

    def build_error_response(
        self,
        error_type: str,
        title: str,
        status: int,
        detail: str,
        instance: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """Build RFC 7807 compliant error response with HAL links."""
        error_response = {
            'type': f"{PROBLEM_TYPE_BASE}{error_type}",
            'title': title,
            'status': status,
            'detail': detail,
            'instance': instance
        }

        if validation_errors:
            error_response['errors'] = validation_errors

        links = {
            'help': self.link_builder.build_link(
                f"/docs/errors#{error_type}",
                title="Error documentation"
            )
        }

        if error_type == "validation-error":
            links['schema'] = self.link_builder.build_link(
                "/openapi/openapi.json",
                title="API schema"
            )

        error_response['_links'] = {
            rel: link.model_dump(exclude_none=True) for rel, link in links.items()
        }
        return error_response


class HalFormatter:
    """High-level HAL formatter with convenience methods."""

    def __init__(self, base_url: str):
        self.builder = HalResponseBuilder(base_url)

    def format_request(self, request_view: Dict[str, Any]) -> Dict[str, Any]:
        """Format an aid request view with HAL links."""
        return self.builder.build_resource_response(request_view, "request", request_view['id'])

    def format_request_collection(
        self,
        request_views: List[Dict[str, Any]],
        total: int,
        page: int,
        page_size: int
    ) -> Dict[str, Any]:
        """Format a page of aid requests with HAL links."""
        return self.builder.build_collection_response(
            [self.format_request(view) for view in request_views],
            total,
            page,
            page_size,
            "/api/requests"
        )

    def format_volunteer(self, volunteer: Dict[str, Any]) -> Dict[str, Any]:
        """Format a volunteer with HAL links."""
        return self.builder.build_resource_response(volunteer, "volunteer", volunteer['id'])

    def format_task(self, task: Dict[str, Any]) -> Dict[str, Any]:
        """Format a volunteer task with HAL links."""
        return self.builder.build_resource_response(task, "task", task['id'])

    def format_collection(
        self,
        items: List[Dict[str, Any]],
        collection_path: str,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> Dict[str, Any]:
        """Format an already-sliced or unpaginated list as a HAL collection."""
        return self.builder.build_collection_response(
            items,
            len(items),
            page,
            page_size or max(len(items), 1),
            collection_path
        )

    def format_error(
        self,
        error_type: str,
        title: str,
        status: int,
        detail: str,
        instance: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """Format a generic problem response."""
        return self.builder.build_error_response(
            error_type, title, status, detail, instance, validation_errors
        )

    def format_validation_error(
        self,
        detail: str,
        instance: str,
        validation_errors: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Format a validation error response."""
        return self.format_error(
            "validation-error", "Validation Error", 400, detail, instance, validation_errors
        )

    def format_not_found_error(self, detail: str, instance: str) -> Dict[str, Any]:
        """Format a not found error response."""
        return self.format_error("resource-not-found", "Resource Not Found", 404, detail, instance)

    def format_conflict_error(self, detail: str, instance: str) -> Dict[str, Any]:
        """Format a conflict error response."""
        return self.format_error("resource-conflict", "Resource Conflict", 409, detail, instance)

    def format_service_unavailable_error(self, detail: str, instance: str) -> Dict[str, Any]:
        """Format a service unavailable response."""
        return self.format_error("service-unavailable", "Service Unavailable", 503, detail, instance)

    def format_server_error(self, detail: str, instance: str) -> Dict[str, Any]:
        """Format a server error response."""
        return self.format_error("internal-server-error", "Internal Server Error", 500, detail, instance)


# Convenience function for creating HAL formatter
def create_hal_formatter(base_url: str) -> HalFormatter:
    """Create a HAL formatter instance."""
    return HalFormatter(base_url)
