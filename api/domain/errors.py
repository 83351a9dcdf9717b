# SPDX-License-Identifier: Apache-2.0

"""
Domain error taxonomy.

Every error carries the HTTP status and problem type the transport layer
uses when surfacing it, so domain code never imports Flask.
"""

from typing import List, Dict, Any, Optional


class DomainError(Exception):
    """Base class for errors surfaced directly to API callers."""

    status_code = 500
    error_type = "application-error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(DomainError):
    """Missing or malformed required fields."""

    status_code = 400
    error_type = "validation-error"

    def __init__(self, message: str, validation_errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.validation_errors = validation_errors or []


class NotFoundError(DomainError):
    """Referenced entity id does not exist."""

    status_code = 404
    error_type = "resource-not-found"


class ConflictError(DomainError):
    """Duplicate unique key, e.g. registering the same email twice."""

    status_code = 409
    error_type = "resource-conflict"
