# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Error handling middleware with structured HAL responses.

Domain errors are surfaced with their own status and message, store
failures become a generic 503 and anything else a generic 500. Internal
detail of the last two is logged, never returned to the caller.
"""

from flask import Flask, request
from werkzeug.exceptions import HTTPException
from typing import Dict, Any, Tuple
from opentelemetry import trace
import logging

from domain.errors import DomainError, InvalidInputError, NotFoundError, ConflictError
from services.hal import HalFormatter
from services.store import StoreError

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_DETAIL = "The data store is temporarily unavailable"
UNEXPECTED_ERROR_DETAIL = "An unexpected error occurred"

HTTP_ERROR_TYPES = {
    400: ("bad-request", "Bad Request"),
    404: ("resource-not-found", "Resource Not Found"),
    405: ("method-not-allowed", "Method Not Allowed"),
    409: ("resource-conflict", "Resource Conflict"),
    415: ("unsupported-media-type", "Unsupported Media Type"),
    422: ("validation-error", "Validation Error"),
    503: ("service-unavailable", "Service Unavailable"),
}


class ErrorHandlerMiddleware:
    """Centralized error handling middleware with HAL response formatting."""

    def __init__(self, app: Flask, hal_formatter: HalFormatter):
        self.app = app
        self.hal_formatter = hal_formatter
        self.register_error_handlers()

    def register_error_handlers(self):
        """Register error handlers with Flask application."""

        @self.app.errorhandler(DomainError)
        def handle_domain_error(error):
            return self.handle_domain_error(error)

        @self.app.errorhandler(StoreError)
        def handle_store_error(error):
            return self.handle_store_error(error)

        @self.app.errorhandler(HTTPException)
        def handle_http_exception(error):
            error_type, title = HTTP_ERROR_TYPES.get(
                error.code, ("http-error", error.name)
            )
            if error.code is not None and error.code >= 500:
                return self.handle_server_error(error, error_type, title)
            return self.handle_client_error(error, error_type, title)

        # Handle generic exceptions
        @self.app.errorhandler(Exception)
        def handle_generic_exception(error):
            return self.handle_unexpected_error(error)

    def handle_domain_error(self, error: DomainError) -> Tuple[Dict[str, Any], int]:
        """
        Handle errors raised by the domain layer.

        Args:
            error: Domain error carrying its own status and problem type

        Returns:
            Tuple of (error response dict, status code)
        """
        with tracer.start_as_current_span("error_handler.domain_error") as span:
            span.set_attributes({
                "error.type": error.error_type,
                "error.status": error.status_code,
                "http.method": request.method,
                "http.path": request.path
            })

            logger.warning(
                f"Domain error: {error.error_type}",
                extra={
                    "error_type": error.error_type,
                    "status_code": error.status_code,
                    "detail": error.message,
                    "path": request.path,
                    "method": request.method
                }
            )

            if isinstance(error, InvalidInputError):
                error_response = self.hal_formatter.format_validation_error(
                    error.message,
                    request.path,
                    error.validation_errors
                )
            elif isinstance(error, NotFoundError):
                error_response = self.hal_formatter.format_not_found_error(error.message, request.path)
            elif isinstance(error, ConflictError):
                error_response = self.hal_formatter.format_conflict_error(error.message, request.path)
            else:
                error_response = self.hal_formatter.format_error(
                    error.error_type,
                    "Application Error",
                    error.status_code,
                    error.message,
                    request.path
                )

            return error_response, error.status_code

    def handle_store_error(self, error: StoreError) -> Tuple[Dict[str, Any], int]:
        """Handle backing store failures as a generic 503."""
        with tracer.start_as_current_span("error_handler.store_error") as span:
            span.set_attributes({
                "error.type": "service-unavailable",
                "http.method": request.method,
                "http.path": request.path
            })
            span.record_exception(error)

            logger.error(
                "Store failure while handling request",
                extra={
                    "error_type": "service-unavailable",
                    "error_message": str(error),
                    "path": request.path,
                    "method": request.method
                },
                exc_info=error
            )

            error_response = self.hal_formatter.format_service_unavailable_error(
                STORE_UNAVAILABLE_DETAIL, request.path
            )
            return error_response, 503

    def handle_client_error(
        self,
        error: HTTPException,
        error_type: str,
        title: str
    ) -> Tuple[Dict[str, Any], int]:
        """
        Handle client errors (4xx status codes) raised by Flask itself.

        Args:
            error: HTTP exception
            error_type: Error type identifier
            title: Error title

        Returns:
            Tuple of (error response dict, status code)
        """
        with tracer.start_as_current_span("error_handler.client_error") as span:
            span.set_attributes({
                "error.type": error_type,
                "error.status": error.code,
                "http.method": request.method,
                "http.path": request.path
            })

            detail = str(error.description) if error.description else title

            logger.warning(
                f"Client error: {title}",
                extra={
                    "error_type": error_type,
                    "status_code": error.code,
                    "detail": detail,
                    "path": request.path,
                    "method": request.method,
                    "user_agent": request.headers.get('User-Agent'),
                    "ip_address": request.remote_addr
                }
            )

            error_response = self.hal_formatter.format_error(
                error_type,
                title,
                error.code,
                detail,
                request.path
            )
            return error_response, error.code

    def handle_server_error(
        self,
        error: HTTPException,
        error_type: str,
        title: str
    ) -> Tuple[Dict[str, Any], int]:
        """Handle 5xx HTTP exceptions with a generic detail."""
        with tracer.start_as_current_span("error_handler.server_error") as span:
            span.set_attributes({
                "error.type": error_type,
                "error.status": error.code,
                "http.method": request.method,
                "http.path": request.path
            })

            logger.error(
                f"Server error: {title}",
                extra={
                    "error_type": error_type,
                    "status_code": error.code,
                    "detail": error.description,
                    "path": request.path,
                    "method": request.method
                }
            )

            error_response = self.hal_formatter.format_error(
                error_type, title, error.code, UNEXPECTED_ERROR_DETAIL, request.path
            )
            return error_response, error.code

    def handle_unexpected_error(self, error: Exception) -> Tuple[Dict[str, Any], int]:
        """
        Handle unexpected exceptions not caught by specific handlers.

        Args:
            error: Unexpected exception

        Returns:
            Tuple of (error response dict, status code)
        """
        with tracer.start_as_current_span("error_handler.unexpected_error") as span:
            span.set_attributes({
                "error.type": "unexpected-error",
                "error.class": error.__class__.__name__,
                "http.method": request.method,
                "http.path": request.path
            })

            # Record exception in span
            span.record_exception(error)

            logger.error(
                f"Unexpected error: {error.__class__.__name__}",
                extra={
                    "error_type": "unexpected-error",
                    "error_class": error.__class__.__name__,
                    "error_message": str(error),
                    "path": request.path,
                    "method": request.method,
                    "user_agent": request.headers.get('User-Agent'),
                    "ip_address": request.remote_addr
                },
                exc_info=error
            )

            error_response = self.hal_formatter.format_server_error(
                UNEXPECTED_ERROR_DETAIL, request.path
            )
            return error_response, 500


def register_error_handlers(app: Flask, hal_formatter: HalFormatter) -> ErrorHandlerMiddleware:
    """
    Register the application error handlers.

    Args:
        app: Flask application
        hal_formatter: HAL formatter instance

    Returns:
        Configured ErrorHandlerMiddleware instance
    """
    return ErrorHandlerMiddleware(app, hal_formatter)
