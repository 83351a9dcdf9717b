# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
CORS (Cross-Origin Resource Sharing) middleware for frontend integration.
Allows the volunteer dashboard frontend (Vite dev server or deployed site)
to call the API from the browser.
"""

from flask import Flask, request, make_response
from typing import List, Optional
import os
import logging

logger = logging.getLogger(__name__)

DEV_ORIGINS = [
    'http://localhost:3000',
    'http://localhost:5173',  # Vite default
    'http://127.0.0.1:3000',
    'http://127.0.0.1:5173'
]


class CORSMiddleware:
    """CORS middleware for Flask applications."""

    def __init__(
        self,
        app: Flask,
        allowed_origins: Optional[List[str]] = None,
        allow_all_origins: bool = False,
        allowed_methods: Optional[List[str]] = None,
        allowed_headers: Optional[List[str]] = None,
        expose_headers: Optional[List[str]] = None,
        max_age: int = 86400  # 24 hours
    ):
        """
        Initialize CORS middleware.

        Args:
            app: Flask application
            allowed_origins: List of allowed origins, defaults to the environment
            allow_all_origins: Echo back any origin
            allowed_methods: List of allowed HTTP methods
            allowed_headers: List of allowed headers
            expose_headers: List of headers to expose to client
            max_age: Preflight cache duration in seconds
        """
        self.app = app
        self.allowed_origins = allowed_origins if allowed_origins is not None else self._get_default_origins()
        self.allow_all_origins = allow_all_origins
        self.allowed_methods = allowed_methods or ['GET', 'POST', 'PUT', 'OPTIONS']
        self.allowed_headers = allowed_headers or [
            'Accept',
            'Content-Type',
            'X-Requested-With',
            'X-Request-ID'
        ]
        self.expose_headers = expose_headers or [
            'Content-Type',
            'Location',
            'X-Trace-Id'
        ]
        self.max_age = max_age

        self.register_cors_handlers()

    def _get_default_origins(self) -> List[str]:
        """Get default allowed origins from environment."""
        origins = []

        if os.getenv('ENVIRONMENT', 'development') == 'development':
            origins.extend(DEV_ORIGINS)

        frontend_url = os.getenv('FRONTEND_URL')
        if frontend_url:
            origins.append(frontend_url.rstrip('/'))

        custom_origins = os.getenv('CORS_ALLOWED_ORIGINS')
        if custom_origins:
            origins.extend(o.strip() for o in custom_origins.split(',') if o.strip())

        return origins

    def is_origin_allowed(self, origin: Optional[str]) -> bool:
        """
        Check if origin is allowed.

        Trailing '*' entries match by prefix, e.g. 'https://respond-*'.
        """
        if not origin:
            return False

        if self.allow_all_origins:
            return True

        for allowed_origin in self.allowed_origins:
            if allowed_origin == origin:
                return True
            if allowed_origin.endswith('*') and origin.startswith(allowed_origin[:-1]):
                return True

        return False

    def add_cors_headers(self, response, origin: str):
        """Add CORS headers for an allowed origin."""
        response.headers['Access-Control-Allow-Origin'] = origin
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Allow-Methods'] = ', '.join(self.allowed_methods)
        response.headers['Access-Control-Allow-Headers'] = ', '.join(self.allowed_headers)
        response.headers['Access-Control-Expose-Headers'] = ', '.join(self.expose_headers)
        response.headers['Access-Control-Max-Age'] = str(self.max_age)
        response.vary.add('Origin')
        return response

    def register_cors_handlers(self):
        """Register CORS handlers with Flask application."""

        @self.app.before_request
        def handle_preflight():
            if request.method != 'OPTIONS':
                return None

            origin = request.headers.get('Origin')
            if not self.is_origin_allowed(origin):
                logger.warning(f"CORS preflight rejected for origin: {origin}")
                return make_response('', 403)

            response = make_response('', 204)
            self.add_cors_headers(response, origin)
            logger.debug(f"CORS preflight handled for origin: {origin}")
            return response

        @self.app.after_request
        def add_cors_headers_to_response(response):
            origin = request.headers.get('Origin')

            if self.is_origin_allowed(origin):
                self.add_cors_headers(response, origin)
            elif origin and request.method != 'OPTIONS':
                logger.warning(f"CORS rejected for origin: {origin}")

            return response


def configure_cors(app: Flask, **kwargs) -> CORSMiddleware:
    """
    Configure CORS for Flask application.

    Args:
        app: Flask application
        **kwargs: CORS configuration options

    Returns:
        Configured CORSMiddleware instance
    """
    return CORSMiddleware(app, **kwargs)
