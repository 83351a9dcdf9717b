"""
RESPOND API - Flask Application Entry Point

This module builds the Flask application with OpenAPI 3.0 support,
configures middleware, and wires the entity store into the matching,
assignment and request presentation services.
"""

import os
import logging
from typing import Optional
from flask import jsonify
from flask_openapi3 import OpenAPI, Info, Tag

from observability.config import setup_observability
from observability.middleware import add_observability_middleware
from middleware.cors import configure_cors
from middleware.error_handler import register_error_handlers
from middleware.validation import ValidationMiddleware
from domain.assignments import AssignmentManager
from domain.matching import SkillMatcher
from domain.requests import RequestAggregator
from services.hal import create_hal_formatter
from services.health import HealthCheckService
from services.memory_store import InMemoryEntityStore
from services.mongodb import get_mongodb_store
from services.store import EntityStore

logger = logging.getLogger(__name__)

# OpenAPI info
info = Info(
    title="RESPOND API",
    version="1.0.0",
    description="Emergency volunteer coordination API: skill matching, assignment and task acceptance"
)

health_tag = Tag(name="Health", description="System health and status")


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).lower() == 'true'


def create_store(backend: str) -> EntityStore:
    """Build the entity store for the configured backend."""
    if backend == 'mongodb':
        return get_mongodb_store()
    if backend == 'memory':
        return InMemoryEntityStore()
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


def create_app(store: Optional[EntityStore] = None) -> OpenAPI:
    """
    Create and configure the Flask application.

    Args:
        store: Entity store to use; built from STORE_BACKEND when omitted

    Returns:
        Configured OpenAPI (Flask) application
    """
    app = OpenAPI(__name__, info=info)

    # Environment configuration
    app.config['ENVIRONMENT'] = os.getenv('ENVIRONMENT', 'development')
    app.config['DEBUG'] = _env_flag('DEBUG', str(app.config['ENVIRONMENT'] == 'development'))
    app.config['BASE_URL'] = os.getenv('BASE_URL', 'http://localhost:5000')
    app.config['STORE_BACKEND'] = os.getenv('STORE_BACKEND', 'memory').lower()
    app.config['OTEL_ENABLED'] = _env_flag('OTEL_ENABLED', 'true')
    app.config['CORS_ALLOW_ALL_ORIGINS'] = _env_flag('CORS_ALLOW_ALL_ORIGINS')

    # Initialize observability first
    setup_observability(app.config['ENVIRONMENT'], app.config['OTEL_ENABLED'])
    add_observability_middleware(app, instrument=app.config['OTEL_ENABLED'])

    if store is None:
        store = create_store(app.config['STORE_BACKEND'])

    # Initialize services
    hal_formatter = create_hal_formatter(app.config['BASE_URL'])
    health_service = HealthCheckService(store, app.config['ENVIRONMENT'])

    # Initialize middleware
    register_error_handlers(app, hal_formatter)
    configure_cors(app, allow_all_origins=app.config['CORS_ALLOW_ALL_ORIGINS'])

    # Make services available to routes
    app.entity_store = store
    app.skill_matcher = SkillMatcher(store)
    app.assignment_manager = AssignmentManager(store)
    app.request_aggregator = RequestAggregator(store)
    app.hal_formatter = hal_formatter
    app.validation_middleware = ValidationMiddleware()
    app.health_service = health_service

    # Register routes
    from routes.requests import requests_bp
    from routes.tasks import tasks_bp
    from routes.volunteers import volunteers_bp

    app.register_api(requests_bp)
    app.register_api(tasks_bp)
    app.register_api(volunteers_bp)

    @app.get('/api/healthz', tags=[health_tag])
    def health_check():
        """Health check reporting the entity store and process metrics."""
        health_data = health_service.get_health()
        status_code = 200 if health_data["status"] == "healthy" else 503

        health_data['_links'] = {
            'self': hal_formatter.builder.link_builder.build_self_link('/api/healthz').model_dump(exclude_none=True)
        }
        return jsonify(health_data), status_code

    logger.info(
        "RESPOND API initialized",
        extra={
            "environment": app.config['ENVIRONMENT'],
            "store": type(store).__name__
        }
    )
    return app


if __name__ == '__main__':
    # Development server
    app = create_app()
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=app.config['DEBUG']
    )
