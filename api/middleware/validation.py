# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Request validation using Pydantic models.

Failures are raised as InvalidInputError so the error handler renders
them as one validation problem document with field-level errors.
"""

from flask import request
from typing import Type, TypeVar, Dict, Any, List
from pydantic import BaseModel, ValidationError
from opentelemetry import trace
import logging

from domain.errors import InvalidInputError

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ValidationMiddleware:
    """Validates request bodies and query strings against Pydantic models."""

    def format_validation_errors(self, validation_error: ValidationError) -> List[Dict[str, Any]]:
        """
        Format Pydantic validation errors for API response.

        Args:
            validation_error: Pydantic ValidationError

        Returns:
            List of formatted error dictionaries
        """
        errors = []

        for error in validation_error.errors():
            field_path = ".".join(str(loc) for loc in error["loc"]) or "body"
            message = error["msg"]
            # Custom validators raise ValueError; report their message as written
            if error["type"] == "value_error" and "error" in error.get("ctx", {}):
                message = str(error["ctx"]["error"])
            errors.append({
                "field": field_path,
                "message": message,
                "type": error["type"]
            })

        return errors

    def _summarize(self, errors: List[Dict[str, Any]]) -> str:
        return "; ".join(dict.fromkeys(e["message"] for e in errors))

    def parse_json_body(self, model_class: Type[ModelT]) -> ModelT:
        """
        Parse and validate the JSON request body.

        Args:
            model_class: Pydantic model class for validation

        Returns:
            Validated model instance

        Raises:
            InvalidInputError: if the body is not a JSON object or fails validation
        """
        with tracer.start_as_current_span("validation.parse_json_body") as span:
            span.set_attributes({
                "validation.model": model_class.__name__,
                "http.method": request.method,
                "http.path": request.path
            })

            json_data = request.get_json(silent=True)
            if not isinstance(json_data, dict):
                span.set_attribute("validation.result", "invalid_json")
                raise InvalidInputError(
                    "Request body must be a JSON object",
                    [{
                        "field": "body",
                        "message": "Expected a JSON object",
                        "type": "json_error"
                    }]
                )

            try:
                validated = model_class.model_validate(json_data)
            except ValidationError as e:
                span.set_attribute("validation.result", "validation_error")
                validation_errors = self.format_validation_errors(e)

                logger.warning(
                    "Request validation failed",
                    extra={
                        "model": model_class.__name__,
                        "path": request.path,
                        "method": request.method,
                        "errors": validation_errors
                    }
                )
                raise InvalidInputError(self._summarize(validation_errors), validation_errors) from e

            span.set_attribute("validation.result", "success")
            return validated

    def parse_query_params(self, model_class: Type[ModelT]) -> ModelT:
        """
        Validate query string parameters.

        Raises:
            InvalidInputError: if the parameters fail validation
        """
        with tracer.start_as_current_span("validation.parse_query_params") as span:
            span.set_attributes({
                "validation.model": model_class.__name__,
                "http.path": request.path
            })

            query_data = request.args.to_dict()
            try:
                validated = model_class.model_validate(query_data)
            except ValidationError as e:
                span.set_attribute("validation.result", "validation_error")
                validation_errors = self.format_validation_errors(e)

                logger.warning(
                    "Query parameter validation failed",
                    extra={
                        "model": model_class.__name__,
                        "path": request.path,
                        "params": query_data,
                        "errors": validation_errors
                    }
                )
                raise InvalidInputError(self._summarize(validation_errors), validation_errors) from e

            span.set_attribute("validation.result", "success")
            return validated
