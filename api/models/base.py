# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Base entity models with common fields and validation.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from bson import ObjectId


def generate_object_id() -> str:
    """Generate a new MongoDB ObjectId as string."""
    return str(ObjectId())


def utcnow() -> datetime:
    """Current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names on the wire."""

    model_config = ConfigDict(
        # Accept both snake_case attribute names and camelCase aliases
        alias_generator=to_camel,
        populate_by_name=True,
        # Use enum values instead of enum objects
        use_enum_values=True,
        validate_assignment=True
    )

    def to_json_dict(self) -> dict:
        """Dump the model as a JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class BaseEntity(CamelModel):
    """Base entity with common fields for all domain objects."""

    id: str = Field(default_factory=generate_object_id, description="Unique identifier")
    created_at: datetime = Field(default_factory=utcnow, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=utcnow, description="Last update timestamp")
    schema_version: int = Field(default=1, description="Schema version for migrations")

    def touch(self) -> None:
        """Update the last-modified timestamp."""
        self.updated_at = utcnow()
