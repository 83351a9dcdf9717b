# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
MongoDB entity store with connection pooling and unique-index enforcement.
"""

import os
import threading
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import List, Dict, Optional, Any, Type, TypeVar
from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import (
    ConnectionFailure,
    ServerSelectionTimeoutError,
    DuplicateKeyError,
    PyMongoError
)
from opentelemetry import trace
from pydantic.alias_generators import to_camel

from models.base import BaseEntity
from models.entities import Volunteer, AidRequest, Assignment
from models.enums import AssignmentStatus, VolunteerStatus
from services.store import EntityStore, AssignmentFilters, StoreError, timestamp_field_for

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

E = TypeVar('E', bound=BaseEntity)

VOLUNTEERS = "volunteers"
REQUESTS = "requests"
ASSIGNMENTS = "assignments"


def to_document(entity: BaseEntity) -> Dict[str, Any]:
    """Convert an entity to a camelCase MongoDB document keyed by _id."""
    document = entity.model_dump(by_alias=True)
    document["_id"] = document.pop("id")
    return document


def from_document(model: Type[E], document: Dict[str, Any]) -> E:
    """Convert a MongoDB document back into an entity."""
    document = dict(document)
    document["id"] = str(document.pop("_id"))
    return model.model_validate(document)


class MongoDBEntityStore(EntityStore):
    """MongoDB-backed EntityStore with connection pooling."""

    def __init__(self, connection_string: str = None, database_name: str = None):
        """Initialize MongoDB store with connection pooling."""
        self.connection_string = connection_string or os.getenv(
            'MONGODB_URI',
            'mongodb://localhost:27017/respond_dev'
        )
        self.database_name = database_name or os.getenv('MONGODB_DATABASE', 'respond_dev')
        self._client: Optional[MongoClient] = None
        self._database: Optional[Database] = None
        self._indexes_ready = False
        self._index_lock = threading.Lock()

        # Connection pool settings
        self.max_pool_size = int(os.getenv('MONGODB_MAX_POOL_SIZE', '10'))
        self.min_pool_size = int(os.getenv('MONGODB_MIN_POOL_SIZE', '1'))
        self.max_idle_time_ms = int(os.getenv('MONGODB_MAX_IDLE_TIME_MS', '30000'))
        self.server_selection_timeout_ms = int(os.getenv('MONGODB_SERVER_SELECTION_TIMEOUT_MS', '5000'))

        logger.info(f"MongoDB store initialized for database: {self.database_name}")

    @property
    def client(self) -> MongoClient:
        """Get MongoDB client with connection pooling."""
        if self._client is None:
            try:
                self._client = MongoClient(
                    self.connection_string,
                    maxPoolSize=self.max_pool_size,
                    minPoolSize=self.min_pool_size,
                    maxIdleTimeMS=self.max_idle_time_ms,
                    serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                    retryWrites=True,
                    retryReads=True,
                    tz_aware=True
                )
                # Test connection
                self._client.admin.command('ping')
                logger.info("MongoDB connection established successfully")
            except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                self._client = None
                logger.error(f"Failed to connect to MongoDB: {e}")
                raise StoreError("Unable to connect to MongoDB") from e

        return self._client

    @property
    def database(self) -> Database:
        """Get MongoDB database."""
        if self._database is None:
            self._database = self.client[self.database_name]
        return self._database

    def get_collection(self, collection_name: str) -> Collection:
        """Get MongoDB collection, creating the indexes on first use."""
        self.ensure_indexes()
        return self.database[collection_name]

    def ensure_indexes(self) -> None:
        """
        Create the indexes once per store instance.

        Uniqueness of volunteer emails and (request, volunteer) assignment
        pairs is enforced by these indexes, so no write may run before them.
        """
        if self._indexes_ready:
            return
        with self._index_lock:
            if not self._indexes_ready:
                self.create_indexes()
                self._indexes_ready = True

    def close_connection(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("MongoDB connection closed")

    @contextmanager
    def _operation(self, name: str, collection: str):
        """Trace a store operation and translate driver failures into StoreError."""
        with tracer.start_as_current_span(f"store.mongodb.{name}") as span:
            span.set_attributes({
                "db.system": "mongodb",
                "db.collection": collection,
                "db.operation": name
            })
            try:
                yield span
            except DuplicateKeyError:
                raise
            except PyMongoError as e:
                span.record_exception(e)
                logger.error(f"MongoDB {name} failed on {collection}: {e}", exc_info=True)
                raise StoreError(f"MongoDB {name} failed") from e

    def _find_one(self, model: Type[E], collection: str, doc_id: str) -> Optional[E]:
        with self._operation("find_one", collection):
            document = self.get_collection(collection).find_one({"_id": doc_id})
        if document is None:
            logger.debug(f"Document {doc_id} not found in {collection}")
            return None
        return from_document(model, document)

    def _find(self, model: Type[E], collection: str, query: Dict, sort: List = None) -> List[E]:
        with self._operation("find", collection):
            cursor = self.get_collection(collection).find(query)
            if sort:
                cursor = cursor.sort(sort)
            documents = list(cursor)
        logger.debug(f"Found {len(documents)} documents in {collection}")
        return [from_document(model, doc) for doc in documents]

    # Volunteers

    def get_volunteer(self, volunteer_id: str) -> Optional[Volunteer]:
        return self._find_one(Volunteer, VOLUNTEERS, volunteer_id)

    def list_volunteers(self) -> List[Volunteer]:
        return self._find(Volunteer, VOLUNTEERS, {}, [("createdAt", DESCENDING)])

    def list_verified_volunteers(self) -> List[Volunteer]:
        return self._find(Volunteer, VOLUNTEERS, {"status": VolunteerStatus.VERIFIED.value})

    def insert_volunteer(self, volunteer: Volunteer) -> bool:
        try:
            with self._operation("insert_one", VOLUNTEERS):
                self.get_collection(VOLUNTEERS).insert_one(to_document(volunteer))
        except DuplicateKeyError:
            logger.warning(f"Volunteer email already registered: {volunteer.email}")
            return False

        logger.info(f"Created volunteer {volunteer.id}")
        return True

    # Requests

    def get_request(self, request_id: str) -> Optional[AidRequest]:
        return self._find_one(AidRequest, REQUESTS, request_id)

    def list_requests(self) -> List[AidRequest]:
        return self._find(AidRequest, REQUESTS, {}, [("createdAt", DESCENDING)])

    def insert_request(self, aid_request: AidRequest) -> None:
        with self._operation("insert_one", REQUESTS):
            self.get_collection(REQUESTS).insert_one(to_document(aid_request))
        logger.info(f"Created aid request {aid_request.id}")

    # Assignments

    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        return self._find_one(Assignment, ASSIGNMENTS, assignment_id)

    def list_assignments(self, filters: Optional[AssignmentFilters] = None) -> List[Assignment]:
        filters = filters or AssignmentFilters()
        query = {}
        if filters.request_id is not None:
            query["requestId"] = filters.request_id
        if filters.volunteer_id is not None:
            query["volunteerId"] = filters.volunteer_id
        if filters.status is not None:
            query["status"] = AssignmentStatus(filters.status).value

        return self._find(Assignment, ASSIGNMENTS, query, [("assignedAt", ASCENDING)])

    def insert_assignment(self, assignment: Assignment) -> bool:
        # The unique (requestId, volunteerId) index makes this an insert-or-ignore
        try:
            with self._operation("insert_one", ASSIGNMENTS) as span:
                span.set_attributes({
                    "assignment.request_id": assignment.request_id,
                    "assignment.volunteer_id": assignment.volunteer_id
                })
                self.get_collection(ASSIGNMENTS).insert_one(to_document(assignment))
        except DuplicateKeyError:
            logger.debug(
                f"Assignment already exists for request {assignment.request_id} "
                f"and volunteer {assignment.volunteer_id}"
            )
            return False

        return True

    def update_assignment_status(
        self,
        assignment_id: str,
        status: AssignmentStatus,
        timestamp: datetime
    ) -> bool:
        updates = {
            "status": AssignmentStatus(status).value,
            "updatedAt": timestamp
        }
        timestamp_field = timestamp_field_for(status)
        if timestamp_field:
            updates[to_camel(timestamp_field)] = timestamp

        with self._operation("update_one", ASSIGNMENTS):
            result = self.get_collection(ASSIGNMENTS).update_one(
                {"_id": assignment_id},
                {"$set": updates}
            )

        if result.matched_count > 0:
            logger.info(f"Updated assignment {assignment_id} to {updates['status']}")
            return True

        logger.warning(f"No assignment updated for {assignment_id}")
        return False

    def health_check(self) -> Dict[str, Any]:
        """Check MongoDB connection health."""
        try:
            # Ping the database
            result = self.client.admin.command('ping')

            # Get server info
            server_info = self.client.server_info()

            return {
                'status': 'healthy',
                'backend': 'mongodb',
                'ping': result.get('ok') == 1,
                'version': server_info.get('version'),
                'database': self.database_name,
                'connection_pool_size': self.max_pool_size
            }
        except (PyMongoError, StoreError) as e:
            logger.error(f"MongoDB health check failed: {e}")
            return {
                'status': 'unhealthy',
                'backend': 'mongodb',
                'error': str(e),
                'database': self.database_name
            }

    # Index Management

    def create_indexes(self) -> None:
        """Create uniqueness and query indexes for all collections."""
        try:
            logger.info("Creating MongoDB indexes...")

            volunteers = self.database[VOLUNTEERS]
            volunteers.create_index("email", unique=True)
            volunteers.create_index([("status", ASCENDING)])
            volunteers.create_index([("createdAt", DESCENDING)])

            requests = self.database[REQUESTS]
            requests.create_index([("createdAt", DESCENDING)])

            # At most one assignment per (request, volunteer) pair
            assignments = self.database[ASSIGNMENTS]
            assignments.create_index(
                [("requestId", ASCENDING), ("volunteerId", ASCENDING)],
                unique=True
            )
            assignments.create_index([("requestId", ASCENDING), ("status", ASCENDING)])
            assignments.create_index([("volunteerId", ASCENDING), ("assignedAt", DESCENDING)])

            logger.info("MongoDB indexes created successfully")

        except PyMongoError as e:
            logger.error(f"Failed to create MongoDB indexes: {e}")
            raise StoreError("Failed to create MongoDB indexes") from e


# Singleton instance for application use
_mongodb_store: Optional[MongoDBEntityStore] = None


def get_mongodb_store() -> MongoDBEntityStore:
    """Get singleton MongoDB store instance."""
    global _mongodb_store
    if _mongodb_store is None:
        _mongodb_store = MongoDBEntityStore()
    return _mongodb_store


def close_mongodb_connection() -> None:
    """Close MongoDB connection (for cleanup)."""
    global _mongodb_store
    if _mongodb_store:
        _mongodb_store.close_connection()
        _mongodb_store = None
