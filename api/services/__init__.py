# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - Storage backings and response formatting.
"""

from .store import EntityStore, AssignmentFilters, StoreError
from .memory_store import InMemoryEntityStore
from .mongodb import MongoDBEntityStore, get_mongodb_store, close_mongodb_connection

__all__ = [
    "EntityStore",
    "AssignmentFilters",
    "StoreError",
    "InMemoryEntityStore",
    "MongoDBEntityStore",
    "get_mongodb_store",
    "close_mongodb_connection"
]
