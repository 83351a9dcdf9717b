#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Create the MongoDB indexes the RESPOND store relies on.

The unique (requestId, volunteerId) index is what makes assignment
inserts idempotent, and the unique volunteer email index backs duplicate
registration detection, so run this before serving traffic against a
fresh database:

    MONGODB_URI=... MONGODB_DATABASE=... python api/scripts/create_indexes.py
"""

import sys
import logging

from services.mongodb import get_mongodb_store, close_mongodb_connection
from services.store import StoreError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main() -> int:
    """Create MongoDB indexes. Returns the process exit code."""
    try:
        logger.info("Starting MongoDB index creation...")
        store = get_mongodb_store()

        health = store.health_check()
        if health['status'] != 'healthy':
            logger.error(f"MongoDB is not healthy: {health}")
            return 1

        logger.info(f"Connected to MongoDB {health['version']} - Database: {health['database']}")
        store.create_indexes()
        logger.info("MongoDB indexes created successfully!")
        return 0

    except StoreError as e:
        logger.error(f"Failed to create indexes: {e}")
        return 1
    finally:
        close_mongodb_connection()


if __name__ == "__main__":
    sys.exit(main())
