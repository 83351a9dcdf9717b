"""
Health Check Service

Reports the entity store's health together with basic process metrics.
"""

import os
import time
import psutil
from datetime import datetime, timezone
from typing import Dict, Any
from opentelemetry import trace

from services.store import EntityStore, StoreError

tracer = trace.get_tracer(__name__)


class HealthCheckService:
    """Service for system health monitoring."""

    def __init__(self, store: EntityStore, environment: str = 'development', service_version: str = "1.0.0"):
        self.store = store
        self.environment = environment
        self.service_version = service_version

    def get_health(self) -> Dict[str, Any]:
        """Get health status including the store check and process metrics."""
        with tracer.start_as_current_span("health.check") as span:
            start_time = time.time()

            store_health = self._check_store_health()
            response_time_ms = round((time.time() - start_time) * 1000, 2)

            health_data = {
                "status": store_health["status"],
                "service": "respond-api",
                "version": self.service_version,
                "environment": self.environment,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "response_time_ms": response_time_ms,
                "dependencies": {
                    "store": store_health
                },
                "system_metrics": self._get_system_metrics()
            }

            span.set_attributes({
                "health.overall_status": store_health["status"],
                "health.response_time_ms": response_time_ms
            })

            return health_data

    def _check_store_health(self) -> Dict[str, Any]:
        with tracer.start_as_current_span("health.store_check") as span:
            try:
                health = self.store.health_check()
            except StoreError as e:
                span.record_exception(e)
                health = {"status": "unhealthy", "error": str(e)}

            span.set_attribute("store.status", health.get("status", "unknown"))
            return health

    def _get_system_metrics(self) -> Dict[str, Any]:
        """Get basic process metrics."""
        try:
            process = psutil.Process(os.getpid())
            memory = process.memory_info()
            return {
                "uptime_seconds": round(time.time() - process.create_time(), 2),
                "memory_rss_mb": round(memory.rss / 1024 / 1024, 2),
                "threads": process.num_threads()
            }
        except psutil.Error as e:
            return {
                "error": f"Failed to collect system metrics: {str(e)}"
            }
