"""
Observability package: OpenTelemetry setup and Flask request hooks.
"""
