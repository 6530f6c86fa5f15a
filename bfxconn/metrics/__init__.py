"""Prometheus instrumentation for the connector."""
