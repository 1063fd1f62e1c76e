"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from app.shared.telemetry.logging import RequestIdFilter, setup_logging
from app.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from app.shared.telemetry.tracing import TracedOperation, add_span_attributes

__all__ = [
    "RequestIdFilter",
    "TelemetryConfig",
    "TracedOperation",
    "add_span_attributes",
    "get_telemetry",
    "set_telemetry",
    "setup_logging",
]
