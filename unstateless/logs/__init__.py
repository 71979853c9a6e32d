"""Structured event logging for unstateless."""

from .ndjson import (
    NDJSONLogger,
    EventType,
    LogEvent,
    LogSummary,
    SummarizationConfig,
    create_logger,
)

__all__ = [
    "NDJSONLogger",
    "EventType",
    "LogEvent",
    "LogSummary",
    "SummarizationConfig",
    "create_logger",
]
