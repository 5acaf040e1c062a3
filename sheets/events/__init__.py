"""
Event sinks for announcing schema changes.

"""
from .sink import (
    SCHEMA_UPDATED,
    EventSink,
    LoggingEventSink,
)

__all__ = [
    "SCHEMA_UPDATED",
    "EventSink",
    "LoggingEventSink",
]
