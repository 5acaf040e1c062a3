# Event sinks used to announce schema changes.

import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


# Emitted by SchemaRegistry.add_field after a new version is stored
SCHEMA_UPDATED = "SCHEMA_UPDATED"


class EventSink:
    # Base class for event sinks.

    def emit(self, event_name: str, payload: Dict[str, Any]) -> None:
        # Deliver a single event.
        raise NotImplementedError


class LoggingEventSink(EventSink):
    # Sink that writes events to the log instead of a message bus.

    def __init__(self, level: int = logging.INFO):
        self.level = level

    def emit(self, event_name: str, payload: Dict[str, Any]) -> None:
        logger.log(
            self.level,
            f"EVENT [{event_name}]: {json.dumps(payload, ensure_ascii=False, sort_keys=True)}"
        )
