"""NDJSON event logging for the shared value store.

Provides structured NDJSON event logging with:
- Per-namespace log files
- Summarization at configurable thresholds
- Event type tracking and counts
- Stream and file output modes
"""

import json
from datetime import datetime, timezone
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO
from enum import Enum


class EventType(str, Enum):
    """Standard event types for logging."""
    STATE_INIT = "state.init"
    STATE_CHANGE = "state.change"
    STATE_CLEAR = "state.clear"
    PERSIST_FALLBACK = "persist.fallback"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class LogEvent:
    """A single log event."""
    timestamp: str
    event_type: str
    namespace: str
    payload: Dict[str, Any]
    key: Optional[str] = None

    def to_ndjson(self) -> str:
        """Serialize to NDJSON line."""
        data = {
            "ts": self.timestamp,
            "type": self.event_type,
            "ns": self.namespace,
            "payload": self.payload,
        }
        if self.key is not None:
            data["key"] = self.key
        return json.dumps(data, separators=(',', ':'))


@dataclass
class LogSummary:
    """Summary statistics for a log file."""
    namespace: str
    total_events: int = 0
    event_counts: Dict[str, int] = field(default_factory=dict)
    first_timestamp: Optional[str] = None
    last_timestamp: Optional[str] = None
    total_changes: int = 0
    errors: int = 0
    warnings: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "namespace": self.namespace,
            "total_events": self.total_events,
            "event_counts": self.event_counts,
            "first_timestamp": self.first_timestamp,
            "last_timestamp": self.last_timestamp,
            "total_changes": self.total_changes,
            "errors": self.errors,
            "warnings": self.warnings,
        }


@dataclass
class SummarizationConfig:
    """Configuration for log summarization."""
    max_events_before_summary: int = 10000
    truncate_after_events: int = 50000
    keep_events: List[str] = field(default_factory=lambda: [
        EventType.STATE_INIT,
        EventType.STATE_CLEAR,
        EventType.PERSIST_FALLBACK,
        EventType.ERROR,
        EventType.WARNING,
    ])


class NDJSONLogger:
    """NDJSON event logger for a store namespace.

    Writes events to:
    - {base_dir}/{namespace}/stream.ndjson
    - {base_dir}/{namespace}/stream.summary.json
    """

    def __init__(
        self,
        namespace: str,
        base_dir: str = ".unstateless",
        config: Optional[SummarizationConfig] = None,
        stream: Optional[TextIO] = None,
    ):
        self.namespace = namespace
        self.base_dir = Path(base_dir)
        self.config = config or SummarizationConfig()
        self.stream = stream

        # Tracking
        self.summary = LogSummary(namespace=namespace)
        self._file: Optional[TextIO] = None
        self._summarizing = False

        self._init_log_dir()

    def _init_log_dir(self) -> None:
        """Create log directory structure."""
        log_dir = self.base_dir / self.namespace
        log_dir.mkdir(parents=True, exist_ok=True)
        self._log_path = log_dir / "stream.ndjson"
        self._summary_path = log_dir / "stream.summary.json"

    @property
    def log_path(self) -> Path:
        return self._log_path

    def _open_file(self) -> TextIO:
        """Open log file for appending."""
        if self._file is None:
            self._file = open(self._log_path, 'a', encoding='utf-8')
        return self._file

    def log(
        self,
        event_type: str,
        payload: Dict[str, Any],
        key: Optional[str] = None,
    ) -> None:
        """Log an event."""
        timestamp = datetime.now(timezone.utc).isoformat()

        event = LogEvent(
            timestamp=timestamp,
            event_type=event_type,
            namespace=self.namespace,
            payload=payload,
            key=key,
        )

        self._update_summary(event)

        # Past the truncation threshold only keep the important events
        if self.summary.total_events >= self.config.truncate_after_events:
            if event_type not in self.config.keep_events:
                return

        line = event.to_ndjson() + "\n"

        if self.stream:
            self.stream.write(line)
            self.stream.flush()

        f = self._open_file()
        f.write(line)
        f.flush()

    def _update_summary(self, event: LogEvent) -> None:
        """Update summary statistics."""
        self.summary.total_events += 1

        self.summary.event_counts[event.event_type] = (
            self.summary.event_counts.get(event.event_type, 0) + 1
        )

        if self.summary.first_timestamp is None:
            self.summary.first_timestamp = event.timestamp
        self.summary.last_timestamp = event.timestamp

        if event.event_type == EventType.STATE_CHANGE:
            self.summary.total_changes += 1

        if event.event_type == EventType.ERROR:
            self.summary.errors += 1
        elif event.event_type in (EventType.WARNING, EventType.PERSIST_FALLBACK):
            self.summary.warnings += 1

        if (not self._summarizing and
            self.summary.total_events >= self.config.max_events_before_summary):
            self._summarizing = True
            self.log(
                EventType.INFO,
                {"message": f"Log summarization active after {self.summary.total_events} events"}
            )

    def state_init(self, key: str, value: Any) -> None:
        """Log first initialization of a key."""
        self.log(EventType.STATE_INIT, {"value": self._safe_serialize(value)}, key=key)

    def state_change(self, key: str, old_value: Any, new_value: Any) -> None:
        """Log a committed change."""
        self.log(
            EventType.STATE_CHANGE,
            {
                "old": self._safe_serialize(old_value),
                "new": self._safe_serialize(new_value),
            },
            key=key,
        )

    def state_clear(self, key: Optional[str] = None) -> None:
        """Log removal of one key, or of every key when key is None."""
        self.log(EventType.STATE_CLEAR, {"all": key is None}, key=key)

    def persist_fallback(self, key: str, reason: str) -> None:
        """Log a persisted value replaced by its default."""
        self.log(EventType.PERSIST_FALLBACK, {"reason": reason}, key=key)

    def _safe_serialize(self, value: Any) -> Any:
        """Safely serialize a value for logging."""
        try:
            json.dumps(value)
            return value
        except (TypeError, ValueError):
            return str(value)

    def get_summary(self) -> LogSummary:
        """Get current summary."""
        return self.summary

    def write_summary(self) -> None:
        """Write summary file."""
        with open(self._summary_path, 'w', encoding='utf-8') as f:
            json.dump(self.summary.to_dict(), f, indent=2)

    def close(self) -> None:
        """Close logger and write final summary."""
        self.write_summary()
        if self._file:
            self._file.close()
            self._file = None


def create_logger(
    namespace: str,
    base_dir: str = ".unstateless",
    stream: Optional[TextIO] = None,
) -> NDJSONLogger:
    """Create a logger for a store namespace."""
    return NDJSONLogger(namespace, base_dir, stream=stream)
