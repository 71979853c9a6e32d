"""Tests for NDJSON logging module."""

import io
import json

from .ndjson import (
    NDJSONLogger,
    EventType,
    LogEvent,
    LogSummary,
    SummarizationConfig,
    create_logger,
)


class TestLogEvent:
    """Tests for LogEvent dataclass."""

    def test_to_ndjson_basic(self):
        event = LogEvent(
            timestamp="2024-01-01T00:00:00Z",
            event_type=EventType.INFO,
            namespace="app",
            payload={"message": "test"},
        )
        data = json.loads(event.to_ndjson())
        assert data["ts"] == "2024-01-01T00:00:00Z"
        assert data["type"] == "info"
        assert data["ns"] == "app"
        assert data["payload"] == {"message": "test"}
        assert "key" not in data

    def test_to_ndjson_with_key(self):
        event = LogEvent(
            timestamp="2024-01-01T00:00:00Z",
            event_type=EventType.STATE_CHANGE,
            namespace="app",
            payload={"old": 1, "new": 2},
            key="counter",
        )
        data = json.loads(event.to_ndjson())
        assert data["key"] == "counter"


class TestLogSummary:
    def test_to_dict(self):
        summary = LogSummary(
            namespace="app",
            total_events=10,
            event_counts={"state.change": 8},
            total_changes=8,
            warnings=1,
        )
        d = summary.to_dict()
        assert d["namespace"] == "app"
        assert d["total_events"] == 10
        assert d["total_changes"] == 8
        assert d["warnings"] == 1
        assert d["errors"] == 0


class TestNDJSONLogger:
    def test_writes_file_and_stream(self, tmp_path):
        stream = io.StringIO()
        logger = NDJSONLogger("app", base_dir=str(tmp_path), stream=stream)
        logger.state_init("counter", 0)
        logger.state_change("counter", 0, 1)
        logger.close()

        file_lines = (tmp_path / "app" / "stream.ndjson").read_text().splitlines()
        stream_lines = stream.getvalue().splitlines()
        assert file_lines == stream_lines
        assert [json.loads(line)["type"] for line in file_lines] == ["state.init", "state.change"]

    def test_summary_counts(self, tmp_path):
        logger = NDJSONLogger("app", base_dir=str(tmp_path))
        logger.state_change("a", 0, 1)
        logger.state_change("a", 1, 2)
        logger.persist_fallback("b", "corrupt")
        logger.log(EventType.ERROR, {"message": "oops"})
        logger.log(EventType.WARNING, {"message": "careful"})
        logger.close()

        summary = json.loads((tmp_path / "app" / "stream.summary.json").read_text())
        assert summary["total_events"] == 5
        assert summary["total_changes"] == 2
        assert summary["errors"] == 1
        assert summary["warnings"] == 2
        assert summary["event_counts"]["state.change"] == 2

    def test_state_clear_payload(self, tmp_path):
        stream = io.StringIO()
        logger = NDJSONLogger("app", base_dir=str(tmp_path), stream=stream)
        logger.state_clear("a")
        logger.state_clear()
        logger.close()

        first, second = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert first["payload"] == {"all": False}
        assert first["key"] == "a"
        assert second["payload"] == {"all": True}
        assert "key" not in second

    def test_unserializable_values_stringified(self, tmp_path):
        stream = io.StringIO()
        logger = NDJSONLogger("app", base_dir=str(tmp_path), stream=stream)
        logger.state_change("obj", None, object())
        logger.close()

        data = json.loads(stream.getvalue())
        assert data["payload"]["new"].startswith("<object object")

    def test_truncation_keeps_important_events(self, tmp_path):
        stream = io.StringIO()
        config = SummarizationConfig(max_events_before_summary=100, truncate_after_events=2)
        logger = NDJSONLogger("app", base_dir=str(tmp_path), config=config, stream=stream)
        logger.state_change("a", 0, 1)
        logger.state_change("a", 1, 2)
        logger.state_change("a", 2, 3)
        logger.log(EventType.ERROR, {"message": "kept"})
        logger.close()

        types = [json.loads(line)["type"] for line in stream.getvalue().splitlines()]
        assert types == ["state.change", "error"]
        assert logger.get_summary().total_events == 4

    def test_create_logger(self, tmp_path):
        logger = create_logger("ns", base_dir=str(tmp_path))
        assert logger.log_path == tmp_path / "ns" / "stream.ndjson"
        logger.close()
