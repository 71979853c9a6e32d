"""Tests for the persistence adapter."""

import logging

from ..errors import StorageError
from .adapter import PersistenceAdapter
from .codecs import JsonCodec, NumberCodec, StringCodec
from .memory import MemoryStorage


class BrokenStorage(MemoryStorage):
    """Storage whose reads and writes always fail."""

    def get_item(self, key):
        raise StorageError("read", key)

    def set_item(self, key, value):
        raise StorageError("write", key)


class DiskGoneStorage(MemoryStorage):
    """Storage failing with a plain OSError instead of StorageError."""

    def get_item(self, key):
        raise OSError("disk gone")

    def set_item(self, key, value):
        raise OSError("disk gone")


class LookupCodec:
    """Codec mapping stored names to values, failing with KeyError."""

    table = {"x": 1}

    def serialize(self, value):
        for name, known in self.table.items():
            if known == value:
                return name
        raise KeyError(value)

    def deserialize(self, raw):
        return self.table[raw]


class TestLoad:
    def test_absent_writes_fallback(self):
        storage = MemoryStorage()
        adapter = PersistenceAdapter(storage, JsonCodec())
        assert adapter.load("presetJson", {"a": 3, "b": 4}) == {"a": 3, "b": 4}
        assert storage.get_item("presetJson") == '{"a":3,"b":4}'

    def test_present_value_parsed(self):
        storage = MemoryStorage({"presetJson": '{"a":1,"b":2}'})
        adapter = PersistenceAdapter(storage, JsonCodec())
        assert adapter.load("presetJson", {"a": 3, "b": 4}) == {"a": 1, "b": 2}

    def test_corrupt_value_returns_fallback(self, caplog):
        storage = MemoryStorage({"presetJson": "Dfsddf"})
        adapter = PersistenceAdapter(storage, JsonCodec())

        with caplog.at_level(logging.WARNING):
            assert adapter.load("presetJson", {"a": 3, "b": 4}) == {"a": 3, "b": 4}

        assert "presetJson" in caplog.text
        # Corrupt data is left in place, not overwritten
        assert storage.get_item("presetJson") == "Dfsddf"

    def test_corrupt_number_returns_fallback(self):
        adapter = PersistenceAdapter(MemoryStorage({"n": "abc"}), NumberCodec())
        assert adapter.load("n", 0) == 0

    def test_read_failure_returns_fallback(self):
        adapter = PersistenceAdapter(BrokenStorage(), StringCodec())
        assert adapter.load("k", "default") == "default"

    def test_any_read_error_returns_fallback(self, caplog):
        adapter = PersistenceAdapter(DiskGoneStorage(), StringCodec())
        with caplog.at_level(logging.WARNING):
            assert adapter.load("k", "default") == "default"
        assert "disk gone" in caplog.text

    def test_any_decode_error_returns_fallback(self):
        storage = MemoryStorage({"k": "bad"})
        adapter = PersistenceAdapter(storage, LookupCodec())
        assert adapter.load("k", 1) == 1
        assert storage.get_item("k") == "bad"

    def test_on_fallback_hook(self):
        reasons = []
        adapter = PersistenceAdapter(
            MemoryStorage({"k": "Dfsddf"}),
            JsonCodec(),
            on_fallback=lambda key, reason: reasons.append(key),
        )
        adapter.load("k", None)
        assert reasons == ["k"]


class TestSave:
    def test_round_trip(self):
        storage = MemoryStorage()
        adapter = PersistenceAdapter(storage, JsonCodec())
        value = {"name": "x", "tags": ["a", "b"], "nested": {"n": 1.5, "ok": True}}
        adapter.save("doc", value)
        assert adapter.load("doc", None) == value

    def test_on_change_saves_new_value(self):
        storage = MemoryStorage()
        adapter = PersistenceAdapter(storage, StringCodec())
        adapter.on_change("new", "old", "k")
        assert storage.get_item("k") == "new"

    def test_write_failure_is_logged(self, caplog):
        adapter = PersistenceAdapter(BrokenStorage(), StringCodec())
        with caplog.at_level(logging.WARNING):
            adapter.save("k", "v")
        assert "Persisting 'k' failed" in caplog.text

    def test_any_write_error_is_logged(self, caplog):
        adapter = PersistenceAdapter(DiskGoneStorage(), StringCodec())
        with caplog.at_level(logging.WARNING):
            adapter.save("k", "v")
        assert "Persisting 'k' failed: disk gone" in caplog.text

    def test_any_encode_error_is_logged(self, caplog):
        storage = MemoryStorage()
        adapter = PersistenceAdapter(storage, LookupCodec())
        with caplog.at_level(logging.WARNING):
            adapter.save("k", 2)
        assert storage.get_item("k") is None
        assert "Cannot serialize value for 'k'" in caplog.text

    def test_unserializable_value_is_logged(self, caplog):
        storage = MemoryStorage()
        adapter = PersistenceAdapter(storage, JsonCodec())
        with caplog.at_level(logging.WARNING):
            adapter.save("k", object())
        assert storage.get_item("k") is None
        assert "Cannot serialize" in caplog.text


class TestStorageError:
    def test_message(self):
        err = StorageError("read", "k", ValueError("disk"))
        assert str(err) == "Storage read failed for key 'k': disk"
        assert err.operation == "read"

    def test_message_without_key(self):
        assert str(StorageError("clear")) == "Storage clear failed"
