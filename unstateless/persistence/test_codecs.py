"""Tests for persistence codecs."""

import pytest
from pydantic import BaseModel, ValidationError

from .codecs import BooleanCodec, JsonCodec, NumberCodec, StringCodec


class Preset(BaseModel):
    a: int
    b: int


class TestStringCodec:
    def test_identity(self):
        codec = StringCodec()
        assert codec.serialize("foo1") == "foo1"
        assert codec.deserialize("") == ""


class TestNumberCodec:
    def test_integral_text_loads_int(self):
        codec = NumberCodec()
        assert codec.deserialize("1") == 1
        assert isinstance(codec.deserialize("1"), int)

    def test_decimal_text_loads_float(self):
        assert NumberCodec().deserialize("2.5") == 2.5

    def test_serialize(self):
        codec = NumberCodec()
        assert codec.serialize(2) == "2"
        assert codec.serialize(2.5) == "2.5"

    def test_invalid_text_raises(self):
        with pytest.raises(ValueError):
            NumberCodec().deserialize("abc")


class TestBooleanCodec:
    def test_serialize(self):
        codec = BooleanCodec()
        assert codec.serialize(True) == "1"
        assert codec.serialize(False) == ""

    def test_deserialize(self):
        codec = BooleanCodec()
        assert codec.deserialize("1") is True
        assert codec.deserialize("") is False
        assert codec.deserialize("anything") is True


class TestJsonCodec:
    def test_compact_output(self):
        assert JsonCodec().serialize({"a": 1, "b": 2}) == '{"a":1,"b":2}'

    def test_deserialize_plain(self):
        assert JsonCodec().deserialize('{"a":1,"b":[1,2]}') == {"a": 1, "b": [1, 2]}

    def test_invalid_json_raises_value_error(self):
        with pytest.raises(ValueError):
            JsonCodec().deserialize("Dfsddf")

    def test_model_type(self):
        codec = JsonCodec(Preset)
        preset = codec.deserialize('{"a":1,"b":2}')
        assert preset == Preset(a=1, b=2)
        assert codec.serialize(preset) == '{"a":1,"b":2}'

    def test_model_rejects_wrong_shape(self):
        with pytest.raises(ValidationError):
            JsonCodec(Preset).deserialize('{"a":"x"}')

    def test_typed_container(self):
        codec = JsonCodec(dict[str, int])
        assert codec.deserialize('{"x":1}') == {"x": 1}
        with pytest.raises(ValueError):
            codec.deserialize('{"x":"not a number"}')
