# tests/test_codec_registry.py
"""
Tests for hl7_field_tool.codec.registry.
"""

import pytest

import hl7_field_tool.codec  # noqa: F401  (registers bundled codecs)
from hl7_field_tool.codec import registry
from hl7_field_tool.codec.base import TypeCodec


@pytest.fixture
def isolated_registry():
    """
    Give a test a private copy of the module-level registry.
    Saves and restores the global mapping so tests don't leak state.
    """
    snap = dict(registry._REGISTRY)
    try:
        yield registry._REGISTRY
    finally:
        registry._REGISTRY.clear()
        registry._REGISTRY.update(snap)


class _UpperCodec:
    def decode(self, text):
        return text.upper() or None

    def encode(self, value):
        return "" if value is None else str(value).lower()


class _NoEncode:
    def decode(self, text):
        return text


# ------------------------------------------------------------------------------
# register()
# ------------------------------------------------------------------------------


def test_register_adds_codec(isolated_registry):
    registry.register("ZUP")(_UpperCodec)
    assert registry.decode("abc", "ZUP") == "ABC"
    assert registry.encode("ABC", "ZUP") == "abc"
    assert "ZUP" in registry.available_types()


def test_register_multiple_codes(isolated_registry):
    registry.register("ZA", "ZB")(_UpperCodec)
    assert isinstance(registry.get_codec("ZA"), _UpperCodec)
    assert isinstance(registry.get_codec("ZB"), _UpperCodec)


def test_register_duplicate_raises(isolated_registry):
    with pytest.raises(ValueError, match=r"^Codec already registered for data type 'NM'"):
        registry.register("NM")(_UpperCodec)


def test_register_requires_a_code():
    with pytest.raises(ValueError, match=r"^register\(\) needs at least one"):
        registry.register()


def test_register_rejects_non_class(isolated_registry):
    with pytest.raises(TypeError, match=r"^Only classes can be registered"):
        registry.register("ZX")(_UpperCodec())


def test_register_rejects_incomplete_class(isolated_registry):
    with pytest.raises(TypeError, match=r"does not implement TypeCodec protocol$"):
        registry.register("ZX")(_NoEncode)
    assert "ZX" not in registry.available_types()


# ------------------------------------------------------------------------------
# lookup
# ------------------------------------------------------------------------------


def test_bundled_codecs_are_registered():
    types = registry.available_types()
    for code in ("DT", "DTM", "TM", "NM", "SI", "ST", "TX", "FT", "ID", "IS"):
        assert code in types


def test_get_codec_falls_back_to_text():
    codec = registry.get_codec("NOT-A-TYPE")
    assert isinstance(codec, registry._REGISTRY[registry.FALLBACK_TYPE])


def test_get_codec_returns_protocol_instance():
    assert isinstance(registry.get_codec("DTM"), TypeCodec)


def test_get_codec_rejects_non_string():
    with pytest.raises(TypeError, match=r"^type_code must be str"):
        registry.get_codec(None)
