# tests/conftest.py
"""
Shared fixtures for hl7_field_tool tests.
"""

import pytest

from hl7_field_tool.dictionary import VersionDictionary, load_dictionary
from hl7_field_tool.dictionary.models import ComponentDeclaration
from hl7_field_tool.node import FieldNode
from hl7_field_tool.schema import SchemaResolver

# Small hand-written dictionary covering each structural case.
SAMPLE_FIELDS = {
    "ST": {"desc": "String"},
    "NM": {"desc": "Numeric"},
    "DTM": {"desc": "Date/Time"},
    "ID": {"desc": "Coded value"},
    "PAIR": {
        "components": [
            {"dt": "ST", "desc": "label", "opt": "R"},
            {"dt": "NM", "desc": "amount", "opt": "O"},
        ]
    },
    "INNER": {
        "components": [
            {"dt": "NM", "desc": "count"},
            {"dt": "ST", "desc": "note"},
        ]
    },
    "OUTER": {
        "components": [
            {"dt": "ST", "desc": "first"},
            {"dt": "ST", "desc": "second"},
            {"dt": "INNER", "desc": "nested"},
        ]
    },
    "TS": {
        "components": [
            {"dt": "ST", "desc": "time", "opt": "R"},
            {"dt": "ID", "desc": "degreeOfPrecision", "opt": "B"},
        ]
    },
    "BROKEN": {
        "components": [
            {"dt": "ST", "desc": "ok"},
            {"dt": "NOPE", "desc": "missing"},
        ]
    },
}


@pytest.fixture
def sample_dictionary():
    return VersionDictionary("test", SAMPLE_FIELDS)


@pytest.fixture
def v25():
    return load_dictionary("2.5")


@pytest.fixture
def make_node(sample_dictionary):
    """Factory: build a root FieldNode from the test dictionary."""

    def _make(data_type, overrides=None, **kwargs):
        resolver = SchemaResolver(sample_dictionary, overrides)
        decl = ComponentDeclaration(dt=data_type, desc=data_type)
        return FieldNode(decl, resolver, **kwargs)

    return _make
