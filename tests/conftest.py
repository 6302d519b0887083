"""Shared pytest fixtures for omniform tests.

Every test gets fresh registries; the global singletons are only used by
the API tests.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from omniform.capabilities.registry import CapabilityRegistry
from omniform.datatypes.registry import DataTypeRegistry
from omniform.html5 import install
from omniform.records.registry import SchemaRegistry
from omniform.records.schemas import RecordSchema, SchemaField
from omniform.rendering.composer import FormComposer


@pytest.fixture
def types() -> DataTypeRegistry:
    """Builtin data types, without any plugin installed."""
    registry = DataTypeRegistry()
    registry.load()
    return registry


@pytest.fixture
def capabilities() -> CapabilityRegistry:
    return CapabilityRegistry()


@pytest.fixture
def html5(capabilities: CapabilityRegistry, types: DataTypeRegistry) -> CapabilityRegistry:
    """Capability registry with the HTML5 plugin installed."""
    return install(capabilities, types)


@pytest.fixture
def composer(html5: CapabilityRegistry) -> FormComposer:
    return FormComposer(html5)


@pytest.fixture
def schemas(types: DataTypeRegistry, monkeypatch) -> SchemaRegistry:
    """Builtin schema definitions bound to the test's data types."""
    monkeypatch.delenv("OMNIFORM_SCHEMA_DIR", raising=False)
    return SchemaRegistry(types=types)


@pytest.fixture
def status_schema(types: DataTypeRegistry) -> RecordSchema:
    """Single required enumerated field, as in the end-to-end example."""
    status = types.enum_type("Status", {"draft": "Draft", "live": "Live"})
    return RecordSchema(
        "title", [SchemaField("status", status, label="Status", required=True)]
    )
