"""Tests for record schemas, fields and the schema registry."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from omniform.records.registry import SchemaRegistry
from omniform.records.schemas import (
    FieldDefinition,
    RecordSchema,
    SchemaDefinition,
    SchemaField,
    UiHints,
    default_label,
)


class TestDefinitions:

    def test_field_needs_exactly_one_target(self):
        with pytest.raises(ValidationError):
            FieldDefinition(name="x")
        with pytest.raises(ValidationError):
            FieldDefinition(name="x", type="String", schema_key="address")

    def test_label_defaults_from_name(self):
        assert FieldDefinition(name="first_name", type="String").label == "First Name"
        assert default_label("zip") == "Zip"

    def test_duplicate_field_names_rejected(self):
        with pytest.raises(ValidationError, match="duplicate"):
            SchemaDefinition(
                schema_key="dup",
                fields=[
                    {"name": "a", "type": "String"},
                    {"name": "a", "type": "Number"},
                ],
            )

    def test_collection_name_defaults_to_key(self):
        assert SchemaDefinition(schema_key="note").collection_name == "note"


class TestRecordSchema:

    def test_declaration_order_preserved(self, types):
        schema = RecordSchema(
            "person",
            [
                SchemaField("zeta", types.require("String")),
                SchemaField("alpha", types.require("String")),
                SchemaField("mid", types.require("Number")),
            ],
        )
        assert schema.get_field_list() == ["zeta", "alpha", "mid"]
        assert [f.name for f in schema] == ["zeta", "alpha", "mid"]

    def test_duplicate_field_rejected(self, types):
        schema = RecordSchema("person", [SchemaField("name", types.require("String"))])
        with pytest.raises(ValueError, match="already has a field"):
            schema.add_field(SchemaField("name", types.require("FullName")))

    def test_field_is_immutable(self, types):
        field = SchemaField("name", types.require("String"))
        with pytest.raises(AttributeError):
            field.required = True

    def test_ui_hints_fixed_after_definition(self, types):
        field = SchemaField(
            "status", types.require("PublicationStatus"), ui=UiHints(presentation="radio")
        )
        with pytest.raises(ValidationError):
            field.ui.presentation = "select"
        with pytest.raises(ValidationError):
            field.ui.exclude = True
        assert field.presentation == "radio"
        assert not field.ui_exclude

    def test_nested_field(self, types):
        address = RecordSchema("address", [SchemaField("zip", types.require("PostalCode"))])
        field = SchemaField("address", address)
        assert field.is_nested
        assert not SchemaField("zip", types.require("PostalCode")).is_nested


class TestSchemaRegistry:

    def test_builtin_schemas(self, schemas):
        assert schemas.list_keys() == ["address", "article", "contact"]

    def test_binds_types_and_nested_schemas(self, schemas, types):
        contact = schemas.require("contact")

        assert contact.get_field("email").type is types.require("Email")
        address = contact.get_field("address")
        assert address.is_nested
        assert address.type.get_field_list() == ["street", "city", "zip"]
        assert contact.get_field("internal_id").ui_exclude

    def test_nested_schema_built_once(self, schemas):
        assert schemas.require("contact").get_field("address").type is schemas.require("address")

    def test_unknown_schema(self, schemas):
        assert schemas.get("nope") is None
        with pytest.raises(KeyError):
            schemas.require("nope")

    def test_unknown_field_type(self, schemas):
        definition = SchemaDefinition(
            schema_key="broken", fields=[{"name": "x", "type": "NoSuchType"}]
        )
        with pytest.raises(KeyError, match="NoSuchType"):
            schemas.add_definition(definition)

    def test_nested_cycle_rejected(self, tmp_path: Path, types):
        (tmp_path / "a.yaml").write_text(
            "schema_key: a\nfields:\n  - name: b\n    schema_key: b\n"
        )
        (tmp_path / "b.yaml").write_text(
            "schema_key: b\nfields:\n  - name: a\n    schema_key: a\n"
        )
        registry = SchemaRegistry(definitions_dir=tmp_path, types=types)

        with pytest.raises(ValueError, match="cycle"):
            registry.require("a")

    def test_env_override(self, tmp_path: Path, types, monkeypatch):
        (tmp_path / "note.yaml").write_text(
            "schema_key: note\nfields:\n  - name: body\n    type: Text\n"
        )
        monkeypatch.setenv("OMNIFORM_SCHEMA_DIR", str(tmp_path))
        registry = SchemaRegistry(types=types)

        assert registry.list_keys() == ["note"]

    def test_summaries(self, schemas):
        summary = {s.schema_key: s for s in schemas.list_summaries()}["contact"]
        assert summary.nested_schemas == ["address"]
        assert summary.field_names[0] == "full_name"
