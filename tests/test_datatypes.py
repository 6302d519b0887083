"""Tests for data types and trait inheritance."""

from pathlib import Path

import pytest

from omniform.datatypes.registry import DataTypeRegistry
from omniform.datatypes.schemas import DataType, DataTypeDefinition, EnumValue


class TestResolvedTraits:
    """A specialized type inherits base traits; its own traits shadow them."""

    def test_inherits_base_traits(self):
        base = DataType("Text", traits={"value_kind": "string", "max_length": 200})
        child = DataType("Email", base=base, traits={"format": "email"})

        assert child.resolved_traits() == {
            "value_kind": "string",
            "max_length": 200,
            "format": "email",
        }

    def test_own_traits_shadow_base(self):
        base = DataType("Text", traits={"max_length": 200, "spec": {"a": 1, "b": 2}})
        child = DataType("Short", base=base, traits={"max_length": 20, "spec": {"a": 9}})

        resolved = child.resolved_traits()
        assert resolved["max_length"] == 20
        # Trait objects are replaced wholesale, not deep-merged
        assert resolved["spec"] == {"a": 9}
        assert base.resolved_traits()["max_length"] == 200

    def test_inheritance_through_several_levels(self):
        root = DataType("String", traits={"value_kind": "string"})
        mid = DataType("Name", base=root)
        leaf = DataType("FirstName", base=mid, traits={"autocomplete": "given-name"})

        assert leaf.value_kind == "string"
        assert leaf.lineage() == ["FirstName", "Name", "String"]
        assert leaf.is_a("String")
        assert not root.is_a("Name")

    def test_define_merges_into_own_traits(self):
        base = DataType("String", traits={"value_kind": "string"})
        child = DataType("Email", base=base)

        base.define(html_spec={"element_name": "input"})

        # Traits added to the base later are visible through the child
        assert child.trait("html_spec") == {"element_name": "input"}
        assert "html_spec" not in child.traits

    def test_resolved_traits_is_a_copy(self):
        data_type = DataType("String", traits={"value_kind": "string"})
        data_type.resolved_traits()["value_kind"] = "number"
        assert data_type.value_kind == "string"


class TestEnumValues:

    def test_bare_scalar_is_value_and_label(self):
        ev = EnumValue.model_validate("draft")
        assert ev.value == "draft"
        assert ev.label == "draft"

    def test_label_defaults_to_value(self):
        assert EnumValue(value=3).label == "3"

    def test_boolean_values_stay_boolean(self):
        ev = EnumValue.model_validate({"value": True, "label": "Yes"})
        assert ev.value is True

    def test_definition_stores_enum_values_as_trait(self):
        definition = DataTypeDefinition(
            name="Color", base=None, enum_values=["red", {"value": "green", "label": "Green"}]
        )
        data_type = DataType.from_definition(definition)

        assert data_type.has_trait("enum_values")
        assert [ev.label for ev in data_type.enum_values] == ["red", "Green"]

    def test_not_enumerated(self):
        assert DataType("String").enum_values == []


class TestDataTypeRegistry:

    def test_builtin_types_load(self, types):
        for name in ("String", "Number", "Boolean", "Email", "Integer", "DateTime", "YesNo"):
            assert types.get(name) is not None

    def test_builtin_hierarchy(self, types):
        assert types.require("Email").base.name == "String"
        assert types.require("Integer").value_kind == "number"
        assert types.require("YesNo").value_kind == "boolean"

    def test_enumeration_keeps_declaration_order(self, types):
        status = types.require("PublicationStatus")
        assert [ev.value for ev in status.enum_values] == ["draft", "review", "live"]

    def test_require_unknown_type(self, types):
        with pytest.raises(KeyError, match="Nope"):
            types.require("Nope")

    def test_define_data_type_creates_and_augments(self, types):
        created = types.define_data_type("Slug", base="String", pattern="[a-z-]+")
        assert created.trait("pattern") == "[a-z-]+"
        assert created.value_kind == "string"

        same = types.define_data_type("Slug", max_length=64)
        assert same is created
        assert created.trait("max_length") == 64

    def test_define_data_type_rejects_new_base(self, types):
        with pytest.raises(ValueError):
            types.define_data_type("Email", base="Number")

    def test_enum_type_from_mapping(self, types):
        status = types.enum_type("Status", {"draft": "Draft", "live": "Live"})

        assert status.base.name == "String"
        assert [(ev.value, ev.label) for ev in status.enum_values] == [
            ("draft", "Draft"),
            ("live", "Live"),
        ]

    def test_enum_type_from_pairs(self, types):
        rating = types.enum_type("Rating", [(1, "Poor"), (2, "Fine")], base="Integer")
        assert rating.value_kind == "number"
        assert rating.enum_values[1].label == "Fine"

    def test_specializations_built_after_bases(self, tmp_path: Path):
        (tmp_path / "types.yaml").write_text(
            "types:\n"
            "  - name: WorkEmail\n"
            "    base: Email\n"
            "  - name: Email\n"
            "    base: String\n"
            "  - name: String\n"
            "    traits: {value_kind: string}\n"
        )
        registry = DataTypeRegistry(definitions_dir=tmp_path)

        assert registry.require("WorkEmail").lineage() == ["WorkEmail", "Email", "String"]

    def test_unknown_base_rejected(self, types):
        with pytest.raises(ValueError, match="Unknown base"):
            types.add_definitions([DataTypeDefinition(name="Orphan", base="Missing")])

    def test_inheritance_cycle_rejected(self, types):
        with pytest.raises(ValueError, match="cycle"):
            types.add_definitions(
                [
                    DataTypeDefinition(name="A", base="B"),
                    DataTypeDefinition(name="B", base="A"),
                ]
            )

    def test_bad_file_is_skipped(self, tmp_path: Path):
        (tmp_path / "good.yaml").write_text("types:\n  - name: String\n")
        (tmp_path / "bad.yaml").write_text("types:\n  - base: String\n")
        registry = DataTypeRegistry(definitions_dir=tmp_path)

        assert registry.list_names() == ["String"]

    def test_extra_dirs(self, tmp_path: Path):
        (tmp_path / "local.yaml").write_text(
            "types:\n  - name: Iban\n    base: String\n"
        )
        registry = DataTypeRegistry(extra_dirs=[tmp_path])

        assert registry.require("Iban").base is registry.require("String")

    def test_missing_directory(self, tmp_path: Path):
        registry = DataTypeRegistry(definitions_dir=tmp_path / "absent")
        assert registry.count() == 0

    def test_failed_load_adds_nothing(self, tmp_path: Path):
        (tmp_path / "types.yaml").write_text(
            "types:\n"
            "  - name: String\n"
            "  - name: Orphan\n"
            "    base: Missing\n"
            "  - name: Email\n"
            "    base: String\n"
        )
        registry = DataTypeRegistry(definitions_dir=tmp_path)

        with pytest.raises(ValueError, match="Unknown base"):
            registry.load()
        # Not left half-loaded: later access retries the load
        with pytest.raises(ValueError):
            registry.list_names()

        (tmp_path / "types.yaml").write_text(
            "types:\n  - name: String\n  - name: Email\n    base: String\n"
        )
        assert registry.list_names() == ["Email", "String"]

    def test_failed_add_keeps_existing_types(self, types):
        before = types.list_names()
        with pytest.raises(ValueError):
            types.add_definitions(
                [
                    DataTypeDefinition(name="Handle", base="String"),
                    DataTypeDefinition(name="Orphan", base="Missing"),
                ]
            )
        assert types.list_names() == before
