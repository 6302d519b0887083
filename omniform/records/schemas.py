"""Record schema models: fields and schemas.

SchemaDefinitions are declarative (loaded from YAML). RecordSchema and
SchemaField are the runtime objects the renderer walks: field types are
bound to DataType instances, or to another RecordSchema for nested fields.
"""

from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from omniform.datatypes.schemas import DataType


class UiHints(BaseModel):
    """Presentation hints attached to a field at definition time."""

    model_config = ConfigDict(frozen=True)

    presentation: Optional[str] = Field(
        default=None,
        description="Requested enumeration presentation: 'select', 'radio', 'checkbox'",
    )
    exclude: bool = Field(
        default=False,
        description="Suppress the field from generated output",
    )
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Control options forwarded to the type behavior, "
        "overriding the data type's defaults",
    )


class FieldDefinition(BaseModel):
    """A field as declared in a schema definition file."""

    name: str
    label: str = ""
    type: Optional[str] = Field(default=None, description="Data type name")
    schema_key: Optional[str] = Field(
        default=None, description="Nested schema key (composite field)"
    )
    required: bool = False
    ui: UiHints = Field(default_factory=UiHints)

    @model_validator(mode="after")
    def validate_target(self) -> "FieldDefinition":
        """Ensure exactly one of type / schema_key is set."""
        if (self.type is None) == (self.schema_key is None):
            raise ValueError(
                f"Field '{self.name}' must set exactly one of 'type' or 'schema_key'"
            )
        if not self.label:
            self.label = default_label(self.name)
        return self


class SchemaDefinition(BaseModel):
    """A record schema as declared in a definition file."""

    schema_key: str = Field(..., description="Unique identifier (snake_case)")
    collection_name: str = ""
    description: str = ""
    fields: list[FieldDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_fields(self) -> "SchemaDefinition":
        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(
                f"Schema '{self.schema_key}' has duplicate field names: {duplicates}"
            )
        if not self.collection_name:
            self.collection_name = self.schema_key
        return self


class SchemaSummary(BaseModel):
    """Lightweight summary for listing endpoints."""

    schema_key: str
    collection_name: str
    description: str = ""
    field_names: list[str] = Field(default_factory=list)
    nested_schemas: list[str] = Field(default_factory=list)


def default_label(name: str) -> str:
    """Derive a display label from a field name ('first_name' -> 'First Name')."""
    return " ".join(part.capitalize() for part in name.replace("-", "_").split("_") if part)


class SchemaField:
    """A field bound to its data type (or nested schema).

    Immutable once constructed.
    """

    __slots__ = ("name", "label", "type", "required", "ui")

    def __init__(
        self,
        name: str,
        type: Union[DataType, "RecordSchema"],
        label: str = "",
        required: bool = False,
        ui: Optional[UiHints] = None,
    ):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "label", label or default_label(name))
        object.__setattr__(self, "required", required)
        object.__setattr__(self, "ui", (ui or UiHints()).model_copy(deep=True))

    def __setattr__(self, key, value):
        raise AttributeError(f"SchemaField '{self.name}' is immutable")

    @property
    def is_nested(self) -> bool:
        return isinstance(self.type, RecordSchema)

    @property
    def ui_exclude(self) -> bool:
        return self.ui.exclude

    @property
    def presentation(self) -> Optional[str]:
        return self.ui.presentation

    def __repr__(self) -> str:
        return f"SchemaField({self.name!r}, type={self.type.name!r})"


class RecordSchema:
    """Ordered, named collection of fields. Declaration order is render order."""

    def __init__(
        self,
        name: str,
        fields: Optional[list[SchemaField]] = None,
        collection_name: str = "",
        description: str = "",
    ):
        self.name = name
        self.collection_name = collection_name or name
        self.description = description
        self._fields: dict[str, SchemaField] = {}
        for field in fields or []:
            self.add_field(field)

    def add_field(self, field: SchemaField) -> None:
        """Append a field.

        Raises:
            ValueError: If a field with the same name already exists
        """
        if field.name in self._fields:
            raise ValueError(
                f"Schema '{self.name}' already has a field named '{field.name}'"
            )
        self._fields[field.name] = field

    def get_field_list(self) -> list[str]:
        """Field names in declaration order."""
        return list(self._fields.keys())

    def get_field(self, name: str) -> Optional[SchemaField]:
        return self._fields.get(name)

    @property
    def fields(self) -> list[SchemaField]:
        return list(self._fields.values())

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self._fields)

    def summary(self) -> SchemaSummary:
        return SchemaSummary(
            schema_key=self.name,
            collection_name=self.collection_name,
            description=self.description,
            field_names=self.get_field_list(),
            nested_schemas=[f.type.name for f in self.fields if f.is_nested],
        )

    def __repr__(self) -> str:
        return f"RecordSchema({self.name!r}, fields={self.get_field_list()!r})"
