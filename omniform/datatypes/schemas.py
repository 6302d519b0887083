"""Data type schemas — definition models and the runtime DataType.

DataTypeDefinitions are loaded from YAML files and validated here.
DataType is the runtime object the capability engine inspects: it links
to its base type and exposes the resolved trait map.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator

ENUM_VALUES_TRAIT = "enum_values"
VALUE_KIND_TRAIT = "value_kind"

EnumScalar = Union[bool, int, float, str]


class EnumValue(BaseModel):
    """A single enumerated value with its display label."""

    value: EnumScalar
    label: str = ""

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_scalar(cls, data: Any) -> Any:
        """Accept a bare scalar as both value and label."""
        if isinstance(data, (bool, int, float, str)):
            return {"value": data, "label": str(data)}
        return data

    @model_validator(mode="after")
    def _default_label(self) -> "EnumValue":
        if not self.label:
            self.label = str(self.value)
        return self


class DataTypeDefinition(BaseModel):
    """Declarative definition of a data type, as found in definition files."""

    name: str = Field(..., description="Unique type name (PascalCase, e.g. 'Email')")
    base: Optional[str] = Field(
        default=None,
        description="Name of the more general type this one specializes",
    )
    description: str = Field(default="", description="What values of this type hold")
    traits: dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form declared traits, e.g. {'value_kind': 'number'}",
    )
    enum_values: list[EnumValue] = Field(
        default_factory=list,
        description="Ordered enumerated values; stored as the 'enum_values' trait",
    )


class DataTypeSummary(BaseModel):
    """Lightweight summary for listing endpoints."""

    name: str
    base: Optional[str] = None
    value_kind: str = "string"
    enumerated: bool = False


class DataTypeDetail(BaseModel):
    """A data type with its resolved traits and installed capabilities."""

    name: str
    base: Optional[str] = None
    description: str = ""
    lineage: list[str] = Field(default_factory=list)
    resolved_traits: dict[str, Any] = Field(default_factory=dict)
    capabilities: list[str] = Field(default_factory=list)


class DataType:
    """Runtime data type.

    Own traits are mutable only through define(), which plugins call while
    installing themselves; everything else reads the resolved trait map.
    """

    def __init__(
        self,
        name: str,
        base: Optional["DataType"] = None,
        traits: Optional[dict[str, Any]] = None,
        description: str = "",
    ):
        self.name = name
        self.base = base
        self.description = description
        self.traits: dict[str, Any] = dict(traits or {})

    @classmethod
    def from_definition(
        cls, definition: DataTypeDefinition, base: Optional["DataType"] = None
    ) -> "DataType":
        traits = dict(definition.traits)
        if definition.enum_values:
            traits[ENUM_VALUES_TRAIT] = [ev.model_dump() for ev in definition.enum_values]
        return cls(
            name=definition.name,
            base=base,
            traits=traits,
            description=definition.description,
        )

    def define(self, **traits: Any) -> "DataType":
        """Merge traits into this type's own trait map."""
        self.traits.update(traits)
        return self

    def resolved_traits(self) -> dict[str, Any]:
        """Own traits merged over the base type's resolved traits.

        The merge is shallow: a trait object declared here replaces the
        base's trait object of the same name wholesale.
        """
        resolved = self.base.resolved_traits() if self.base is not None else {}
        resolved.update(self.traits)
        return resolved

    def has_trait(self, key: str) -> bool:
        return key in self.resolved_traits()

    def trait(self, key: str, default: Any = None) -> Any:
        return self.resolved_traits().get(key, default)

    @property
    def enum_values(self) -> list[EnumValue]:
        """Resolved enumeration in declaration order (empty if not enumerated)."""
        raw = self.trait(ENUM_VALUES_TRAIT) or []
        return [ev if isinstance(ev, EnumValue) else EnumValue.model_validate(ev) for ev in raw]

    @property
    def value_kind(self) -> str:
        return self.trait(VALUE_KIND_TRAIT, "string")

    def lineage(self) -> list[str]:
        """Type names from this type up to its root."""
        names = []
        current: Optional[DataType] = self
        while current is not None:
            names.append(current.name)
            current = current.base
        return names

    def is_a(self, name: str) -> bool:
        return name in self.lineage()

    def summary(self) -> DataTypeSummary:
        return DataTypeSummary(
            name=self.name,
            base=self.base.name if self.base else None,
            value_kind=self.value_kind,
            enumerated=self.has_trait(ENUM_VALUES_TRAIT),
        )

    def __repr__(self) -> str:
        return f"DataType({self.name!r})"
