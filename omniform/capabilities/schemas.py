"""Capability registration models.

Predicates form a tagged union discriminated on `kind`:
- HasTrait: the data type declares the trait (own or inherited)
- TraitValues: the declared trait is a mapping whose listed sub-keys
  equal the given literal values
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, Field


class TargetKind(str, Enum):
    """Level of the schema hierarchy a behavior attaches to."""

    SCHEMA = "schema"
    FIELD = "field"
    TYPE = "type"


class HasTrait(BaseModel):
    """Matches types whose resolved traits contain `trait`."""

    kind: Literal["has_trait"] = "has_trait"
    trait: str

    def describe(self) -> str:
        return f"has {self.trait}"


class TraitValues(BaseModel):
    """Matches types whose `trait` mapping carries all of `values`."""

    kind: Literal["trait_values"] = "trait_values"
    trait: str
    values: dict[str, Any] = Field(default_factory=dict)

    def describe(self) -> str:
        pairs = ", ".join(f"{k}={v!r}" for k, v in self.values.items())
        return f"{self.trait}({pairs})"


Predicate = Annotated[Union[HasTrait, TraitValues], Field(discriminator="kind")]


def predicate_from(spec: Any) -> Optional[Union[HasTrait, TraitValues]]:
    """Build a predicate from the shorthand plugins write in mixin specs.

    - None -> no predicate (matches every type)
    - "enum_values" -> HasTrait("enum_values")
    - {"html_spec": {"element_name": "input"}} -> TraitValues
    - {"kind": ...} -> the tagged predicate it describes

    Raises:
        TypeError: If the shorthand is not recognized
    """
    if spec is None or isinstance(spec, (HasTrait, TraitValues)):
        return spec
    if isinstance(spec, str):
        return HasTrait(trait=spec)
    if isinstance(spec, dict):
        if "kind" in spec:
            if spec["kind"] == "has_trait":
                return HasTrait.model_validate(spec)
            if spec["kind"] == "trait_values":
                return TraitValues.model_validate(spec)
        elif len(spec) == 1:
            trait, values = next(iter(spec.items()))
            if isinstance(values, dict):
                return TraitValues(trait=trait, values=values)
    raise TypeError(f"Unrecognized predicate specification: {spec!r}")


@dataclass
class BehaviorRegistration:
    """A behavior installed into the capability registry."""

    target_kind: TargetKind
    name: str
    func: Callable[..., Any]
    predicate: Optional[Union[HasTrait, TraitValues]] = None
    priority: int = 0
    sequence: int = 0
    label: str = ""

    def __post_init__(self):
        if not self.label:
            self.label = getattr(self.func, "__name__", repr(self.func))

    @property
    def order_key(self) -> tuple[int, int]:
        return (self.priority, self.sequence)

    def describe(self) -> str:
        predicate = self.predicate.describe() if self.predicate else "any type"
        return f"{self.label} [{predicate}] priority={self.priority} seq={self.sequence}"


class CandidateReport(BaseModel):
    """One row of an override-chain audit for a (capability, type) pair."""

    label: str
    predicate: Optional[str] = None
    priority: int = 0
    sequence: int = 0
    matched: bool = False
    selected: bool = False
