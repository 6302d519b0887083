"""Capability dispatch: behaviors registered against schemas, fields and data types.

Type-level behaviors carry an optional predicate over a data type's resolved
traits. Among matching candidates, the last in (priority, registration order)
wins, so plugins register general behaviors first and specific ones after.
"""

from .errors import RegistrySealedError, UndefinedCapabilityError
from .matcher import matches
from .registry import CapabilityRegistry, get_capability_registry
from .schemas import (
    BehaviorRegistration,
    CandidateReport,
    HasTrait,
    Predicate,
    TargetKind,
    TraitValues,
    predicate_from,
)

__all__ = [
    "BehaviorRegistration",
    "CandidateReport",
    "CapabilityRegistry",
    "HasTrait",
    "Predicate",
    "RegistrySealedError",
    "TargetKind",
    "TraitValues",
    "UndefinedCapabilityError",
    "get_capability_registry",
    "matches",
    "predicate_from",
]
