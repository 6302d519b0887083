"""Capability registry: stores behaviors and resolves which one applies.

Schema- and field-level capabilities hold a single unconditional behavior
per name; registering the same name again replaces it. Type-level
capabilities keep every registration: resolution walks them in
(priority, registration order) and selects the LAST one whose predicate
matches the data type. With equal priorities this is plain registration
order, so plugins register general-to-specific.

Registration is expected to finish before the first render; seal()
turns later registrations into errors.
"""

import itertools
import logging
from typing import Any, Callable, Iterable, Optional, Union

from omniform.datatypes.schemas import DataType

from .errors import RegistrySealedError, UndefinedCapabilityError
from .matcher import matches
from .schemas import (
    BehaviorRegistration,
    CandidateReport,
    TargetKind,
    predicate_from,
)

logger = logging.getLogger(__name__)

MixinEntry = Union[Callable[..., Any], dict[str, Any]]


class CapabilityRegistry:
    """Registry of schema, field and type behaviors."""

    def __init__(self):
        self._unconditional: dict[TargetKind, dict[str, BehaviorRegistration]] = {
            TargetKind.SCHEMA: {},
            TargetKind.FIELD: {},
        }
        self._type_behaviors: dict[str, list[BehaviorRegistration]] = {}
        self._sequence = itertools.count(1)
        self._sealed = False

    # -- Registration --

    def register(
        self,
        target_kind: Union[TargetKind, str],
        name: str,
        func: Callable[..., Any],
        predicate: Any = None,
        priority: int = 0,
        label: Optional[str] = None,
    ) -> BehaviorRegistration:
        """Install a behavior.

        Duplicates are never rejected: a later type registration whose
        predicate matches overrides earlier ones.

        Args:
            target_kind: schema, field or type
            name: Capability name (e.g. 'html')
            func: The behavior
            predicate: Predicate or shorthand (type behaviors only)
            priority: Coarse ordering ahead of registration order
            label: Audit label (default: the function name)

        Raises:
            RegistrySealedError: If the registry has been sealed
            ValueError: If a schema/field behavior carries a predicate
        """
        if self._sealed:
            raise RegistrySealedError(
                f"Cannot register '{name}': capability registry is sealed"
            )
        target_kind = TargetKind(target_kind)
        predicate = predicate_from(predicate)
        if target_kind != TargetKind.TYPE and predicate is not None:
            raise ValueError(
                f"{target_kind.value} behavior '{name}' cannot take a predicate"
            )

        registration = BehaviorRegistration(
            target_kind=target_kind,
            name=name,
            func=func,
            predicate=predicate,
            priority=priority,
            sequence=next(self._sequence),
            label=label or "",
        )

        if target_kind == TargetKind.TYPE:
            self._type_behaviors.setdefault(name, []).append(registration)
        else:
            if name in self._unconditional[target_kind]:
                logger.debug(f"Replacing {target_kind.value} behavior: {name}")
            self._unconditional[target_kind][name] = registration

        logger.debug(f"Registered {target_kind.value} behavior: {registration.describe()}")
        return registration

    def mixin(
        self,
        on_schema: Optional[Union[MixinEntry, Iterable[MixinEntry]]] = None,
        on_field: Optional[Union[MixinEntry, Iterable[MixinEntry]]] = None,
        on_type: Optional[Union[MixinEntry, Iterable[MixinEntry]]] = None,
    ) -> list[BehaviorRegistration]:
        """Install a plugin's behaviors in declaration order.

        Each entry is a function (its __name__ is the capability name) or a
        mapping with 'func' and optionally 'name', 'matches' and 'priority'.
        """
        installed = []
        for target_kind, entries in (
            (TargetKind.SCHEMA, on_schema),
            (TargetKind.FIELD, on_field),
            (TargetKind.TYPE, on_type),
        ):
            if entries is None:
                continue
            if callable(entries) or isinstance(entries, dict):
                entries = [entries]
            for entry in entries:
                if isinstance(entry, dict):
                    func = entry["func"]
                    installed.append(
                        self.register(
                            target_kind,
                            entry.get("name") or func.__name__,
                            func,
                            predicate=entry.get("matches"),
                            priority=entry.get("priority", 0),
                            label=entry.get("label"),
                        )
                    )
                else:
                    installed.append(self.register(target_kind, entry.__name__, entry))
        return installed

    def seal(self) -> None:
        """Reject further registrations."""
        self._sealed = True
        logger.info(
            f"Capability registry sealed: {self.count()} registrations"
        )

    @property
    def sealed(self) -> bool:
        return self._sealed

    # -- Lookup and resolution --

    def lookup(
        self, target_kind: Union[TargetKind, str], name: str
    ) -> list[BehaviorRegistration]:
        """Candidate registrations for a capability, in resolution order.

        An empty list means the capability is undefined.
        """
        target_kind = TargetKind(target_kind)
        if target_kind == TargetKind.TYPE:
            return sorted(self._type_behaviors.get(name, []), key=lambda r: r.order_key)
        registration = self._unconditional[target_kind].get(name)
        return [registration] if registration else []

    def resolve(
        self,
        target_kind: Union[TargetKind, str],
        name: str,
        instance: Optional[DataType] = None,
    ) -> Callable[..., Any]:
        """Resolve the behavior that applies.

        For type behaviors `instance` is the concrete data type; the last
        candidate whose predicate matches it is selected.

        Raises:
            UndefinedCapabilityError: If no registration applies
        """
        registration = self._select(TargetKind(target_kind), name, instance)
        if registration is None:
            subject = instance.name if isinstance(instance, DataType) else None
            raise UndefinedCapabilityError(name, TargetKind(target_kind).value, subject)
        return registration.func

    def resolve_optional(
        self,
        target_kind: Union[TargetKind, str],
        name: str,
        instance: Optional[DataType] = None,
    ) -> Optional[Callable[..., Any]]:
        """Like resolve(), but an undefined capability yields None."""
        registration = self._select(TargetKind(target_kind), name, instance)
        return registration.func if registration else None

    def _select(
        self, target_kind: TargetKind, name: str, instance: Optional[DataType]
    ) -> Optional[BehaviorRegistration]:
        candidates = self.lookup(target_kind, name)
        if target_kind != TargetKind.TYPE:
            return candidates[-1] if candidates else None
        if instance is None:
            raise ValueError(f"Resolving type behavior '{name}' requires a data type")

        selected = None
        for candidate in candidates:
            if matches(instance, candidate.predicate):
                selected = candidate
        return selected

    def capabilities_for(self, data_type: DataType) -> dict[str, Callable[..., Any]]:
        """Every type capability `data_type` resolves to, keyed by name."""
        resolved = {}
        for name in sorted(self._type_behaviors):
            registration = self._select(TargetKind.TYPE, name, data_type)
            if registration is not None:
                resolved[name] = registration.func
        return resolved

    def explain(self, name: str, data_type: DataType) -> list[CandidateReport]:
        """Audit the override chain for a type capability on `data_type`."""
        selected = self._select(TargetKind.TYPE, name, data_type)
        return [
            CandidateReport(
                label=c.label,
                predicate=c.predicate.describe() if c.predicate else None,
                priority=c.priority,
                sequence=c.sequence,
                matched=matches(data_type, c.predicate),
                selected=c is selected,
            )
            for c in self.lookup(TargetKind.TYPE, name)
        ]

    def list_names(self, target_kind: Union[TargetKind, str]) -> list[str]:
        target_kind = TargetKind(target_kind)
        if target_kind == TargetKind.TYPE:
            return sorted(self._type_behaviors.keys())
        return sorted(self._unconditional[target_kind].keys())

    def count(self) -> int:
        return (
            sum(len(v) for v in self._unconditional.values())
            + sum(len(v) for v in self._type_behaviors.values())
        )


# Global registry instance
_registry: Optional[CapabilityRegistry] = None


def get_capability_registry() -> CapabilityRegistry:
    """Get the global capability registry instance."""
    global _registry
    if _registry is None:
        _registry = CapabilityRegistry()
    return _registry
