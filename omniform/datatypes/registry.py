"""Data type registry — loads and serves data types from YAML files.

Follows the same pattern as the other definition registries:
- YAML files in definitions/ directory (each holds a `types:` list)
- Lazy loading with _loaded guard
- In-memory dict keyed by type name
- Global singleton via get_data_type_registry()

Base types are built before their specializations regardless of the
order definitions appear in, so a file may declare Email before String.
"""

import logging
import os
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from .schemas import DataType, DataTypeDefinition, EnumValue, ENUM_VALUES_TRAIT

logger = logging.getLogger(__name__)


class DataTypeRegistry:
    """Registry of data types loaded from YAML definition files."""

    def __init__(
        self,
        definitions_dir: Optional[Path] = None,
        extra_dirs: Optional[list[Path]] = None,
    ):
        if definitions_dir is None:
            definitions_dir = Path(__file__).parent / "definitions"
        self.definitions_dir = definitions_dir
        self.extra_dirs = list(extra_dirs or [])
        self._types: dict[str, DataType] = {}
        self._loaded = False

    def load(self) -> None:
        """Load all data type definitions from YAML files."""
        if self._loaded:
            return

        definitions: list[DataTypeDefinition] = []
        for directory in [self.definitions_dir, *self.extra_dirs]:
            definitions.extend(self._read_dir(directory))

        # Mark loaded first so define_data_type() does not re-enter load()
        self._loaded = True
        try:
            self.add_definitions(definitions)
        except ValueError:
            # Nothing was added; the next access retries and raises again
            self._loaded = False
            raise
        logger.info(f"Loaded {len(self._types)} data types")

    def _read_dir(self, directory: Path) -> list[DataTypeDefinition]:
        if not directory.exists():
            logger.warning(f"Data type definitions directory not found: {directory}")
            return []

        definitions = []
        for yaml_file in sorted(directory.glob("*.yaml")):
            try:
                with open(yaml_file, "r") as f:
                    data = yaml.safe_load(f)
                if data is None:
                    continue
                for entry in data.get("types", []):
                    definitions.append(DataTypeDefinition.model_validate(entry))
                logger.debug(f"Read data type file: {yaml_file.name}")
            except Exception as e:
                logger.error(f"Failed to load data types from {yaml_file}: {e}")
        return definitions

    def add_definitions(self, definitions: Iterable[DataTypeDefinition]) -> None:
        """Build runtime types from definitions, bases first.

        Either every definition is added or none is.

        Raises:
            ValueError: If a base type is unknown or the hierarchy has a cycle
        """
        pending = {d.name: d for d in definitions}
        built: dict[str, DataType] = {}
        visiting: set[str] = set()

        def build(name: str) -> DataType:
            if name in built:
                return built[name]
            if name in self._types and name not in pending:
                return self._types[name]
            if name not in pending:
                raise ValueError(f"Unknown base data type: '{name}'")
            if name in visiting:
                raise ValueError(f"Data type inheritance cycle through '{name}'")
            visiting.add(name)
            definition = pending[name]
            base = build(definition.base) if definition.base else None
            visiting.discard(name)
            data_type = DataType.from_definition(definition, base=base)
            built[name] = data_type
            return data_type

        for name in pending:
            build(name)

        self._types.update(built)
        for name in built:
            logger.debug(f"Loaded data type: {name}")

    def get(self, name: str) -> Optional[DataType]:
        """Get a data type by name."""
        self.load()
        return self._types.get(name)

    def require(self, name: str) -> DataType:
        """Get a data type by name or raise KeyError."""
        data_type = self.get(name)
        if data_type is None:
            raise KeyError(
                f"Data type '{name}' not found. Available: {self.list_names()}"
            )
        return data_type

    def define_data_type(
        self, name: str, base: Optional[str] = None, **traits: Any
    ) -> DataType:
        """Create a data type, or merge traits into an existing one."""
        self.load()
        existing = self._types.get(name)
        if existing is not None:
            if base is not None and (existing.base is None or existing.base.name != base):
                raise ValueError(
                    f"Data type '{name}' already exists with a different base"
                )
            return existing.define(**traits)

        base_type = self.require(base) if base else None
        data_type = DataType(name=name, base=base_type, traits=traits)
        self._types[name] = data_type
        logger.debug(f"Defined data type: {name}")
        return data_type

    def enum_type(
        self,
        name: str,
        values: Any,
        base: Optional[str] = "String",
        **traits: Any,
    ) -> DataType:
        """Define an enumerated data type.

        Args:
            name: Type name
            values: A mapping of value -> label, or a sequence of EnumValues,
                (value, label) pairs, dicts or bare scalars
            base: Base type name
        """
        if isinstance(values, dict):
            entries = [EnumValue(value=v, label=label) for v, label in values.items()]
        else:
            entries = []
            for item in values:
                if isinstance(item, tuple):
                    item = {"value": item[0], "label": item[1]}
                entries.append(EnumValue.model_validate(item))
        traits[ENUM_VALUES_TRAIT] = [ev.model_dump() for ev in entries]
        return self.define_data_type(name, base=base, **traits)

    def list_all(self) -> list[DataType]:
        self.load()
        return list(self._types.values())

    def list_names(self) -> list[str]:
        """List all data type names."""
        self.load()
        return sorted(self._types.keys())

    def count(self) -> int:
        self.load()
        return len(self._types)

    def reload(self) -> None:
        """Force reload all definitions.

        Traits added by plugins are lost; plugins must be installed again.
        """
        self._loaded = False
        self._types.clear()
        self.load()


# Global registry instance
_registry: Optional[DataTypeRegistry] = None


def get_data_type_registry() -> DataTypeRegistry:
    """Get the global data type registry instance."""
    global _registry
    if _registry is None:
        extra = os.environ.get("OMNIFORM_TYPES_DIR")
        _registry = DataTypeRegistry(extra_dirs=[Path(extra)] if extra else None)
        _registry.load()
    return _registry
