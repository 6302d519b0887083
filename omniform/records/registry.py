"""Schema registry — loads record schemas from YAML files and binds their types.

Follows the same pattern as DataTypeRegistry:
- YAML-per-schema in definitions/ directory
- Lazy loading with _loaded guard
- Global singleton via get_schema_registry()

Definitions are kept as loaded; runtime RecordSchemas are built on first
access so nested schema references may point at any file in the directory.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from omniform.datatypes.registry import DataTypeRegistry, get_data_type_registry

from .schemas import RecordSchema, SchemaDefinition, SchemaField, SchemaSummary

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Registry of record schemas loaded from YAML files."""

    def __init__(
        self,
        definitions_dir: Optional[Path] = None,
        types: Optional[DataTypeRegistry] = None,
    ):
        if definitions_dir is None:
            env_dir = os.environ.get("OMNIFORM_SCHEMA_DIR")
            definitions_dir = Path(env_dir) if env_dir else Path(__file__).parent / "definitions"
        self.definitions_dir = definitions_dir
        self.types = types or get_data_type_registry()
        self._definitions: dict[str, SchemaDefinition] = {}
        self._schemas: dict[str, RecordSchema] = {}
        self._loaded = False

    def load(self) -> None:
        """Load all schema definitions from YAML files."""
        if self._loaded:
            return

        if not self.definitions_dir.exists():
            logger.warning(f"Schema definitions directory not found: {self.definitions_dir}")
            self._loaded = True
            return

        for yaml_file in sorted(self.definitions_dir.glob("*.yaml")):
            try:
                with open(yaml_file, "r") as f:
                    data = yaml.safe_load(f)
                if data is None:
                    continue
                definition = SchemaDefinition.model_validate(data)
                self._definitions[definition.schema_key] = definition
                logger.debug(f"Loaded schema: {definition.schema_key}")
            except Exception as e:
                logger.error(f"Failed to load schema from {yaml_file}: {e}")

        self._loaded = True
        logger.info(f"Loaded {len(self._definitions)} schema definitions")

    def add_definition(self, definition: SchemaDefinition) -> RecordSchema:
        """Register a schema definition and build it immediately."""
        self.load()
        self._definitions[definition.schema_key] = definition
        self._schemas.clear()
        return self.require(definition.schema_key)

    def _build(self, schema_key: str, building: tuple[str, ...] = ()) -> RecordSchema:
        if schema_key in self._schemas:
            return self._schemas[schema_key]
        if schema_key in building:
            chain = " -> ".join([*building, schema_key])
            raise ValueError(f"Nested schema cycle: {chain}")

        definition = self._definitions.get(schema_key)
        if definition is None:
            raise KeyError(
                f"Schema '{schema_key}' not found. Available: {self.list_keys()}"
            )

        schema = RecordSchema(
            name=definition.schema_key,
            collection_name=definition.collection_name,
            description=definition.description,
        )
        for fd in definition.fields:
            if fd.schema_key is not None:
                field_type = self._build(fd.schema_key, (*building, schema_key))
            else:
                field_type = self.types.require(fd.type)
            schema.add_field(
                SchemaField(
                    name=fd.name,
                    type=field_type,
                    label=fd.label,
                    required=fd.required,
                    ui=fd.ui,
                )
            )
        self._schemas[schema_key] = schema
        return schema

    def get(self, schema_key: str) -> Optional[RecordSchema]:
        """Get a built schema by key, or None if it is not defined."""
        self.load()
        if schema_key not in self._definitions:
            return None
        return self._build(schema_key)

    def require(self, schema_key: str) -> RecordSchema:
        """Get a built schema by key.

        Raises:
            KeyError: If the schema (or a data type it uses) is not defined
            ValueError: If nested schema references form a cycle
        """
        self.load()
        return self._build(schema_key)

    def get_definition(self, schema_key: str) -> Optional[SchemaDefinition]:
        self.load()
        return self._definitions.get(schema_key)

    def list_keys(self) -> list[str]:
        """List all schema keys."""
        self.load()
        return sorted(self._definitions.keys())

    def list_summaries(self) -> list[SchemaSummary]:
        """List schema summaries."""
        self.load()
        return [
            SchemaSummary(
                schema_key=d.schema_key,
                collection_name=d.collection_name,
                description=d.description,
                field_names=[f.name for f in d.fields],
                nested_schemas=[f.schema_key for f in d.fields if f.schema_key],
            )
            for d in sorted(self._definitions.values(), key=lambda d: d.schema_key)
        ]

    def count(self) -> int:
        self.load()
        return len(self._definitions)

    def reload(self) -> None:
        """Force reload all definitions."""
        self._loaded = False
        self._definitions.clear()
        self._schemas.clear()
        self.load()


# Global registry instance
_registry: Optional[SchemaRegistry] = None


def get_schema_registry() -> SchemaRegistry:
    """Get the global schema registry instance."""
    global _registry
    if _registry is None:
        _registry = SchemaRegistry()
        _registry.load()
    return _registry
