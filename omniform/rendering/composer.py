"""Form composer: orchestrates recursive rendering of a schema.

Control flow:
1. build_schema() resolves the schema-level form behavior, which calls
   build_fields() for the top-level field list
2. build_fields() walks fields in declaration order, skipping excluded ones
3. build_field() resolves the field-level behavior; for a nested schema it
   recurses into build_fields() under a dotted prefix, otherwise it calls
   type_behavior()
4. type_behavior() resolves the type-level behavior for the field's data
   type and calls it with merged control options

Behavior signatures:
    schema form:   func(composer, schema, options, default_data) -> RenderNode
    schema fields: func(composer, schema, default_data, name_prefix) -> RenderNode
    field:         func(composer, field, default_value, name_prefix, control_options) -> RenderNode
    type:          func(data_type, field, options, default_value, name_prefix) -> str | RenderNode
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from omniform.capabilities.registry import CapabilityRegistry, get_capability_registry
from omniform.capabilities.schemas import TargetKind
from omniform.records.schemas import RecordSchema, SchemaField

from .nodes import RenderNode
from .paths import control_name
from .schemas import RenderOptions

logger = logging.getLogger(__name__)


class FormComposer:
    """Renders record schemas through the behaviors of a capability registry.

    Usage:
        composer = FormComposer(registry)
        html = composer.render_schema(schema, {"submit_button": "Save"}, data)
    """

    form_capability = "html_form"
    fields_capability = "html_fields"
    field_capability = "html"
    type_capability = "html"
    # Trait holding a data type's default control options
    defaults_trait = "html_spec"

    def __init__(self, registry: Optional[CapabilityRegistry] = None):
        self.registry = registry or get_capability_registry()

    # -- Schema level --

    def build_schema(
        self,
        schema: RecordSchema,
        options: Optional[Union[RenderOptions, Mapping[str, Any]]] = None,
        default_data: Optional[Mapping[str, Any]] = None,
    ) -> RenderNode:
        if not isinstance(options, RenderOptions):
            options = RenderOptions.model_validate(dict(options or {}))
        wrapper = self.registry.resolve(TargetKind.SCHEMA, self.form_capability)
        return wrapper(self, schema, options, default_data or {})

    def render_schema(
        self,
        schema: RecordSchema,
        options: Optional[Union[RenderOptions, Mapping[str, Any]]] = None,
        default_data: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a whole schema (form envelope included) to markup.

        Raises:
            UndefinedCapabilityError: If any rendered field's type has no
                applicable type behavior
        """
        logger.debug(f"Rendering schema: {schema.name}")
        return self.build_schema(schema, options, default_data).flatten()

    # -- Field list --

    def build_fields(
        self,
        schema: RecordSchema,
        default_data: Optional[Mapping[str, Any]] = None,
        name_prefix: str = "",
    ) -> RenderNode:
        override = self.registry.resolve_optional(TargetKind.SCHEMA, self.fields_capability)
        if override is not None:
            return override(self, schema, default_data, name_prefix)

        node = RenderNode(kind="fields", name=name_prefix.rstrip("."), child_suffix="\n")
        for field_name in schema.get_field_list():
            field = schema.get_field(field_name)
            if field.ui_exclude:
                continue
            default_value = (
                default_data.get(field.name) if isinstance(default_data, Mapping) else None
            )
            node.children.append(self.build_field(field, default_value, name_prefix))
        return node

    def render_fields(
        self,
        schema: RecordSchema,
        default_data: Optional[Mapping[str, Any]] = None,
        name_prefix: str = "",
    ) -> str:
        return self.build_fields(schema, default_data, name_prefix).flatten()

    # -- Single field --

    def build_field(
        self,
        field: SchemaField,
        default_value: Any = None,
        name_prefix: str = "",
        control_options: Optional[Mapping[str, Any]] = None,
    ) -> RenderNode:
        behavior = self.registry.resolve(TargetKind.FIELD, self.field_capability)
        return behavior(self, field, default_value, name_prefix, dict(control_options or {}))

    def render_field(
        self,
        field: SchemaField,
        default_value: Any = None,
        name_prefix: str = "",
        control_options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        return self.build_field(field, default_value, name_prefix, control_options).flatten()

    # -- Type level --

    def control_options(
        self, field: SchemaField, options: Optional[Mapping[str, Any]] = None
    ) -> dict[str, Any]:
        """Type defaults, overridden by field UI attributes, overridden by call options."""
        merged = dict(field.type.trait(self.defaults_trait) or {})
        merged.update(field.ui.attributes)
        merged.update(options or {})
        return merged

    def type_behavior(
        self,
        field: SchemaField,
        options: Optional[Mapping[str, Any]] = None,
        default_value: Any = None,
        name_prefix: str = "",
    ) -> RenderNode:
        """Resolve and invoke the type behavior for a non-nested field.

        Raises:
            UndefinedCapabilityError: If no type behavior matches the field's type
        """
        if field.is_nested:
            raise TypeError(f"Field '{field.name}' is a nested schema, not a data type")
        data_type = field.type
        behavior = self.registry.resolve(TargetKind.TYPE, self.type_capability, data_type)
        output = behavior(
            data_type, field, self.control_options(field, options), default_value, name_prefix
        )
        if isinstance(output, RenderNode):
            return output
        return RenderNode(
            kind="control", name=control_name(name_prefix, field.name), opening=output
        )
