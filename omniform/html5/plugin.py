"""HTML5 plugin — renders record schemas as plain HTML5 forms.

install() does two things:
1. Decorates data types with an `html_spec` trait naming the element and
   default attributes for their control (from definitions/html_types.yaml).
   Inheritance covers every type the table does not mention.
2. Installs schema, field and type behaviors into the capability registry.

Type behaviors are registered from most general to most specific:
input elements, then textareas, then enumerations. An enumerated type
whose base renders as an input therefore still renders as a choice.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from markupsafe import escape

from omniform.capabilities.registry import CapabilityRegistry, get_capability_registry
from omniform.datatypes.registry import DataTypeRegistry, get_data_type_registry
from omniform.datatypes.schemas import DataType, ENUM_VALUES_TRAIT
from omniform.records.schemas import RecordSchema, SchemaField
from omniform.rendering.attributes import attribute_string, attribute_value
from omniform.rendering.composer import FormComposer
from omniform.rendering.nodes import RenderNode
from omniform.rendering.paths import control_name, nested_prefix
from omniform.rendering.schemas import RenderOptions

from . import templates
from .enums import is_checked, render_enum
from .schemas import HTML_SPEC_TRAIT, HtmlTypeSpec, HtmlTypeTable

logger = logging.getLogger(__name__)

DEFAULT_TABLE = Path(__file__).parent / "definitions" / "html_types.yaml"

REQUIRED_MARKER = ' required="required"'


def define_html_type(
    types: DataTypeRegistry, name: str, element_name: str, **props: Any
) -> DataType:
    """Record which HTML element (and default attributes) renders a data type."""
    spec = HtmlTypeSpec(name=name, element_name=element_name, attributes=props)
    return types.define_data_type(name, **{HTML_SPEC_TRAIT: spec.as_trait()})


def load_html_types(path: Optional[Path] = None) -> list[HtmlTypeSpec]:
    """Read the HTML type table."""
    path = path or DEFAULT_TABLE
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return HtmlTypeTable.model_validate(data).html_types


# -- Schema behaviors --


def html_form(
    composer: FormComposer,
    schema: RecordSchema,
    options: RenderOptions,
    default_data: Mapping[str, Any],
) -> RenderNode:
    """Form envelope around the schema's fields, with an optional submit button."""
    return RenderNode(
        kind="form",
        name=schema.name,
        opening=templates.render(
            templates.FORM_OPEN, attributes=attribute_string(options.form_attributes)
        ),
        children=[composer.build_fields(schema, default_data, "")],
        closing=templates.render(templates.FORM_CLOSE, submit_button=options.submit_button),
    )


# -- Field behaviors --


def field_html(
    composer: FormComposer,
    field: SchemaField,
    default_value: Any,
    name_prefix: str,
    control_options: dict[str, Any],
) -> RenderNode:
    """Labeled control, or a labeled container for a nested schema."""
    name = control_name(name_prefix, field.name)
    if field.is_nested:
        nested_data = default_value if isinstance(default_value, Mapping) else None
        return RenderNode(
            kind="object",
            name=name,
            opening=templates.render(
                templates.OBJECT_OPEN,
                collection_name=field.type.collection_name,
                label=field.label,
            ),
            children=[
                composer.build_fields(
                    field.type, nested_data, nested_prefix(name_prefix, field.name)
                )
            ],
            closing=templates.OBJECT_CLOSE,
        )

    control = composer.type_behavior(field, control_options, default_value, name_prefix)
    return RenderNode(
        kind="field",
        name=name,
        opening=f"<label>{escape(field.label)} ",
        children=[control],
        closing="</label>",
    )


# -- Type behaviors --


def input_html(
    data_type: DataType,
    field: SchemaField,
    options: dict[str, Any],
    default_value: Any,
    name_prefix: str,
) -> str:
    props = dict(options)
    if props.get("type") == "checkbox":
        if default_value is not None and is_checked(default_value):
            props["checked"] = True
    elif default_value is not None:
        props["value"] = attribute_value(default_value)
    required = REQUIRED_MARKER if field.required else ""
    name = escape(control_name(name_prefix, field.name))
    return f'<input{attribute_string(props, ignore=("element_name", "name"))}{required} name="{name}" />'


def textarea_html(
    data_type: DataType,
    field: SchemaField,
    options: dict[str, Any],
    default_value: Any,
    name_prefix: str,
) -> str:
    required = REQUIRED_MARKER if field.required else ""
    name = escape(control_name(name_prefix, field.name))
    text = escape(attribute_value(default_value)) if default_value is not None else ""
    attrs = attribute_string(options, ignore=("element_name", "name", "value"))
    return f'<textarea{attrs}{required} name="{name}">{text}</textarea>'


def enum_html(
    data_type: DataType,
    field: SchemaField,
    options: dict[str, Any],
    default_value: Any,
    name_prefix: str,
) -> str:
    return render_enum(data_type, field, options, default_value, name_prefix)


def install(
    capabilities: Optional[CapabilityRegistry] = None,
    types: Optional[DataTypeRegistry] = None,
    table_path: Optional[Path] = None,
) -> CapabilityRegistry:
    """Decorate data types and install the HTML5 behaviors.

    Returns:
        The capability registry the behaviors were installed into
    """
    capabilities = capabilities or get_capability_registry()
    types = types or get_data_type_registry()

    html_types = load_html_types(table_path)
    for spec in html_types:
        define_html_type(types, spec.name, spec.element_name, **spec.attributes)

    capabilities.mixin(
        on_schema=[html_form],
        on_field={"name": "html", "func": field_html},
        on_type=[
            {
                "name": "html",
                "func": input_html,
                "matches": {HTML_SPEC_TRAIT: {"element_name": "input"}},
            },
            {
                "name": "html",
                "func": textarea_html,
                "matches": {HTML_SPEC_TRAIT: {"element_name": "textarea"}},
            },
            {
                "name": "html",
                "func": enum_html,
                "matches": ENUM_VALUES_TRAIT,
            },
        ],
    )
    logger.info(f"HTML5 plugin installed: {len(html_types)} html types")
    return capabilities


def render_form(
    schema: RecordSchema,
    options: Optional[Any] = None,
    default_data: Optional[Mapping[str, Any]] = None,
    capabilities: Optional[CapabilityRegistry] = None,
) -> str:
    """Render a schema as an HTML form through the given (or global) registry."""
    return FormComposer(capabilities).render_schema(schema, options, default_data)
