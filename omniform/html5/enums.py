"""Enumeration presentations: select list, radio group, checkbox.

render_enum() is the type behavior for enumerated data types. It honors
the field's explicit presentation hint when the hint applies, and falls
back to the select list otherwise (an unknown hint, or a checkbox requested
for an enumeration that is not boolean-valued, is not an error).

Default values are compared with enumerated values as text, so a submitted
"live" selects the value "live" and True selects "true".
"""

import logging
from typing import Any, Mapping

from markupsafe import escape

from omniform.datatypes.schemas import DataType
from omniform.records.schemas import SchemaField
from omniform.rendering.attributes import attribute_string, attribute_value
from omniform.rendering.paths import control_name

from . import templates

logger = logging.getLogger(__name__)

SELECT = "select"
RADIO = "radio"
CHECKBOX = "checkbox"

_TRUTHY_TEXT = {"true", "on", "1", "yes"}


def _as_text(value: Any) -> Any:
    return None if value is None else attribute_value(value)


def is_checked(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_TEXT
    return bool(value)


def enum_as_select(
    data_type: DataType,
    field: SchemaField,
    options: Mapping[str, Any],
    default_value: Any,
    name_prefix: str,
) -> str:
    selected = _as_text(default_value)
    return templates.render(
        templates.SELECT,
        name=control_name(name_prefix, field.name),
        required=field.required,
        options=[
            {
                "value": attribute_value(ev.value),
                "label": ev.label,
                "selected": attribute_value(ev.value) == selected,
            }
            for ev in data_type.enum_values
        ],
    )


def enum_as_radio(
    data_type: DataType,
    field: SchemaField,
    options: Mapping[str, Any],
    default_value: Any,
    name_prefix: str,
) -> str:
    selected = _as_text(default_value)
    props = {**options, "type": RADIO}
    rendered = []
    for ev in data_type.enum_values:
        value = attribute_value(ev.value)
        rendered.append(
            {
                "value": value,
                "label": ev.label,
                "attributes": attribute_string(
                    {**props, "checked": value == selected},
                    ignore=("element_name", "value", "name"),
                ),
            }
        )
    return templates.render(
        templates.RADIO_GROUP,
        name=control_name(name_prefix, field.name),
        required=field.required,
        options=rendered,
    )


def enum_as_checkbox(
    data_type: DataType,
    field: SchemaField,
    options: Mapping[str, Any],
    default_value: Any,
    name_prefix: str,
) -> str:
    props = {**options, "type": CHECKBOX, "value": "true"}
    if default_value is not None and is_checked(default_value):
        props["checked"] = True
    required = ' required="required"' if field.required else ""
    name = escape(control_name(name_prefix, field.name))
    return f'<input{attribute_string(props, ignore=("element_name", "name"))}{required} name="{name}" />'


def render_enum(
    data_type: DataType,
    field: SchemaField,
    options: Mapping[str, Any],
    default_value: Any,
    name_prefix: str,
) -> str:
    """Type behavior for enumerated data types."""
    presentation = field.presentation
    if presentation == SELECT:
        return enum_as_select(data_type, field, options, default_value, name_prefix)
    elif presentation == RADIO:
        return enum_as_radio(data_type, field, options, default_value, name_prefix)
    elif presentation == CHECKBOX:
        if data_type.value_kind == "boolean":
            return enum_as_checkbox(data_type, field, options, default_value, name_prefix)
        logger.debug(
            f"Checkbox presentation ignored for non-boolean enumeration "
            f"{data_type.name} on field '{field.name}'"
        )
    elif presentation:
        logger.debug(
            f"Unknown presentation '{presentation}' on field '{field.name}', using select"
        )

    return enum_as_select(data_type, field, options, default_value, name_prefix)
