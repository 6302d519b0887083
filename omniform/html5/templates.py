"""Markup templates for envelopes and enumerations.

Rendered with Jinja2 autoescaping; attribute strings are passed in as
Markup and are not escaped twice.
"""

from typing import Any

from jinja2 import Environment, BaseLoader

_env = Environment(
    loader=BaseLoader(),
    autoescape=True,
    keep_trailing_newline=True,
)

FORM_OPEN = "<form{{ attributes }}>\n"

FORM_CLOSE = (
    "{% if submit_button is not none %}"
    '<input type="submit"{% if submit_button %} value="{{ submit_button }}"{% endif %} />\n'
    "{% endif %}"
    "</form>\n"
)

OBJECT_OPEN = (
    '<div class="_{{ collection_name }} _obj">\n'
    '<label class="_objLabel">{{ label }}</label>\n'
)

OBJECT_CLOSE = "</div>"

SELECT = (
    '<select size="1" name="{{ name }}"{% if required %} required="required"{% endif %}>\n'
    "{% for option in options %}"
    '  <option value="{{ option.value }}"{% if option.selected %} selected="selected"{% endif %}>'
    "{{ option.label }}</option>\n"
    "{% endfor %}"
    "</select>\n"
)

RADIO_GROUP = (
    "{% for option in options %}"
    '<input{{ option.attributes }}{% if required %} required="required"{% endif %}'
    ' name="{{ name }}" value="{{ option.value }}" />'
    "&nbsp;{{ option.label }}<br/>\n"
    "{% endfor %}"
)

_compiled = {}


def render(template: str, **context: Any) -> str:
    """Render one of the templates above."""
    compiled = _compiled.get(template)
    if compiled is None:
        compiled = _compiled[template] = _env.from_string(template)
    return compiled.render(**context)
