"""HTML attribute formatting."""

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from markupsafe import Markup, escape


def attribute_value(value: Any) -> str:
    """Text form of a value as it appears in markup ('true'/'false' for booleans)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def attribute_string(
    props: Optional[Mapping[str, Any]],
    ignore: Union[str, Iterable[str]] = (),
) -> Markup:
    """Render props as ` key="value"` pairs, values escaped.

    True renders as key="key"; False and None are omitted.
    """
    if not props:
        return Markup("")
    if isinstance(ignore, str):
        ignore = (ignore,)
    ignored = set(ignore)

    parts = []
    for key, value in props.items():
        if key in ignored or value is None or value is False:
            continue
        if value is True:
            value = key
        parts.append(f' {escape(key)}="{escape(attribute_value(value))}"')
    return Markup("".join(parts))
