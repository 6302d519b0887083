"""omniform - schema-driven form rendering.

Renders record schemas into HTML5 form markup by dispatching on
capabilities registered against three levels of the schema hierarchy:
- Schema behaviors (form envelopes, field lists)
- Field behaviors (labels, nested object containers)
- Data type behaviors (controls), selected by predicates over type traits
"""

__version__ = "0.1.0"
