"""Rendering: composes schema, field and type behaviors into markup.

Rendering builds a RenderNode tree (one node per schema, field list, field
and control) and flattens it to text once, at the top.
"""

from .composer import FormComposer
from .nodes import RenderNode
from .schemas import RenderOptions

__all__ = ["FormComposer", "RenderNode", "RenderOptions"]
