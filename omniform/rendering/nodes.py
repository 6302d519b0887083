"""Render tree nodes."""

from typing import Iterator, Optional

from pydantic import BaseModel, Field


class RenderNode(BaseModel):
    """A node of rendered output.

    Text is produced by flatten(): opening, then each child followed by
    child_suffix, then closing.
    """

    kind: str = Field(..., description="'form', 'fields', 'field', 'object' or 'control'")
    name: str = Field(default="", description="Dotted control name, if any")
    opening: str = ""
    children: list["RenderNode"] = Field(default_factory=list)
    child_suffix: str = ""
    closing: str = ""

    def flatten(self) -> str:
        parts = [self.opening]
        for child in self.children:
            parts.append(child.flatten())
            parts.append(self.child_suffix)
        parts.append(self.closing)
        return "".join(parts)

    def walk(self) -> Iterator["RenderNode"]:
        """Depth-first iteration, this node first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str, kind: Optional[str] = None) -> Optional["RenderNode"]:
        """First node with the given dotted name (and kind, if given)."""
        for node in self.walk():
            if node.name == name and (kind is None or node.kind == kind):
                return node
        return None

    def control_names(self) -> list[str]:
        return [n.name for n in self.walk() if n.kind == "control"]


RenderNode.model_rebuild()
