"""HTML type table models."""

from typing import Any

from pydantic import BaseModel, Field

HTML_SPEC_TRAIT = "html_spec"


class HtmlTypeSpec(BaseModel):
    """Which HTML element and default attributes render a data type."""

    name: str = Field(..., description="Data type name")
    element_name: str = Field(..., description="'input', 'textarea', ...")
    attributes: dict[str, Any] = Field(default_factory=dict)

    def as_trait(self) -> dict[str, Any]:
        return {"element_name": self.element_name, **self.attributes}


class HtmlTypeTable(BaseModel):
    html_types: list[HtmlTypeSpec] = Field(default_factory=list)
