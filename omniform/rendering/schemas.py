"""Render option models."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class RenderOptions(BaseModel):
    """Caller options for rendering a whole schema."""

    submit_button: Optional[str] = Field(
        default="",
        description="Submit button label. '' renders an unlabeled submit "
        "button, None renders none.",
    )
    form_attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Attributes of the form element (action, method, ...)",
    )
