"""API routes for record schemas.

Serves the schema catalog, renders schemas as HTML forms and parses
submitted (dotted-name) form data back into nested records.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from omniform.capabilities.errors import UndefinedCapabilityError
from omniform.capabilities.registry import get_capability_registry
from omniform.records.registry import get_schema_registry
from omniform.records.schemas import RecordSchema, SchemaDefinition, SchemaSummary
from omniform.rendering.composer import FormComposer
from omniform.rendering.paths import unflatten
from omniform.rendering.schemas import RenderOptions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schemas", tags=["schemas"])


class RenderRequest(BaseModel):
    """Request to render a schema as an HTML form."""

    options: RenderOptions = Field(default_factory=RenderOptions)
    default_data: dict[str, Any] = Field(
        default_factory=dict, description="Values to pre-populate controls with"
    )


class ParseRequest(BaseModel):
    """Submitted form values keyed by dotted control name."""

    form_data: dict[str, Any] = Field(default_factory=dict)


def _get_or_404(schema_key: str) -> RecordSchema:
    """Get a built schema by key or raise 404."""
    registry = get_schema_registry()
    try:
        schema = registry.get(schema_key)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    if schema is None:
        raise HTTPException(
            status_code=404,
            detail=f"Schema '{schema_key}' not found. Available: {registry.list_keys()}",
        )
    return schema


@router.get("", response_model=list[SchemaSummary])
async def list_schemas():
    """List all schema definitions (summaries)."""
    return get_schema_registry().list_summaries()


@router.get("/{schema_key}", response_model=SchemaDefinition)
async def get_schema(schema_key: str):
    """Get a single schema definition by key."""
    _get_or_404(schema_key)
    return get_schema_registry().get_definition(schema_key)


@router.post("/{schema_key}/html", response_class=HTMLResponse)
async def render_schema(schema_key: str, request: RenderRequest):
    """Render a schema as an HTML form."""
    schema = _get_or_404(schema_key)
    composer = FormComposer(get_capability_registry())
    try:
        return composer.render_schema(schema, request.options, request.default_data)
    except UndefinedCapabilityError as e:
        logger.error(f"Cannot render schema {schema_key}: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/{schema_key}/parse")
async def parse_form(schema_key: str, request: ParseRequest) -> dict[str, Any]:
    """Rebuild a nested record from dotted control names."""
    _get_or_404(schema_key)
    try:
        return unflatten(request.form_data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
