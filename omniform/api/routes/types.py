"""API routes for data types.

Lists the data type catalog and shows, per type, its resolved traits and
which behaviors the capability registry resolves for it.
"""

import logging

from fastapi import APIRouter, HTTPException

from omniform.capabilities.registry import get_capability_registry
from omniform.capabilities.schemas import CandidateReport
from omniform.datatypes.registry import get_data_type_registry
from omniform.datatypes.schemas import DataType, DataTypeDetail, DataTypeSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/types", tags=["types"])


def _get_or_404(name: str) -> DataType:
    """Get a data type by name or raise 404."""
    registry = get_data_type_registry()
    data_type = registry.get(name)
    if data_type is None:
        raise HTTPException(
            status_code=404,
            detail=f"Data type '{name}' not found. Available: {registry.list_names()}",
        )
    return data_type


@router.get("", response_model=list[DataTypeSummary])
async def list_types():
    """List all data types (summaries)."""
    registry = get_data_type_registry()
    return [t.summary() for t in sorted(registry.list_all(), key=lambda t: t.name)]


@router.get("/{name}", response_model=DataTypeDetail)
async def get_type(name: str):
    """Get a data type with its resolved traits and capabilities."""
    data_type = _get_or_404(name)
    capabilities = get_capability_registry().capabilities_for(data_type)
    return DataTypeDetail(
        name=data_type.name,
        base=data_type.base.name if data_type.base else None,
        description=data_type.description,
        lineage=data_type.lineage(),
        resolved_traits=data_type.resolved_traits(),
        capabilities=sorted(capabilities),
    )


@router.get("/{name}/explain/{capability}", response_model=list[CandidateReport])
async def explain_capability(name: str, capability: str):
    """Show the override chain for one capability on a data type."""
    data_type = _get_or_404(name)
    return get_capability_registry().explain(capability, data_type)
