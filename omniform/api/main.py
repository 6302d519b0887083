"""omniform API - schema-driven form rendering service.

This API serves the type and schema catalogs and renders schemas:
- Data types (resolved traits, installed capabilities, override chains)
- Record schemas (definitions, HTML form rendering)
- Form parsing (dotted control names back to nested records)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from omniform import __version__
from omniform.api.routes import records, types
from omniform.capabilities.registry import get_capability_registry
from omniform.datatypes.registry import get_data_type_registry
from omniform.html5 import install as install_html5
from omniform.records.registry import get_schema_registry

# Configure logging
logging.basicConfig(
    level=os.environ.get("OMNIFORM_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Pre-load registries and install plugins
    logger.info("Loading data types...")
    type_registry = get_data_type_registry()
    logger.info(f"Loaded {type_registry.count()} data types")

    capability_registry = get_capability_registry()
    if not capability_registry.sealed:
        logger.info("Installing HTML5 plugin...")
        install_html5(capability_registry, type_registry)
        capability_registry.seal()
    logger.info(f"{capability_registry.count()} behaviors registered")

    logger.info("Loading schema definitions...")
    schema_registry = get_schema_registry()
    logger.info(f"Loaded {schema_registry.count()} schemas")

    logger.info("omniform API ready")
    yield
    # Shutdown
    logger.info("Shutting down omniform API")


# Create FastAPI app
app = FastAPI(
    title="omniform API",
    description="""
## Schema-driven form rendering

Behaviors attach to schemas, fields and data types; at render time the
most specific matching behavior renders each field.

### Key Endpoints

- `GET /v1/types` - List all data types
- `GET /v1/types/{name}` - Resolved traits and capabilities of a type
- `GET /v1/schemas` - List all schemas
- `POST /v1/schemas/{key}/html` - Render a schema as an HTML form
- `POST /v1/schemas/{key}/parse` - Rebuild nested data from form values
""",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with /v1 prefix
app.include_router(types.router, prefix="/v1")
app.include_router(records.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "omniform API",
        "version": __version__,
        "description": "Schema-driven form rendering",
        "docs": "/docs",
        "endpoints": {
            "types": "/v1/types",
            "schemas": "/v1/schemas",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    capability_registry = get_capability_registry()
    return {
        "status": "healthy",
        "types_loaded": get_data_type_registry().count(),
        "schemas_loaded": get_schema_registry().count(),
        "behaviors_registered": capability_registry.count(),
        "registry_sealed": capability_registry.sealed,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "omniform.api.main:app",
        host="0.0.0.0",
        port=int(os.environ.get("PORT", "8001")),
        reload=True,
    )
