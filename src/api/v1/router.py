"""
API v1 router.

Combines all v1 endpoint routers.
"""

from fastapi import APIRouter

from src.api.v1.endpoints import compliance, schema

# Create main v1 router
api_router = APIRouter()

# V1 root endpoint
@api_router.get("/", tags=["info"])
async def api_v1_info():
    """
    API v1 information endpoint.

    Returns:
        API version and available endpoints
    """
    return {
        "title": "Celerya Compliance API",
        "version": "1.0.0",
        "endpoints": {
            "schema": "/api/v1/schema",
            "compliance": "/api/v1/compliance",
            "health": "/health",
            "docs": "/docs"
        }
    }

# Include endpoint routers
api_router.include_router(schema.router, prefix="/schema", tags=["schema"])
api_router.include_router(compliance.router, prefix="/compliance", tags=["compliance"])
