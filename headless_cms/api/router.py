"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from headless_cms.api.dependencies.
"""

from fastapi import APIRouter

from headless_cms.api.endpoints import docs, health, permissions, schema, upload

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(schema.router, prefix="/schema", tags=["schema"])
api_router.include_router(docs.router, prefix="/docs", tags=["docs"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
