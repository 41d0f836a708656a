"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from headless_cms.infrastructure.firebase.client import get_firestore_client
from headless_cms.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok status for liveness."""
    return HealthResponse(firestore=get_firestore_client() is not None)
