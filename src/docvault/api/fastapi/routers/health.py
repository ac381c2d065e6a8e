from __future__ import annotations

from fastapi import APIRouter

from docvault.documents.models import HealthResponse
from docvault.records.base import utcnow

ROUTER_TAG = "Health"

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(success=True, message="Server is running", timestamp=utcnow())
