# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints: health, readiness, metrics.
Pure HTTP layer: no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from ticketdesk.core.config import settings
from ticketdesk.core.dependencies import get_document_store
from ticketdesk.core.errors import StorageError
from ticketdesk.models.domain import COLLECTIONS
from ticketdesk.repositories import DocumentStore
from ticketdesk.schemas import ReadinessResponse

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
def readiness_check(store: DocumentStore = Depends(get_document_store)):
    """Readiness probe: the data file must load."""
    try:
        document = store.load()
    except StorageError as exc:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": settings.SERVICE_NAME,
                "error": str(exc),
            },
        )
    return ReadinessResponse(
        status="ready",
        service=settings.SERVICE_NAME,
        collections={name: len(document.collection(name)) for name in COLLECTIONS},
    )


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
