# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Ticket Desk Service
===================
CRUD over teams, users and tickets, persisted as one JSON document on disk.
Payloads are validated per field and against the other entities in the same
document before anything is written.

Port: 4000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticketdesk.controllers.system_controller import router as system_router
from ticketdesk.controllers.team_controller import router as team_router
from ticketdesk.controllers.ticket_controller import router as ticket_router
from ticketdesk.controllers.user_controller import router as user_router
from ticketdesk.core.config import settings
from ticketdesk.core.dependencies import get_document_store
from ticketdesk.core.errors import NotFoundError, StorageError, ValidationError
from ticketdesk.core.logging import get_logger
from ticketdesk.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    store = get_document_store()
    if settings.INIT_DATA_FILE:
        store.initialize()
    logger.info("Ticket desk starting, data file %s", store.path)
    yield
    logger.info("Ticket desk shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Ticket Desk",
    description="Teams, users and tickets stored in a single JSON document.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


# ── Exception handlers ────────────────────────────────────────────────────
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={"errors": [v.model_dump() for v in exc.violations]},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            field = "body"
        else:
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            field = ".".join(loc) or "body"
        errors.append({"field": field, "message": err.get("msg", "Invalid request")})
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"message": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure: %s", exc, extra={"request_id": _request_id(request)})
    return JSONResponse(status_code=500, content={"message": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception", extra={"request_id": _request_id(request)})
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# ── Routers ───────────────────────────────────────────────────────────────
app.include_router(system_router)
app.include_router(team_router)
app.include_router(user_router)
app.include_router(ticket_router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.SERVICE_HOST, port=settings.SERVICE_PORT, log_level="info")
