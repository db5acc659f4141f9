# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from lending import init_store
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .observability import log_policy_status
from .routes import application, health, public
from .schemas.error import ErrorResponse
from .services.application import new_application
from .services.random_source import init_random_source

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    log_policy_status()
    init_random_source(settings.RANDOM_SEED)
    init_store(new_application())
    yield


app = FastAPI(
    title="Loan Origination Wizard API",
    description="Guided sales, verification, underwriting and sanction flow for a single loan application",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# status -> (title, problem slug)
_PROBLEMS: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    404: ("Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    409: ("Conflict", "stage-conflict"),
    422: ("Unprocessable Entity", "invalid-input"),
    500: ("Internal Server Error", "internal-error"),
}


def _problem(request: Request, status_code: int, detail: str) -> JSONResponse:
    """Render an error as Problem Details, tagged with the request path and id."""
    title, slug = _PROBLEMS.get(status_code, ("Error", "error"))
    body = ErrorResponse(
        type=f"urn:{settings.APP_NAME}:problem:{slug}",
        title=title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        request_id=request.headers.get("x-request-id", str(uuid.uuid4())),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _problem(request, exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body or path failed pydantic validation."""
    fields = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _problem(request, 422, fields)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    logger.exception("Unhandled exception on %s", request.url.path)
    return _problem(request, 500, "An unexpected error occurred.")


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(public.router, prefix="/api/public", tags=["public"])
app.include_router(application.router, prefix="/api/application", tags=["application"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the Loan Origination Wizard API"}
