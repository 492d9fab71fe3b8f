"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutricare import __version__
from nutricare.api.v1 import router as v1_router
from nutricare.core.config import settings
from nutricare.core.errors import AuthError, MissingToken

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def _servers() -> list[dict[str, str]]:
    servers = [{"url": f"http://localhost:{settings.PORT}", "description": "Local server"}]
    if settings.BASE_URL:
        servers.append({"url": settings.BASE_URL, "description": "Production server"})
    return servers


app = FastAPI(
    title="Nutricare API",
    description="Nutricare API for managing the marketing site content",
    version=__version__,
    docs_url="/api-docs",
    redoc_url="/redoc",
    servers=_servers(),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS or (["*"] if settings.APP_ENV == "dev" else []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthError)
async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    """Map core auth errors to their status code with a generic structured body."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, MissingToken) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
        headers=headers,
    )


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Nutricare API", "docs": "/api-docs"}
