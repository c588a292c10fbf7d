"""FastAPI app, CORS, error envelopes and route registration."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from songdeck.config import API_VERSION, LOG_FORMAT, LOG_LEVEL, WEB_ORIGIN

# Configure logging in the worker process (so service INFO logs are visible with uvicorn --reload)
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

from songdeck.api.state import AppState, get_state
from songdeck.core.errors import SongdeckError, StorageError

# Import routes after state to avoid circular imports
from songdeck.api.routes import songs, statistics

__all__ = ["app", "create_app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, code: str, details=None) -> JSONResponse:
    error = {"message": message, "code": code}
    if details is not None:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _error(404, "Route not found", "ROUTE_NOT_FOUND")
    return _error(exc.status_code, str(exc.detail), "HTTP_ERROR")


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return _error(400, "Invalid JSON format", "INVALID_JSON")
    details = [
        {"field": str((e.get("loc") or ("body",))[-1]), "message": e.get("msg", "")}
        for e in errors
    ]
    return _error(400, "Validation failed", "VALIDATION_ERROR", details)


async def _songdeck_error_handler(request: Request, exc: SongdeckError):
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "Internal server error", "INTERNAL_ERROR")
    return _error(exc.status_code, exc.message, exc.code, exc.details)


async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error", "INTERNAL_ERROR")


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = app.dependency_overrides.get(get_state, get_state)()
    store = state.open_store()
    logger.info("Songdeck API v%s started (%d songs)", API_VERSION, len(store))
    yield
    logger.info("Songdeck API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Songdeck API",
        description="Song catalog with live statistics",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[WEB_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SongdeckError, _songdeck_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    @app.get("/")
    def api_info():
        return {"message": f"Songdeck API v{API_VERSION}"}

    @app.get("/health")
    def health(state: AppState = Depends(get_state)):
        """Liveness plus store reachability."""
        store = state.store
        connected = store.ping()
        return {
            "status": "OK" if connected else "DEGRADED",
            "message": "Songdeck API is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "storage": {
                "connected": connected,
                "backend": "json" if store.path is not None else "memory",
                "songs": len(store),
            },
        }

    app.include_router(songs.router, prefix="/songs", tags=["songs"])
    app.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
    return app


app = create_app()
