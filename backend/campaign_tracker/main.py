"""
Campaign Tracker - FastAPI Application Entry Point
"""
import logging
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .database import StorageError, init_db
from .routers import campaigns_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Campaign Tracker API...")
    init_db()

    yield

    # Shutdown
    logger.info("Shutting down Campaign Tracker API...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Track marketing campaigns per client, stored in a JSON file",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
cors_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
# Add production URLs from environment
cors_origins.extend(settings.cors_origin_list)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Errors are returned as {"error": message}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(campaigns_router)


@app.get("/api")
def api_root():
    """API root endpoint - API info."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Serve the built frontend in production
# The frontend build is placed in backend/static after build
STATIC_DIR = Path(__file__).parent.parent / "static"


def resolve_spa_file(static_dir: Path, full_path: str) -> Path:
    """
    Map a request path to a file of the frontend build.

    Paths that resolve outside static_dir, or to no file, fall back to
    index.html so the SPA router can handle them.
    """
    root = static_dir.resolve()
    candidate = (root / full_path).resolve()
    if candidate.is_relative_to(root) and candidate.is_file():
        return candidate
    return root / "index.html"


def mount_spa(app: FastAPI, static_dir: Path) -> None:
    """Serve the React SPA from static_dir for every non-API route."""
    if (static_dir / "static").exists():
        app.mount("/static", StaticFiles(directory=static_dir / "static"), name="static")

    # Catch-all route for SPA - must be after all API routes
    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        if full_path.startswith("api/"):
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return FileResponse(resolve_spa_file(static_dir, full_path))


if STATIC_DIR.exists():
    mount_spa(app, STATIC_DIR)


def run():
    """Start the API server with uvicorn."""
    import uvicorn

    logger.info(f"Server listening on port {settings.port}")
    uvicorn.run(
        "campaign_tracker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
