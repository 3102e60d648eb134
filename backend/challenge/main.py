"""
Challenge Board API

FastAPI application serving the Strava-backed challenge leaderboard.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from challenge.config import settings
from challenge.db.session import init_db
from challenge.api.router import api_router
from challenge.shared.errors import ChallengeError, ValidationError

VERSION = "0.1.0"


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Challenge Board API...")
    await init_db()
    logger.info("Database initialized")

    if not (settings.strava_client_id and settings.strava_client_secret):
        logger.warning("Strava credentials not configured, token exchange will fail")

    yield

    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Challenge Board API",
    description="Strava-backed running and cycling challenge leaderboard",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Error Envelope ===
def _envelope(status_code: int, message: str, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error": error},
    )


@app.exception_handler(ChallengeError)
async def challenge_error_handler(request: Request, exc: ChallengeError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}: {exc.error}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.error}")
    return _envelope(exc.status_code, exc.message, exc.error)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _envelope(ValidationError.status_code, ValidationError.message, details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _envelope(exc.status_code, str(exc.detail), str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _envelope(500, "Internal server error", type(exc).__name__)


# === Routes ===
app.include_router(api_router)


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


# === Static Files (Frontend) ===
if settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=str(settings.static_dir), html=True), name="frontend")
    logger.info(f"Serving frontend from {settings.static_dir}")
