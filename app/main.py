import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.api.router import api_router
from app.config import settings
from app.core.database import close_db, init_db
from app.services.github import close_github_client

# Paths always logged, whatever the status: these write events
LOGGED_PATH_KEYWORDS = ("sync", "ingest")


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # httpx logs every GitHub request at INFO; hpack is chatty under http2
    for noisy in ("httpx", "httpcore", "hpack"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    # Requests are logged by log_requests below
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    setup_logging()
    logger.info("SignalKit API starting up")
    if not settings.github_oauth_enabled:
        logger.warning("GitHub OAuth App credentials not configured")
    if not settings.github_app_enabled:
        logger.info("GitHub App credentials not configured, app sign-in disabled")
    if not settings.internal_api_secret:
        logger.info("Internal API secret not set, /internal/ingest will answer 503")
    if settings.debug:
        await init_db()

    yield

    await close_github_client()
    await close_db()
    logger.info("SignalKit API shutting down")


app = FastAPI(
    title="SignalKit API",
    description="Engineering health sensors computed from GitHub pull request activity",
    version="0.1.0",
    lifespan=lifespan,
)

# Proxy headers middleware - trust X-Forwarded-Proto from reverse proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log failed requests and event-writing requests with their duration."""
    if request.method == "OPTIONS" or request.url.path == "/health":
        return await call_next(request)

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    path = request.url.path
    if response.status_code >= 400 or any(keyword in path for keyword in LOGGED_PATH_KEYWORDS):
        logger.info(f"{request.method} {path} → {response.status_code} ({elapsed_ms:.0f}ms)")

    return response


app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Liveness check; does not touch the database or GitHub."""
    return {"status": "healthy"}
