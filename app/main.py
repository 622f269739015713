# app/main.py
"""
FastAPI application entry point.
Includes request logging, global error handlers, and all routers.
Every error response is shaped {"error": "<message>"}.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.routers import auth, gatepasses, search, entry_exit, health
from app.database import create_tables
from app.config import settings
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Campus Gate Pass API",
    description="Student exit requests, HOD approvals and security desk entry/exit logging.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (browser client served from another origin) ────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = first.get("msg", "Invalid value").removeprefix("Value error, ")
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
    return f"{field}: {msg}" if field else msg


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _validation_message(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    # Duplicate unique field, e.g. two passes numbered in the same instant
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Record conflicts with an existing entry"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(auth.router,       prefix=settings.API_PREFIX, tags=["Auth"])
app.include_router(gatepasses.router, prefix=settings.API_PREFIX, tags=["Gate Passes"])
app.include_router(search.router,     prefix=settings.API_PREFIX, tags=["Security Search"])
app.include_router(entry_exit.router, prefix=settings.API_PREFIX, tags=["Entry/Exit Logs"])
app.include_router(health.router,     prefix=settings.API_PREFIX, tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Gate pass backend starting up...")
    create_tables()
    logger.info("Database tables ready")
    if settings.STRICT_TRANSITIONS:
        logger.info("Strict state transitions enabled")
    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}{settings.API_PREFIX}")
    logger.info("API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Gate pass backend shutting down...")
