# /app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import get_settings
from .core.exceptions import AdmissionError
from .db.database import init_db

# --- Application-specific Router Imports ---
from .routers import account_router, generate_router, history_router, webhooks_router

# --- Service Imports for Startup Logic ---
from .services.llm_service import LLMService
from .services.rate_limit_service import RateLimiter

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at start-up: schema, then the shared LLM service and rate limiter.
    init_db()
    app.state.llm_service = LLMService(settings)
    app.state.rate_limiter = RateLimiter.from_settings(settings)
    logger.info("Startup complete (preferred LLM provider: %s)", settings.llm_provider)
    yield
    await app.state.rate_limiter.close()


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="RepurposeFlow Backend API",
    description="Turns long-form content into platform-ready posts for six social and email channels.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error Rendering ---
@app.exception_handler(AdmissionError)
async def admission_error_handler(request: Request, exc: AdmissionError):
    return JSONResponse(status_code=exc.status_code, content=exc.payload, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


# --- API Router Inclusion ---
app.include_router(generate_router.router, prefix="/api/generate", tags=["Generation"])
app.include_router(history_router.router, prefix="/api/history", tags=["History"])
app.include_router(account_router.router, prefix="/api", tags=["Account"])
app.include_router(webhooks_router.router, prefix="/api/webhooks", tags=["Webhooks"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "RepurposeFlow Backend is running!", "version": app.version}
