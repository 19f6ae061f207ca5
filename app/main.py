import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.routers import cvs
from app.models.settings import get_matching_settings, get_upload_settings
from app.utils.logging_config import configure_for_environment, get_logger
from app.middleware.error_handlers import RequestContextMiddleware, validation_exception_handler

# .env feeds ENVIRONMENT, LOG_LEVEL and CORS_ORIGINS; settings models read it themselves
load_dotenv()
configure_for_environment()
logger = get_logger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info("CV Validator API starting up...")

    # Fail fast on bad CV_* / MAX_PDF_BYTES values
    matching = get_matching_settings()
    upload = get_upload_settings()
    logger.info(
        f"Matching settings: experience_threshold={matching.experience_threshold}, "
        f"phone_suffix_length={matching.phone_suffix_length}, "
        f"min_experience_word_length={matching.min_experience_word_length}, "
        f"max_pdf_bytes={upload.max_pdf_bytes}"
    )

    logger.info("CV Validator API startup completed")

    yield

    logger.info("CV Validator API shutting down...")


app = FastAPI(title="CV Validator API", version=APP_VERSION, lifespan=lifespan)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# add_middleware is LIFO: CORS, added last, wraps the request context middleware
app.add_middleware(RequestContextMiddleware, slow_request_threshold=2.0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
@app.head("/")
async def root():
    """Root endpoint - handles both GET and HEAD requests for health checks"""
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to the CV Validator API", "version": APP_VERSION, "status": "ok"}


@app.get("/health")
@app.head("/health")
async def health_check():
    """Health check endpoint - handles both GET and HEAD requests"""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


app.include_router(cvs.router, prefix="/api/cvs", tags=["cvs"])

logger.info("CV Validator API initialized successfully")
