from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from contextlib import asynccontextmanager
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import text
import logging

from . import config
from .database import engine, init_db
from .routes import auth, perks

# Set up logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.debug("Starting up the application")
    try:
        # Test database connection first
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.info("Database connection test successful")

        # Initialize tables if they don't exist
        init_db()
    except SQLAlchemyError as e:
        logger.error(f"Database error during startup: {str(e)}")
        raise
    yield
    logger.debug("Shutting down the application")


app = FastAPI(
    title="Perkhub API",
    description="API for browsing and managing merchant perks",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    # integer parts are list indexes or offsets into a malformed body
    field = ".".join(
        str(part) for part in first.get("loc", ())
        if part != "body" and not isinstance(part, int)
    )
    message = first.get("msg", "Invalid request")
    detail = f"{field}: {message}" if field else message
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": detail, "errors": errors}),
    )


@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.url.path}: {str(exc.orig)}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Resource already exists"},
    )


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(perks.router, prefix="/api/perks", tags=["Perks"])


@app.get("/")
async def root():
    return {"message": "Welcome to Perkhub API"}


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
