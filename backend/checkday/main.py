"""
Checkday Backend - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import database
from .services.encryption import init_encryption
from .routes import (
    auth_router,
    template_router,
    today_router,
    recap_router,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Checkday Backend...")

    await database.connect()

    if database.is_connected():
        logger.info("Database connected successfully")
    else:
        logger.warning("Database connection failed - running in degraded mode")
        logger.warning("Checklists fall back to in-memory defaults until the database is back")

    init_encryption(settings.encryption_key)
    logger.info("Encryption initialized")

    logger.info(f"Timezone: {settings.timezone or 'server local'}")

    yield

    logger.info("Shutting down Checkday Backend...")
    await database.disconnect()


app = FastAPI(
    title="Checkday API",
    description="Daily checklist with a reusable template, recap and streak",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=settings.allowed_origins.split(",") if settings.allowed_origins != "*" else ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(template_router, prefix="/api")
app.include_router(today_router, prefix="/api")
app.include_router(recap_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Checkday API", "version": VERSION}


@app.get("/health")
async def health_check():
    """Health check endpoint with database status"""
    db_connected = await database.check_connection()

    return {
        "status": "healthy" if db_connected else "degraded",
        "database": "connected" if db_connected else "disconnected",
        "version": VERSION
    }
