"""
PawFam Storefront Application

Session-backed storefront for the PawFam pet-services marketplace: product
cart and checkout, daycare bookings, adoption applications and password
recovery, all backed by the PawFam REST API.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .routes import (
    session_router,
    cart_router,
    checkout_router,
    bookings_router,
    adoption_router,
    auth_router,
)
from .core.config import settings
from .core.session import SessionManager
from .services.api_client import PawFamAPIError, PawFamClient
from .services.credentials import CredentialStore

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("PawFam Storefront starting up...")
    logger.info(f"API base URL: {settings.api_base_url}")

    credentials = CredentialStore(settings.credentials_path)
    credentials.load()

    app.state.credentials = credentials
    app.state.client = PawFamClient(
        base_url=settings.api_base_url,
        credentials=credentials,
        timeout=settings.request_timeout,
    )

    # A stored login only counts once the backend accepts its token
    if credentials.token:
        try:
            await app.state.client.refresh_current_user()
            logger.info(f"Restored stored login ({credentials.role or 'unknown role'})")
        except PawFamAPIError as e:
            logger.warning(f"Could not confirm stored login: {e}")

    app.state.sessions = SessionManager()

    yield

    logger.info("PawFam Storefront shutting down...")
    await app.state.client.close()


# Create FastAPI app
app = FastAPI(
    title="PawFam Storefront",
    description="Cart, checkout, daycare booking and adoption flows for PawFam",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(session_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(bookings_router)
app.include_router(adoption_router)
app.include_router(auth_router)


@app.get("/")
async def home():
    return {
        "message": "PawFam Storefront API",
        "docs": "/docs",
        "endpoints": {
            "session": "/api/session",
            "products": "/api/products",
            "cart": "/api/cart",
            "checkout": "/api/checkout",
            "bookings": "/api/bookings",
            "adoption": "/api/adoption",
            "auth": "/api/auth",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "pawfam-storefront",
        "api_base_url": settings.api_base_url,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pawfam.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
