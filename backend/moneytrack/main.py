"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from moneytrack.config import settings
from moneytrack.api.router import api_router
from moneytrack.database import Base, SessionLocal, engine
from moneytrack.exceptions import StoreWriteError
from moneytrack.logging_config import setup_logging
from moneytrack.services import recurring_service

logger = logging.getLogger(__name__)


def generate_due_recurring_transactions() -> int:
    """Catch-up pass run when the app starts."""
    db = SessionLocal()
    try:
        generated = recurring_service.get_engine(db).generate_due_transactions()
        return len(generated)
    except StoreWriteError:
        logger.exception("Startup recurring generation failed")
        return 0
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    Base.metadata.create_all(bind=engine)
    if settings.generate_on_startup:
        generate_due_recurring_transactions()
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Personal finance tracker with recurring transaction generation",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/api/v1/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "app_name": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("moneytrack.main:app", host=settings.api_host, port=settings.api_port)
