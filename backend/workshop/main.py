"""FastAPI application entry point"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from workshop.api.v1 import api_router
from workshop.config import API_V1_PREFIX, CORS_ORIGINS, LOG_LEVEL
from workshop.database import engine, Base
from workshop.errors import register_exception_handlers

# Import all models to ensure they're registered with SQLAlchemy
from workshop.models import WorkshopSession, Submission, SessionFeedback, Setting  # noqa: F401

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create database tables (only creates if they don't exist)
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Prompt Workshop API", version="1.0.0")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix=API_V1_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Prompt Workshop API"}
