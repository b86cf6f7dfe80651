"""Configuration settings"""
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Database configuration
# "sqlite://" (no path) keeps everything in process memory; see database.IS_EPHEMERAL
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./workshop.db")

# Rows kept per table (submissions, session feedback) when the store is ephemeral
MEMORY_RETENTION_LIMIT = int(os.getenv("MEMORY_RETENTION_LIMIT", "100"))

# Application settings
API_V1_PREFIX = os.getenv("API_V1_PREFIX", "/api/v1")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS configuration
CORS_ORIGINS: List[str] = [
    "http://localhost:3000",
    "http://localhost:5173",
]

# Allow additional origins from environment variable (comma-separated)
_extra_origins = os.getenv("CORS_ORIGINS", "")
if _extra_origins:
    CORS_ORIGINS.extend([origin.strip() for origin in _extra_origins.split(",") if origin.strip()])

# Evaluator settings
EVALUATOR_MODEL = os.getenv("EVALUATOR_MODEL", "claude-sonnet-4")
EVALUATOR_TEMPERATURE = float(os.getenv("EVALUATOR_TEMPERATURE", "0.3"))
EVALUATOR_MAX_TOKENS = int(os.getenv("EVALUATOR_MAX_TOKENS", "4000"))
EVALUATOR_STRUCTURED_OUTPUT = _env_bool("EVALUATOR_STRUCTURED_OUTPUT", True)
EVALUATION_TIMEOUT_SECONDS = float(os.getenv("EVALUATION_TIMEOUT_SECONDS", "30"))

# "best_effort": a failed submission write is logged and the evaluation is still returned.
# "strict": a failed submission write fails the request.
PERSISTENCE_MODE = os.getenv("PERSISTENCE_MODE", "best_effort").strip().lower()
if PERSISTENCE_MODE not in ("best_effort", "strict"):
    raise ValueError(f"PERSISTENCE_MODE must be 'best_effort' or 'strict', got '{PERSISTENCE_MODE}'")

# When enabled, creating or opening a session closes every other session
ENFORCE_SINGLE_OPEN_SESSION = _env_bool("ENFORCE_SINGLE_OPEN_SESSION", False)

# Sustainability estimates per token
CO2_GRAMS_PER_TOKEN = 0.0004
COST_USD_PER_TOKEN = 0.00002
