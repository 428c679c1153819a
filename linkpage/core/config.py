import os

from dotenv import load_dotenv

# Load .env from the project root
load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}

ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Persistence collaborator (users / links / themes API).
# Empty base url -> in-memory gateway (dev and tests).
PERSISTENCE_BASE_URL = os.getenv("PERSISTENCE_BASE_URL", "").strip().rstrip("/")
PERSISTENCE_TIMEOUT_SECONDS = float(os.getenv("PERSISTENCE_TIMEOUT_SECONDS", "10"))

# Theme colors are passed through verbatim unless strict mode is on.
STRICT_THEME_COLORS = os.getenv("STRICT_THEME_COLORS", "").strip().lower() in _TRUTHY

SYNC_MODE = os.getenv("SYNC_MODE", "optimistic").strip().lower()
if SYNC_MODE not in {"optimistic", "sequenced"}:
    SYNC_MODE = "optimistic"

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
