# shopcart/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shopping_cart.db")
REDIS_URL = os.getenv("REDIS_URL", "")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "")
CATALOG_URL = os.getenv("CATALOG_URL", "")
CATALOG_TIMEOUT_SECONDS = int(os.getenv("CATALOG_TIMEOUT_SECONDS", 2))

DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"
JWT_SECRET = os.getenv("JWT_SECRET") or DEFAULT_JWT_SECRET
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", 24))
SESSION_TTL_SECONDS = JWT_EXPIRY_HOURS * 60 * 60
SESSION_SINGLE_ACTIVE = _env_bool("SESSION_SINGLE_ACTIVE", "true")

CART_LOCK_TTL_SECONDS = int(os.getenv("CART_LOCK_TTL_SECONDS", 10))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
SEED_CATALOG = _env_bool("SEED_CATALOG", "true")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 8080))
