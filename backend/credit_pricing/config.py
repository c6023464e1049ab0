import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./credit_pricing.db")
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_PAGE_LIMIT = _env_int("MAX_PAGE_LIMIT", 1000)
PRICING_STRICT = _env_flag("PRICING_STRICT")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# comma separated, "*" allowed
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
