import os
import json
from typing import List
from pydantic import BaseModel, ConfigDict
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

# Default values
DEFAULT_CORS_ORIGINS = ["*"]


def _parse_cors_origins(cors_value: str) -> List[str]:
    """Accept either a JSON list or a comma-separated string."""
    if not cors_value or not cors_value.strip():
        return DEFAULT_CORS_ORIGINS
    if cors_value.startswith("["):
        try:
            return json.loads(cors_value)
        except json.JSONDecodeError:
            # Fallback to comma-separated if JSON parsing fails
            pass
    return [origin.strip() for origin in cors_value.strip("[]").split(",") if origin.strip()]


def _normalise_db_url(db_url: str) -> str:
    # Ensure the URL starts with 'postgresql://' not 'postgres://'
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    return db_url


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Service
    SERVICE_NAME: str = "BiTS Paid Print Server"
    PORT: int = int(os.getenv("PORT", "10000"))
    LOG_FILE: str = os.getenv("LOG_FILE", "api.log")
    PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:10000").rstrip("/")

    # CORS origins
    CORS_ORIGINS: List[str] = _parse_cors_origins(os.getenv("CORS_ORIGINS", ""))

    # Order store
    DATABASE_URL: str = _normalise_db_url(os.getenv("DATABASE_URL", "postgresql://localhost:5432/print_orders"))
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "10"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "20"))
    DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))

    # File store (Supabase Storage)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
    SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "paid-print-jobs")

    # Checkout (Yoco)
    YOCO_SECRET_KEY: str = os.getenv("YOCO_SECRET_KEY", "")
    YOCO_API_URL: str = os.getenv("YOCO_API_URL", "https://payments.yoco.com/api").rstrip("/")
    CURRENCY: str = "ZAR"

    # Pricing, cents per page
    BW_PRICE_CENTS: int = int(os.getenv("BW_PRICE_CENTS", "200"))
    COLOR_PRICE_CENTS: int = int(os.getenv("COLOR_PRICE_CENTS", "800"))

    # Upload / order settings
    MAX_FILE_SIZE: int = 20 * 1024 * 1024  # 20MB
    CODE_MAX_ATTEMPTS: int = 5

    # Outbound HTTP timeout for storage and checkout calls
    HTTP_TIMEOUT: int = int(os.getenv("HTTP_TIMEOUT", "30"))


# Create settings object once for the whole process
settings = Settings()
