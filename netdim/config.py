from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel

# Load .env if present
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default) in {"1", "true", "True"}


class Settings(BaseModel):
    project_name: str = "netdim"
    version: str = "1.0.0"
    app_env: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_dir: str = os.getenv("LOG_DIR", "logs")
    log_to_file: bool = _flag("LOG_TO_FILE", "0")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    cors_origins: List[str] = [o for o in os.getenv("CORS_ORIGINS", "*").split(",") if o]

    # Orchestration policy, not engine constants
    umts_fallback_radius_km: float = float(os.getenv("UMTS_FALLBACK_RADIUS_KM", "0.8"))
    gsm_sectors: int = int(os.getenv("GSM_SECTORS", "3"))
    gsm_trx_per_sector: int = int(os.getenv("GSM_TRX_PER_SECTOR", "4"))
    default_rain_zone: str = os.getenv("DEFAULT_RAIN_ZONE", "K")
    default_receiver_threshold_dbm: float = float(os.getenv("DEFAULT_RECEIVER_THRESHOLD_DBM", "-85"))

@lru_cache
def get_settings() -> Settings:
    """Settings for FastAPI dependency injection, read from the environment once."""
    return Settings()


settings = get_settings()
