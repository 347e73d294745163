import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.data_dir = Path(os.getenv("DATA_DIR", "data")).resolve()
        self.store_backend = os.getenv("STORE_BACKEND", "json").strip().lower()
        if self.store_backend not in ("json", "sqlite"):
            raise RuntimeError("Environment variable STORE_BACKEND must be 'json' or 'sqlite'")
        database_path = os.getenv("DATABASE_PATH")
        self.database_path = (
            Path(database_path).resolve() if database_path else self.data_dir / "stayhub.db"
        )
        self.jwt_secret = os.getenv("JWT_SECRET", "change-me")
        self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        self.jwt_expiration_hours = self._get_int("JWT_EXPIRATION_HOURS", default=24 * 7)
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc
