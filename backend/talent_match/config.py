from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    app_name: str = os.getenv("APP_NAME", "Talent Match")
    environment: str = os.getenv("ENV", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./data/jobs.db")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5555"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: list[str] = field(default_factory=lambda: _csv(os.getenv("CORS_ORIGINS", "*")))
    static_dir: str = os.getenv("STATIC_DIR", "./static")
    max_cv_size_mb: int = int(os.getenv("MAX_CV_SIZE_MB", "5"))

    ai_api_key: str = os.getenv("AI_API_KEY", os.getenv("GEMINI_API_KEY", ""))
    ai_model: str = os.getenv("AI_MODEL", "gemini-2.5-flash")
    ai_base_url: str = os.getenv("AI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/")
    ai_timeout_seconds: float = float(os.getenv("AI_TIMEOUT_SECONDS", "60"))
    ai_temperature: float = float(os.getenv("AI_TEMPERATURE", "0.2"))

    minio_endpoint: str = os.getenv("MINIO_ENDPOINT", "minio")
    minio_port: int = int(os.getenv("MINIO_PORT", "9000"))
    minio_use_ssl: bool = os.getenv("MINIO_USE_SSL", "false").lower() == "true"
    minio_access_key: str = os.getenv("MINIO_ACCESS_KEY", "minioadmin")
    minio_secret_key: str = os.getenv("MINIO_SECRET_KEY", "minioadmin")
    minio_bucket: str = os.getenv("MINIO_BUCKET", "cv-uploads")
    minio_region: str = os.getenv("MINIO_REGION", "us-east-1")

    @property
    def object_store_url(self) -> str:
        scheme = "https" if self.minio_use_ssl else "http"
        return f"{scheme}://{self.minio_endpoint}:{self.minio_port}"

    def ensure_directories(self) -> None:
        self._ensure_sqlite_directory()

    def _ensure_sqlite_directory(self) -> None:
        if not self.database_url.startswith("sqlite:///"):
            return
        raw_path = self.database_url.replace("sqlite:///", "", 1)
        if not raw_path or raw_path == ":memory:":
            return
        db_path = Path(unquote(raw_path))
        if not db_path.is_absolute():
            db_path = Path(".") / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
