"""
Content Desk configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Database
    DATABASE_URL: str = os.environ.get("DATABASE_URL", "")

    # R2 / S3 Storage (image uploads)
    R2_ENDPOINT: str = os.environ.get("R2_ENDPOINT", "")
    R2_ACCESS_KEY: str = os.environ.get("R2_ACCESS_KEY", "")
    R2_SECRET_KEY: str = os.environ.get("R2_SECRET_KEY", "")
    R2_UPLOADS_BUCKET: str = os.environ.get("R2_UPLOADS_BUCKET", "content-desk-uploads")
    R2_PUBLIC_URL: str = os.environ.get("R2_PUBLIC_URL", "")
    UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024

    # Auth
    JWT_SECRET: str = os.environ.get("JWT_SECRET", "")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_HOURS: int = 24

    # Workflow (n8n)
    N8N_WEBHOOK_URL: str = os.environ.get("N8N_WEBHOOK_URL", "")
    WEBHOOK_TIMEOUT_SECONDS: float = 10.0

    # Where viewArticle sends the browser; {task_id} is filled in
    ARTICLE_VIEW_URL: str = os.environ.get("ARTICLE_VIEW_URL", "/tasks?viewingTaskId={task_id}")

    # SDUI
    SDUI_DEFAULT_PAGE_SIZE: int = 20
    SDUI_MAX_PAGE_SIZE: int = 50

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


# Singleton instance
settings = Settings()

# Validate required settings (skip in test mode)
_testing = os.environ.get("TESTING", "").lower() == "true"

if not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL environment variable is required")
if not settings.JWT_SECRET:
    raise RuntimeError("JWT_SECRET environment variable is required")

if not _testing:
    if not settings.R2_ENDPOINT:
        raise RuntimeError("R2_ENDPOINT environment variable is required")
    if not settings.R2_ACCESS_KEY:
        raise RuntimeError("R2_ACCESS_KEY environment variable is required")
    if not settings.R2_SECRET_KEY:
        raise RuntimeError("R2_SECRET_KEY environment variable is required")
    if not settings.R2_PUBLIC_URL:
        raise RuntimeError("R2_PUBLIC_URL environment variable is required")
