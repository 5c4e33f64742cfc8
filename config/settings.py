"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str                                     # HMAC secret for auth tokens (required)
    jwt_expiry_seconds: int = 600                       # 10 minutes

    # ── Database ─────────────────────────────────────────────────────────
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db: str = "product_feedback"                # used when the URL names no database

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]
    static_dir: str = "public"

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()
