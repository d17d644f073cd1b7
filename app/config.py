"""
Application configuration loaded from environment variables.
Uses pydantic-settings for typed, validated config.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All environment variables read by the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Storage ───────────────────────────────────────────────
    storage_backend: str = "memory"  # "memory" | "supabase"
    seed_demo_data: bool = False  # load app.seed data on startup

    # ── Supabase ──────────────────────────────────────────────
    supabase_url: str = ""
    supabase_service_role_key: str = ""  # service role key (bypasses RLS)

    # ── Auth ──────────────────────────────────────────────────
    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24
    auth_cookie_name: str = "token"
    bcrypt_rounds: int = 12

    # ── Offerings listing ─────────────────────────────────────
    legacy_list_limit: int = 100  # cap for format=array responses

    # ── App ───────────────────────────────────────────────────
    app_name: str = "local-jobs-board"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    debug: bool = False


# Singleton — import this wherever config is needed
settings = Settings()
