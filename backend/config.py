"""Centralized configuration: all env vars in one place."""

import os


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")

        # Supabase (PostgREST); service role bypasses RLS for admin reads
        self.supabase_url: str | None = os.getenv("SUPABASE_URL")
        self.supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")

        # ImageKit file API
        self.imagekit_private_key: str | None = os.getenv("IMAGEKIT_PRIVATE_KEY")
        self.imagekit_api_url: str = os.getenv("IMAGEKIT_API_URL", "https://api.imagekit.io/v1/files")

        self.cache_default_stale_ms: int = int(os.getenv("CACHE_DEFAULT_STALE_MS", str(5 * 60 * 1000)))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of missing required env vars for database and CDN features."""
        required = ["SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "IMAGEKIT_PRIVATE_KEY"]
        return [var for var in required if not getattr(self, _attr_for(var))]


settings = Settings()


def _attr_for(env_var: str) -> str:
    """Map env var name to Settings attribute name."""
    return env_var.lower()
