"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # VectorForge trust API
    vf_api_base_url: str = ""
    vf_api_key: str = ""
    # Seconds before an outbound API request is abandoned
    vf_api_timeout: float = 30.0

    # Inter-service auth for the /manifest and /execute endpoints.
    # Empty disables the check (development mode).
    service_auth_token: str = ""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def model_post_init(self, __context: object) -> None:
        """Normalise the base URL so paths can be appended with a single slash."""
        self.vf_api_base_url = self.vf_api_base_url.strip().rstrip("/")

    def require_vectorforge(self) -> None:
        """Fail fast when the API credentials are missing.

        Called once at process start. A missing base URL or key is a fatal
        startup condition, not something individual tool calls report.
        """
        missing = []
        if not self.vf_api_base_url:
            missing.append("VF_API_BASE_URL")
        if not self.vf_api_key:
            missing.append("VF_API_KEY")
        if missing:
            raise RuntimeError(
                f"{' and '.join(missing)} environment variable(s) are required"
            )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
