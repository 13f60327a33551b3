"""Settings for the demo entry point, loaded from the environment and .env."""

from functools import lru_cache

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict

from issue_tracker.adapters.github_models import DEFAULT_API_ENDPOINT, ClientConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    github_pat: str | None = None
    github_owner: str | None = None
    github_repo: str | None = None
    github_api_endpoint: str = DEFAULT_API_ENDPOINT
    http_timeout_seconds: float = 30.0

    def missing_required(self) -> list[str]:
        """Names of the required environment variables that are unset or blank."""
        required = {
            "GITHUB_PAT": self.github_pat,
            "GITHUB_OWNER": self.github_owner,
            "GITHUB_REPO": self.github_repo,
        }
        return [name for name, value in required.items() if not (value and value.strip())]

    def to_client_config(self) -> ClientConfig:
        return ClientConfig(
            token=self.github_pat or "",
            owner=self.github_owner or "",
            repo=self.github_repo or "",
            api_endpoint=self.github_api_endpoint,
            http_client=httpx.Client(timeout=self.http_timeout_seconds),
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
