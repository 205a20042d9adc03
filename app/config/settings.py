from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # GitHub identity the aggregator reports on (required at call time)
    github_username: str = ""
    # Optional static token; raises the API rate limit from 60 to 5000 req/hour
    github_token: str = ""
    github_user_agent: str = "github-activity-api"

    # Aggregated data cache (3 minutes by default)
    github_cache_ttl_seconds: int = 180
    github_cache_maxsize: int = 32

    # Per-request timeouts for the shared GitHub client
    github_request_timeout_seconds: float = 30.0
    github_connect_timeout_seconds: float = 5.0

    # Requests in flight per aggregation (1 = sequential across repositories)
    github_max_concurrency: int = 1

    @property
    def github_token_configured(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)


settings = Settings()
