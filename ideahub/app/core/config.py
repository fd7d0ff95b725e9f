"""Application configuration."""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./ideahub.db",
        description="Database connection URL"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # Identity tokens (issued by the external identity provider)
    secret_key: str = Field(
        default="change-this-to-a-random-secret-key-in-production",
        description="Shared secret used to verify identity tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    jwt_expiration_hours: int = Field(default=12, description="JWT token expiration in hours")

    # Feed
    feed_page_size: int = Field(
        default=50,
        description="Maximum number of ideas fetched per feed query (before search filtering)"
    )
    recent_ideas_limit: int = Field(
        default=10,
        description="Default number of ideas returned by the recent ideas endpoint"
    )

    # Idea Validation
    max_title_length: int = Field(default=100, description="Maximum length of idea titles")
    max_description_length: int = Field(
        default=2000,
        description="Maximum length of idea descriptions"
    )
    max_comment_length: int = Field(default=1000, description="Maximum length of comments")

    # Collaboration
    require_social_link_for_collaboration: bool = Field(
        default=True,
        description="Require a GitHub or LinkedIn link on the requester's profile"
    )

    # GitHub OAuth
    github_client_id: str | None = Field(default=None, description="GitHub OAuth client ID")
    github_client_secret: str | None = Field(default=None, description="GitHub OAuth client secret")
    github_redirect_uri: str = Field(
        default="http://localhost:3000/api/github/callback",
        description="Redirect URI registered with the GitHub OAuth app"
    )
    github_timeout: float = Field(default=10.0, description="Timeout for GitHub API calls in seconds")

    # Development Settings
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("feed_page_size")
    @classmethod
    def validate_feed_page_size(cls, v: int) -> int:
        """Validate feed page size is within reasonable range."""
        if v < 1:
            raise ValueError("feed_page_size must be at least 1")
        if v > 500:
            raise ValueError("feed_page_size should not exceed 500 for performance")
        return v

    @field_validator(
        "recent_ideas_limit",
        "max_title_length",
        "max_description_length",
        "max_comment_length",
        "jwt_expiration_hours",
    )
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate integer is positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("github_timeout")
    @classmethod
    def validate_github_timeout(cls, v: float) -> float:
        """Validate GitHub timeout is positive."""
        if v <= 0:
            raise ValueError("github_timeout must be positive")
        return v

    @model_validator(mode="after")
    def validate_recent_limit(self) -> "Settings":
        """Validate recent ideas limit does not exceed the feed page size."""
        if self.recent_ideas_limit > self.feed_page_size:
            raise ValueError(
                "recent_ideas_limit must be less than or equal to feed_page_size"
            )
        return self


# Global settings instance
settings = Settings()
