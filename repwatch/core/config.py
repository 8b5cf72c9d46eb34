from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str | None = "logs"  # empty disables the file sink
    SLACK_WEBHOOK_URL: str | None = None

    # HTTP surface
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Upstream timeouts
    HTTP_TIMEOUT_SECONDS: float = 15.0
    FEED_TIMEOUT_SECONDS: float = 8.0

    # API Keys
    OPENSTATES_API_KEY: str | None = None
    CONGRESS_API_KEY: str | None = None
    COURTLISTENER_TOKEN: str | None = None

    # Defaults applied when a request omits its jurisdiction
    DEFAULT_JURISDICTION: str = "Nevada"
    DEFAULT_STATE_ABBR: str = "NV"

    # Unified search
    UNIFIED_SEARCH_PAGE_SIZE: int = 8

    # TIGERweb Legislative MapServer layer candidates, tried in order.
    # The upper/lower indices drift between service vintages.
    TIGERWEB_CONGRESSIONAL_LAYERS: list[int] = [0, 20, 18]
    TIGERWEB_UPPER_LAYERS: list[int] = [16, 13, 11, 26, 14, 10, 8, 24]
    TIGERWEB_LOWER_LAYERS: list[int] = [14, 10, 8, 24, 16, 13, 11, 26]

    # Media feeds
    PODCAST_ITUNES_IDS: list[int] = [1224983055, 1727606024, 1669844852]
    PODCAST_FEEDS: dict[str, str] = {
        "KNPR State of Nevada": "https://feeds.npr.org/510374/podcast.xml",
    }
    YOUTUBE_CHANNELS: dict[str, str] = {
        "UCKk6TkLfOoXs2T4vfvdGlnw": "Las Vegas Review-Journal",
        "UCb3BAc46bbny8Ayr-IfHmUw": "Nevada Newsmakers",
        "UC-k1jpdoDwTC475c1CX9cEA": "Nevada State Legislature",
    }

    # Kalshi has no text search; bound the open-events scan
    KALSHI_MAX_PAGES: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "dev"

    @property
    def effective_log_level(self) -> str:
        """Return appropriate log level based on environment."""
        if self.is_production:
            # In production, minimum INFO level (ignore DEBUG)
            return self.LOG_LEVEL if self.LOG_LEVEL.upper() != "DEBUG" else "INFO"
        return self.LOG_LEVEL

    @property
    def docs_enabled(self) -> bool:
        """Swagger/ReDoc docs enabled based on environment or override."""
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development

    @property
    def configured_sources(self) -> dict[str, bool]:
        """Which credential-gated upstreams have their key present."""
        return {
            "openstates": bool(self.OPENSTATES_API_KEY),
            "congress": bool(self.CONGRESS_API_KEY),
            "courtlistener": bool(self.COURTLISTENER_TOKEN),
        }


settings = Settings()
