"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # HTTP fetches
    http_timeout_seconds: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    # Article extractor subprocess (reads an HTML snapshot, prints text).
    # "{path}" in the command is replaced with the snapshot path, otherwise
    # the snapshot is fed on stdin.
    article_extractor_command: str = "trafilatura"
    article_extractor_timeout_seconds: float = 30.0

    # Video metadata subprocess
    video_metadata_command: str = "yt-dlp"
    video_metadata_timeout_seconds: float = 45.0

    # Transcripts
    transcript_timeout_seconds: float = 20.0
    transcript_languages: str = "en"  # Comma-separated fallback order
    youtube_proxy_url: str = ""

    # Social posts
    social_proxy_host: str = "twitframe.com"

    # Wall-clock budget for one extract() call
    extraction_timeout_seconds: float = 90.0

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    @property
    def transcript_language_list(self) -> list[str]:
        return [lang.strip() for lang in self.transcript_languages.split(",") if lang.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
