"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use EMBEDMD_ prefix (e.g., EMBEDMD_FETCH_TIMEOUT=10).

Settings can also be loaded from a .env file in the project root.

These values only seed defaults for the command line and the default
fetcher. The document processor itself takes its configuration explicitly
through ProcessOptions.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use EMBEDMD_ prefix.

    Examples:
        EMBEDMD_FETCH_TIMEOUT=5
        EMBEDMD_DOCUMENT_GLOB=docs/**/*.md
        EMBEDMD_LEXER_ALIASES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="EMBEDMD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Fetch configuration
    fetch_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for fetching http(s) references",
    )

    user_agent: str = Field(
        default="embedmd/1.0.0",
        description="User-Agent header sent with http(s) fetches",
    )

    # Discovery configuration
    document_glob: str = Field(
        default="**/*.md",
        description="Glob (relative to inputdir) selecting documents to process",
    )

    # Language resolution
    lexer_aliases: bool = Field(
        default=False,
        description="Map file extensions to Pygments lexer aliases (md -> markdown) "
                    "when a directive omits its language",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
