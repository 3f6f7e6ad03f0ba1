"""Configuration module using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (prefix TICTACTOE_) and .env file.

    Attributes:
        rows: Number of rows on a new board.
        cols: Number of columns on a new board.
        move_latency_seconds: Delay before a submitted move gets applied (stand-in for a round trip).
        database_url: SQLAlchemy database URL. In-memory by default, nothing survives the process.
        echo_sql: Let SQLAlchemy log all statements.
        log_level: Level for the application loggers.
        player1_name: Display name of the player using X.
        player2_name: Display name of the player using O.
    """

    model_config = SettingsConfigDict(
        env_prefix="TICTACTOE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Board dimensions (only 3x3 is really supported; diagonals break on non-square boards)
    rows: int = Field(default=3, ge=1, description="Rows on the board")
    cols: int = Field(default=3, ge=1, description="Columns on the board")

    # Move submission
    move_latency_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Simulated round trip before a move resolves",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///:memory:",
        description="Database connection URL",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Players
    player1_name: str = Field(default="Player 1", description="Name of player 1 (X)")
    player2_name: str = Field(default="Player 2", description="Name of player 2 (O)")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
