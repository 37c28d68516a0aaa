"""Settings for the connected screens relay."""

from enum import Enum
from typing import Any, Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""

    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):  # type: ignore[misc]
    """
    Main settings class.

    Values are read from flat, case-sensitive environment variables
    (or a local `.env` file) and fall back to the defaults below.
    """

    model_config = SettingsConfigDict(
        case_sensitive=True, env_file=".env", extra="ignore"
    )

    # Environment configuration
    ENV: Environment = Environment.DEV

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8081
    WS_PATH: str = "/"

    # Shared state defaults
    INITIAL_POSITION_X: float = 50.0
    INITIAL_POSITION_Y: float = 50.0
    INITIAL_SCREEN: int = 0

    # Move validation bounds (None disables the check)
    MAX_SCREEN_INDEX: int | None = None
    POSITION_MIN: float | None = None
    POSITION_MAX: float | None = None

    # Seconds a single send may take before the connection is dropped
    # (None waits forever)
    SEND_TIMEOUT_SECONDS: float | None = 5.0

    # Logging settings
    LOG_FILE_PATH: str = "logs/logging_errors.log"
    LOG_EXCLUDED_PATHS: list[str] = ["/metrics", "/health"]
    LOG_LEVEL: str = "INFO"
    LOG_CONSOLE_FORMAT: Literal["human", "json"] = "human"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize settings with environment-specific defaults."""
        super().__init__(**kwargs)
        self._apply_environment_defaults()

    @model_validator(mode="after")
    def check_bounds(self) -> "Settings":
        if (
            self.POSITION_MIN is not None
            and self.POSITION_MAX is not None
            and self.POSITION_MIN > self.POSITION_MAX
        ):
            raise ValueError("POSITION_MIN must not be greater than POSITION_MAX")

        if self.INITIAL_SCREEN < 0:
            raise ValueError("INITIAL_SCREEN must be non-negative")

        if (
            self.SEND_TIMEOUT_SECONDS is not None
            and self.SEND_TIMEOUT_SECONDS <= 0
        ):
            raise ValueError("SEND_TIMEOUT_SECONDS must be positive")

        if not self.WS_PATH.startswith("/"):
            raise ValueError("WS_PATH must start with '/'")

        return self

    def _apply_environment_defaults(self) -> None:
        """
        Apply environment-specific configuration defaults.

        Only fields that were not given explicitly (as keyword arguments,
        environment variables or `.env` entries) are changed.
        """
        if self.ENV == Environment.PRODUCTION:
            if "LOG_CONSOLE_FORMAT" not in self.model_fields_set:
                self.LOG_CONSOLE_FORMAT = "json"
            if "LOG_LEVEL" not in self.model_fields_set:
                self.LOG_LEVEL = "WARNING"

        elif self.ENV == Environment.STAGING:
            if "LOG_CONSOLE_FORMAT" not in self.model_fields_set:
                self.LOG_CONSOLE_FORMAT = "json"
            if "LOG_LEVEL" not in self.model_fields_set:
                self.LOG_LEVEL = "INFO"

        else:  # Environment.DEV
            if "LOG_CONSOLE_FORMAT" not in self.model_fields_set:
                self.LOG_CONSOLE_FORMAT = "human"
            if "LOG_LEVEL" not in self.model_fields_set:
                self.LOG_LEVEL = "DEBUG"


app_settings = Settings()
