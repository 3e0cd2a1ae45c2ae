import logging
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_ALERT_COOLDOWN = 30.0

# Hardware identifiers flashed on the field units
ESP_HARDWARE_IDS: List[str] = [
    "HELADERA-01",
    "HELADERA-02",
    "HELADERA-03",
    "HELADERA-04",
    "HELADERA-05",
]


class Settings(BaseSettings):
    PROJECT_NAME: str = "Cold Chain Monitor"
    PROJECT_VERSION: str = "0.1.0"
    DATABASE_URL: str
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24 * 7

    EVOLUTION_API_URL: str = "http://localhost:8080"
    EVOLUTION_INSTANCE: str = "default"
    EVOLUTION_API_KEY: str = ""
    OUTBOUND_TIMEOUT: float = 10.0

    QUICKCHART_HOST: str = "quickchart.io"
    TIMEZONE: str = "America/Argentina/Buenos_Aires"

    # Minutes between two alerts for the same sensor
    ALERT_COOLDOWN: float = DEFAULT_ALERT_COOLDOWN

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("ALERT_COOLDOWN", mode="before")
    @classmethod
    def cooldown_fails_closed(cls, value):
        """Fall back to the default window instead of refusing to start."""
        if value is None or value == "":
            return DEFAULT_ALERT_COOLDOWN
        try:
            minutes = float(value)
        except (TypeError, ValueError):
            logger.warning("Invalid ALERT_COOLDOWN %r, using %s minutes", value, DEFAULT_ALERT_COOLDOWN)
            return DEFAULT_ALERT_COOLDOWN
        if minutes != minutes or minutes < 0:
            logger.warning("Invalid ALERT_COOLDOWN %r, using %s minutes", value, DEFAULT_ALERT_COOLDOWN)
            return DEFAULT_ALERT_COOLDOWN
        return minutes


settings = Settings()
