from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str

    # Remote employer cost calculation (edge function). Unset = local only
    COST_CALCULATOR_URL: Optional[str] = None
    COST_CALCULATOR_API_KEY: Optional[str] = None
    COST_CALCULATOR_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
