from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Bill Split Backend"
    API_PREFIX: str = "/api/v1"

    LOG_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_STRUCTURED: bool = False

    # Push percentage rounding drift onto the first participants so the
    # returned splits always add up to the expense total.
    REDISTRIBUTE_PERCENTAGE_REMAINDER: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
