from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class ModeEnum(str, Enum):
    development = "development"
    production = "production"
    testing = "testing"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file="../.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── App ───────────────────────────────────────────────────
    MODE: ModeEnum = ModeEnum.production
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "PITCHSTYLE"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # ── Deck database ─────────────────────────────────────────
    # A full DATABASE_URL wins over the individual parts
    DATABASE_URL: str = ""
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "pitchstyle"
    DATABASE_POOL_SIZE: int = 5

    @property
    def ASYNC_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    # ── OpenAI / styling classifier ───────────────────────────
    OPENAI_API_KEY: str = ""
    STYLING_MODEL: str = "openai:gpt-4o"
    CLASSIFIER_TIMEOUT_SECONDS: float = 15.0

    # Extra attempts for a deck's write-back after the first one fails
    STYLING_WRITE_RETRIES: int = 1


settings = Settings()
