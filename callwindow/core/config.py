from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_ENV: str = "dev"  # dev|prod|test
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEFAULT_TENANT_ID: str = "default"
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_HOST: str = "postgres"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "callwindow"
    POSTGRES_USER: str = "callwindow"
    POSTGRES_PASSWORD: str = "callwindow"
    # Optional: full database URL override (e.g., sqlite:///./test.db). When set, it takes precedence.
    DATABASE_URL_OVERRIDE: str = ""

    # Redis / Celery
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    # Outbound calls
    CALL_PROVIDER: str = "noop"
    CALL_DISPATCH_MAX_RETRIES: int = 5

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def REDIS_URL(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore


settings = get_settings()
