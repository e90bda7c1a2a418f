from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class CustomSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


class AppSettings(CustomSettings):
    ENVIRONMENT: Literal["local", "dev", "prod"] = Field(default="local")
    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=False)


class DbSettings(CustomSettings):
    """Connection settings for the conversation database.

    Env vars:
    - DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME
    - DB_ENGINE (SQLAlchemy async driver, e.g. mysql+aiomysql)
    - DB_POOL_SIZE, DB_POOL_TIMEOUT, DB_POOL_RECYCLE
    - DATABASE_URL (overrides the individual connection values)
    """

    DB_ENGINE: str = Field(default="mysql+aiomysql")
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=3306)
    DB_USER: str = Field(default="root")
    DB_PASSWORD: SecretStr = Field(default=SecretStr(""))
    DB_NAME: str = Field(default="u130660877_zulu")
    # Max simultaneous connections; callers beyond this wait in the pool queue
    DB_POOL_SIZE: int = Field(default=10, ge=1)
    # None waits forever for a free connection
    DB_POOL_TIMEOUT: Optional[float] = Field(default=None)
    DB_POOL_RECYCLE: int = Field(default=3600)
    DATABASE_URL: str = Field(default="")

    @model_validator(mode="after")
    def build_database_url(self):
        if not self.DATABASE_URL:
            password = self.DB_PASSWORD.get_secret_value()
            self.DATABASE_URL = URL.create(
                drivername=self.DB_ENGINE,
                username=self.DB_USER,
                password=password or None,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            ).render_as_string(hide_password=False)
        return self


class Settings(BaseModel):
    APP: AppSettings = Field(default_factory=AppSettings)
    DATABASE: DbSettings = Field(default_factory=DbSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()


SETTINGS = get_settings()
