from pathlib import Path
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = BASE_DIR / ".env"


class Settings(BaseSettings):

    DB_USER: str
    DB_PASSWORD: SecretStr
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "recipes"
    DB_ECHO: bool = False
    DB_CREATE_TABLES: bool = True

    JWT_SECRET_KEY: SecretStr
    JWT_EXPIRE_MINUTES: int = 60

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    LOG_FILE: str | None = None
    LOG_FILE_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_FILE_BACKUP_COUNT: int = 5

    @property
    def POSTGRES_DATABASE_URL(self) -> str:
        password = self.DB_PASSWORD.get_secret_value()
        return f"postgresql+asyncpg://{self.DB_USER}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
