from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    MASTER_DB_NAME: str = "invix_master"

    # örn. sqlite+pysqlite:///./invix.db ; boşsa postgres bilgilerinden kurulur
    DATABASE_URL: Optional[str] = None

    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "CHANGE_ME"
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 12

    COOKIE_SECURE: bool = False  # prod'da True
    # tarayıcılar 400 günden uzun ömrü kabul etmiyor
    SESSION_COOKIE_MAX_AGE: int = 400 * 24 * 60 * 60

    AUTH_ENTRY_ROUTE: str = "/auth"
    ADMIN_ENTRY_ROUTE: str = "/admin"
    CLIENT_DASHBOARD_ROUTE: str = "/dashboard"
    ADMIN_DASHBOARD_ROUTE: str = "/admin/dashboard"

    CLIENT_ID_PREFIX: str = "CLT"

    INITIAL_ADMIN_USERNAME: Optional[str] = None
    INITIAL_ADMIN_PASSWORD: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def MASTER_DB_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://"
            f"{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}"
            f"/{self.MASTER_DB_NAME}"
        )


settings = Settings()
