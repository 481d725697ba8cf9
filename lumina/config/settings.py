# lumina/config/settings.py
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Full SQLAlchemy URL wins over the discrete PostgreSQL fields
    database_url_raw: str | None = Field(default=None, validation_alias="DATABASE_URL")

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "lumina"
    db_user: str = "lumina"
    db_password: str = ""
    auto_create_tables: bool = False

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    jwt_secret: str = "dev-secret-change-me"
    password_iterations: int = 600_000
    jwt_access_minutes: int = 60
    jwt_issuer: str = "lumina-api"
    jwt_audience: str = "lumina-web"

    api_prefix: str = "/api"
    socketio_path: str = "/socket.io"
    socketio_async_mode: str = "eventlet"
    max_request_bytes: int = 64 * 1024

    cors_origins_raw: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("api_prefix", mode="before")
    @classmethod
    def normalize_prefix(cls, v):
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @property
    def database_url(self) -> str:
        if self.database_url_raw:
            return self.database_url_raw

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        return f"postgresql+psycopg2://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]


settings = Settings()
