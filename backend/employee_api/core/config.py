# backend/employee_api/core/config.py

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_env: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./employees.db"

    # no default on purpose: a build must never ship with a signing secret baked in
    jwt_secret_key: str = Field(
        validation_alias=AliasChoices("JWT_SECRET_KEY", "JWT_SECRET", "SECRET_KEY"),
    )
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # only used to seed an empty accounts table
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"

    # comma-separated allowlist, e.g. "https://staff.example.org,http://localhost:3000"
    cors_origins: str = ""
    frontend_url: str = "http://localhost:3000"

    host: str = "0.0.0.0"
    port: int = 4000

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in ("prod", "production")

    def allow_origins(self) -> list[str]:
        if self.cors_origins.strip():
            return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return list({self.frontend_url.strip(), "http://localhost:3000"})


@lru_cache
def get_settings() -> Settings:
    return Settings()
