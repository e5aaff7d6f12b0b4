from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "taxcore"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    APP_DATABASE_DSN: str = "sqlite:////tmp/taxcore.db"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Tenant used when a request carries no X-Tenant-Id header
    DEFAULT_TENANT_ID: str = "default-tenant"

    # Tax defaults
    TAX_DEFAULT_JURISDICTION: str = "DE"
    TAX_DEFAULT_CURRENCY: str = "EUR"

    @property
    def version(self) -> str:
        return self.APP_VERSION


settings = Settings()
