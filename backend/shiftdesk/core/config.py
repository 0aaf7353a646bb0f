from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    database_url: str

    # JWT issued by the session provider (cookie or bearer)
    JWT_SECRET: str
    JWT_ISS: str = "shiftdesk-web"
    JWT_AUD: str = "shiftdesk-api"
    ACCESS_TOKEN_TTL_SECONDS: int = 60 * 60 * 24 * 7  # 7 days

    # Accept x-user-email from the frontend proxy instead of a token
    TRUST_EMAIL_HEADER: bool = False

    CORS_ORIGINS: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    DEFAULT_PAGE_SIZE: int = 100
    MAX_PAGE_SIZE: int = 500

    def cors_origins(self) -> list[str]:
        raw = (self.CORS_ORIGINS or "").strip()
        if not raw:
            return []
        return [x.strip() for x in raw.split(",") if x.strip()]


settings = Settings()
