from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Quote backend serving /check-zip, /get-pricing, /submit-quote ...
    BACKEND_BASE_URL: str | None = None
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    STRIPE_SECRET_KEY: str | None = None

    SERVICE_STATE: str = "CA"
    # Used by the mock service area in dev
    MOCK_SERVICE_AREA_ZIPS: str = "91701,91730,91737,91739,91710"

    # Idle sessions are dropped after this long
    SESSION_TTL_SECONDS: float = 3600

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
