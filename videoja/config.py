from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    GEMINI_API_KEY: str = ""
    VIDEO_MODEL: str = "veo-3.1-fast-generate-preview"
    SCRIPT_MODEL: str = "gemini-2.5-flash"

    POLL_INTERVAL_SECONDS: float = 5.0
    # None waits for as long as the remote operation lives
    MAX_WAIT_SECONDS: float | None = 900.0

    WELCOME_CREDITS: int = 100
    CREDITS_PER_PAYMENT_UNIT: int = 10
    COST_720P: int = 30
    COST_1080P: int = 50
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

    CREDENTIAL_RECHECK_ATTEMPTS: int = 2
    CREDENTIAL_RECHECK_DELAY_SECONDS: float = 1.0
    CREDENTIAL_RECHECK_BACKOFF: float = 2.0

    DEFAULT_EMAIL: str = "creator@videoja.ai"

    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
