from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DB_URL: str
    LOG_LEVEL: str = "INFO"

    QUOTE_EXPIRY_WARNING_DAYS: int = 7
    QUOTE_NUMBER_MAX_ATTEMPTS: int = 5

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
