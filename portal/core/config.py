# portal/core/config.py
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Remote housing backend, e.g. http://housingms.runasp.net
    API_BASE_URL: str = ""

    # Client-local storage (token + cached user profile)
    SESSION_FILE: str = ".portal_session.json"

    ENV: str = "dev"  # "dev" or "prod"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
