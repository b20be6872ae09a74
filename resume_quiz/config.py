from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    db_path: str = "./data/leaderboard.db"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    cors_origins: list[str] = ["*"]
    leaderboard_size: int = 10

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    llm_timeout: float = 60.0

    # Where the quiz client finds the leaderboard service
    service_url: str = "http://localhost:8000"
    request_timeout: float = 10.0

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
