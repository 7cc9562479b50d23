import os
from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # URL & URI
    DATABASE_URL: str = "sqlite+aiosqlite:///./favorites.db"
    COINGECKO_BASE_URL: str = "https://api.coingecko.com/api/v3"

    # Keys
    COINGECKO_API_KEY: str | None = None

    # CoinGecko 요청 타임아웃 (초)
    COINGECKO_TIMEOUT_SECONDS: float = 10.0

    # 즐겨찾기 트랜잭션 충돌 시 재시도 정책
    FAVORITE_TX_MAX_ATTEMPTS: int = 5
    FAVORITE_TX_RETRY_BACKOFF_SECONDS: float = 0.05

    LOG_LEVEL: str = "INFO"

    class Config:
        current_file_dir = os.path.dirname(os.path.abspath(__file__))
        app_dir = os.path.dirname(current_file_dir)
        backend_dir = os.path.dirname(app_dir)

        env_file = os.path.join(backend_dir, ".env")
        env_file_encoding = "utf-8"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
