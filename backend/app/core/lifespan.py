import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from .config import settings
from .database import init_db, dispose_engine
from services.coingecko.client import coingecko_service

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- 앱 시작 ---
    logger.info("✅ FastAPI 앱이 시작됩니다.")

    await init_db()

    # --- 앱 종료 ---
    yield
    logger.info("✅ FastAPI 앱이 종료됩니다.")

    await coingecko_service.aclose()
    logger.info("✅ CoinGecko 클라이언트를 종료했습니다.")

    logger.info("✅ 데이터베이스 엔진 연결을 종료합니다.")
    await dispose_engine()
    logger.info("✅ 데이터베이스 엔진이 종료되었습니다.")
