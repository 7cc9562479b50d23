import logging
from functools import lru_cache
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from typing import AsyncGenerator

from .config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# 읽기 전용 트랜잭션 표시용 실행 옵션 (SQLite 에서 쓰기 잠금 없이 시작)
READ_ONLY_OPTION = "favorites_read_only"

def _use_immediate_transactions(engine: AsyncEngine) -> None:
    """
    SQLite는 첫 쓰기 시점에야 쓰기 잠금을 잡으므로,
    트랜잭션 시작 시 BEGIN IMMEDIATE 로 잠금을 먼저 획득한다.
    READ_ONLY_OPTION 이 붙은 연결은 일반 BEGIN (DEFERRED) 으로 시작한다.
    """
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin(conn):
        if conn.get_execution_options().get(READ_ONLY_OPTION):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")

def build_engine(url: str) -> AsyncEngine:
    engine = create_async_engine(url, echo=False)
    if engine.dialect.name == "sqlite":
        _use_immediate_transactions(engine)
    return engine

# 프로세스 전체에서 공유하는 핸들 (첫 요청 시 생성)
@lru_cache()
def get_engine() -> AsyncEngine:
    return build_engine(settings.DATABASE_URL)

@lru_cache()
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )

async def init_db():
    try:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ 데이터베이스 테이블이 성공적으로 생성되었습니다.")
    except Exception as e:
        logger.error(f"⛔ 데이터베이스 테이블을 생성하는 중 오류가 발생했습니다: {e}")

async def dispose_engine():
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
        get_sessionmaker.cache_clear()
        get_engine.cache_clear()

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with get_sessionmaker()() as session:
        yield session
