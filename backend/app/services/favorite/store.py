import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional, TypeVar

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from core.config import settings
from core.database import READ_ONLY_OPTION
from core.exceptions import StoreUnavailableError
from models.favorite import Favorite

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FavoriteConflictError(Exception):
    """읽은 이후 다른 트랜잭션이 같은 키를 변경한 경우"""


# 재시도 대상: 유니크 제약 위반(동시 생성), 조건부 삭제 실패(동시 삭제), 잠금 경합
# 연결 거부, 타임아웃 등 드라이버가 그대로 올리는 네트워크 오류 포함
RETRYABLE_ERRORS = (IntegrityError, OperationalError, FavoriteConflictError, OSError, asyncio.TimeoutError)

STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class FavoriteTransaction:
    """
    한 번의 트랜잭션 시도 동안 사용하는 핸들.
    모든 즐겨찾기 변경은 이 핸들을 통해서만 이루어진다.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str, coin_id: str) -> Optional[Favorite]:
        result = await self.session.execute(
            select(Favorite)
            .where(Favorite.user_id == user_id, Favorite.coin_id == coin_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def create(self, user_id: str, coin_id: str) -> Favorite:
        # created_at 은 저장소가 커밋 시점에 채운다
        favorite = Favorite(user_id=user_id, coin_id=coin_id)
        self.session.add(favorite)
        return favorite

    async def delete(self, favorite: Favorite) -> None:
        """읽었던 행(id)이 그대로 남아 있을 때만 삭제"""
        result = await self.session.execute(
            delete(Favorite).where(Favorite.id == favorite.id)
        )
        if result.rowcount != 1:
            raise FavoriteConflictError(
                f"favorite {favorite.user_id}/{favorite.coin_id} was removed concurrently"
            )


class FavoriteStore:
    def __init__(self, max_attempts: Optional[int] = None, backoff_seconds: Optional[float] = None):
        self.max_attempts = max_attempts or settings.FAVORITE_TX_MAX_ATTEMPTS
        self.backoff_seconds = settings.FAVORITE_TX_RETRY_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds

    async def _rollback(self, db: AsyncSession) -> None:
        # 연결이 끊긴 경우 롤백도 실패할 수 있다. 원래 오류를 우선한다
        try:
            await db.rollback()
        except STORE_ERRORS as e:
            logger.error(f"⛔ 즐겨찾기 트랜잭션 롤백 실패: {e}")

    async def run_transaction(
        self,
        db: AsyncSession,
        work: Callable[[FavoriteTransaction], Awaitable[T]],
    ) -> T:
        """
        work 를 하나의 트랜잭션으로 실행하고 커밋된 결과를 반환.
        충돌이 감지되면 롤백 후 처음부터 다시 실행한다.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = await work(FavoriteTransaction(db))
                await db.commit()
                return result
            except RETRYABLE_ERRORS as e:
                await self._rollback(db)
                if attempt == self.max_attempts:
                    logger.error(f"⛔ 즐겨찾기 트랜잭션 재시도 횟수 초과 ({attempt}회): {e}")
                    raise StoreUnavailableError() from e
                logger.warning(f"💡 즐겨찾기 트랜잭션 충돌, 재시도합니다 ({attempt}/{self.max_attempts}): {e}")
                await asyncio.sleep(self.backoff_seconds * attempt * (1 + random.random()))
            except SQLAlchemyError as e:
                await self._rollback(db)
                logger.error(f"⛔ 즐겨찾기 트랜잭션 실패: {e}", exc_info=True)
                raise StoreUnavailableError() from e

        raise StoreUnavailableError()

    async def list_favorites(self, db: AsyncSession, user_id: str) -> List[Favorite]:
        """
        최근 추가 순 (created_at, id 내림차순)
        진행 중인 트랜잭션이 없으면 읽기 전용으로 시작하고 조회 후 바로 끝낸다
        """
        owns_transaction = not db.in_transaction()
        try:
            if owns_transaction:
                await db.connection(execution_options={READ_ONLY_OPTION: True})
            result = await db.execute(
                select(Favorite)
                .where(Favorite.user_id == user_id)
                .order_by(Favorite.created_at.desc(), Favorite.id.desc())
            )
            favorites = list(result.scalars().all())
            if owns_transaction:
                await db.commit()
            return favorites
        except STORE_ERRORS as e:
            await self._rollback(db)
            logger.error(f"⛔ 즐겨찾기 목록 조회 실패: {e}", exc_info=True)
            raise StoreUnavailableError() from e
