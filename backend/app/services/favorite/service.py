import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from services.favorite.store import FavoriteStore, FavoriteTransaction

logger = logging.getLogger(__name__)

class FavoriteService:
    def __init__(self, store: Optional[FavoriteStore] = None):
        self.store = store or FavoriteStore()

    async def toggle_favorite(self, db: AsyncSession, user_id: str, coin_id: str) -> bool:
        """
        즐겨찾기 토글 (없으면 추가, 있으면 삭제)
        True: 이번 호출로 추가됨 / False: 이번 호출로 삭제됨
        """
        async def _toggle(tx: FavoriteTransaction) -> bool:
            existing = await tx.get(user_id, coin_id)
            if existing:
                await tx.delete(existing)
                return False
            tx.create(user_id, coin_id)
            return True

        favorited = await self.store.run_transaction(db, _toggle)
        logger.info(f"✅ 즐겨찾기 {'추가' if favorited else '삭제'}: user={user_id}, coin={coin_id}")
        return favorited

    async def list_favorites(self, db: AsyncSession, user_id: str) -> List[str]:
        """최근 추가한 순서의 코인 ID 목록"""
        favorites = await self.store.list_favorites(db, user_id)
        return [favorite.coin_id for favorite in favorites]

favorite_service = FavoriteService()
