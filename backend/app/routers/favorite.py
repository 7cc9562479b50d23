import logging
from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from core.database import get_db
from core.exceptions import StoreUnavailableError
from core.validation import clean_user_id, clean_coin_id
from schemas.envelope import Envelope
from schemas.favorite import FavoriteListRequest, FavoriteToggleRequest, FavoriteListData, FavoriteToggleData
from services.favorite.service import favorite_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/favorites", tags=["Favorites"])

async def _list_favorites(db: AsyncSession, raw_user_id) -> Envelope[FavoriteListData]:
    user_id = clean_user_id(raw_user_id)

    try:
        favorites = await favorite_service.list_favorites(db, user_id)
    except StoreUnavailableError as e:
        logger.error(f"⛔ 즐겨찾기 조회 실패: user={user_id}, {e}")
        raise StoreUnavailableError("Failed to fetch favorites") from e

    return Envelope[FavoriteListData](
        status=200,
        message="Favorites fetched successfully",
        data=FavoriteListData(favorites=favorites),
    )

@router.get("", response_model=Envelope[FavoriteListData])
async def get_favorites(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """사용자 즐겨찾기 목록 조회 (최근 추가 순)"""
    return await _list_favorites(db, user_id)

@router.post("", response_model=Envelope[FavoriteListData])
async def post_favorites(
    payload: Optional[FavoriteListRequest] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """GET 과 동일. userId 를 본문으로 받는다"""
    return await _list_favorites(db, payload.userId if payload else None)

@router.post("/toggle", response_model=Envelope[FavoriteToggleData])
async def toggle_favorite(
    payload: Optional[FavoriteToggleRequest] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """즐겨찾기 토글 (없으면 추가, 있으면 삭제)"""
    payload = payload or FavoriteToggleRequest()
    user_id = clean_user_id(payload.userId)
    coin_id = clean_coin_id(payload.coinId)

    try:
        favorited = await favorite_service.toggle_favorite(db, user_id, coin_id)
    except StoreUnavailableError as e:
        logger.error(f"⛔ 즐겨찾기 토글 실패: user={user_id}, coin={coin_id}, {e}")
        raise StoreUnavailableError("Failed to toggle favorite") from e

    return Envelope[FavoriteToggleData](
        status=200,
        message="Added to favorites" if favorited else "Removed from favorites",
        data=FavoriteToggleData(favorited=favorited),
    )
