from fastapi import APIRouter, Body, Depends, Query
from typing import Optional

from core.validation import clean_currency, clean_coin_id
from schemas.envelope import Envelope
from schemas.market import CoinDetailRequest, MarketsData, CoinData
from services.coingecko.client import CoinGeckoService, get_coingecko_service

router = APIRouter(tags=["Markets"])

@router.get("/markets", response_model=Envelope[MarketsData])
async def get_markets(
    currency: Optional[str] = Query(None, description="기준 통화 (기본값 usd)"),
    coingecko: CoinGeckoService = Depends(get_coingecko_service)
):
    """CoinGecko 코인 시세 목록 (그대로 전달)"""
    vs_currency = clean_currency(currency)
    markets = await coingecko.get_markets(vs_currency)

    return Envelope[MarketsData](
        status=200,
        message="Markets fetched successfully",
        data=MarketsData(markets=markets),
    )

@router.post("/coins", response_model=Envelope[CoinData])
async def get_coin(
    payload: Optional[CoinDetailRequest] = Body(None),
    coingecko: CoinGeckoService = Depends(get_coingecko_service)
):
    """CoinGecko 코인 상세 정보 (그대로 전달)"""
    coin_id = clean_coin_id(payload.id if payload else None, field="id")
    coin = await coingecko.get_coin(coin_id)

    return Envelope[CoinData](
        status=200,
        message="Coin fetched successfully",
        data=CoinData(coin=coin),
    )
