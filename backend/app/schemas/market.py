from pydantic import BaseModel
from typing import Any

class CoinDetailRequest(BaseModel):
    id: Any = None

class MarketsData(BaseModel):
    markets: Any

class CoinData(BaseModel):
    coin: Any
