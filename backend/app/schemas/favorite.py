from pydantic import BaseModel
from typing import Any, List

# 형식 검증은 core.validation 에서 수행하므로 입력 타입은 느슨하게 받는다
class FavoriteListRequest(BaseModel):
    userId: Any = None

class FavoriteToggleRequest(BaseModel):
    userId: Any = None
    coinId: Any = None

class FavoriteListData(BaseModel):
    favorites: List[str]

class FavoriteToggleData(BaseModel):
    favorited: bool
