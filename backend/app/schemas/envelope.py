from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

DataT = TypeVar("DataT")

class Envelope(BaseModel, Generic[DataT]):
    """모든 엔드포인트 공통 응답 형식"""
    status: int
    message: str
    data: Optional[DataT] = None
