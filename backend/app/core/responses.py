from typing import Any, Mapping, Optional
from fastapi.responses import JSONResponse

def envelope(status: int, message: str, data: Any = None) -> dict:
    return {"status": status, "message": message, "data": data}

def envelope_response(
    status: int,
    message: str,
    data: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """모든 오류 응답에 사용하는 공통 봉투"""
    return JSONResponse(status_code=status, content=envelope(status, message, data), headers=headers)
