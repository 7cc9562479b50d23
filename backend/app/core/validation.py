import re
from typing import Any

from core.exceptions import InvalidParameterError

USER_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]{3,128}")
COIN_ID_PATTERN = re.compile(r"[a-z0-9-]{2,100}")
CURRENCY_PATTERN = re.compile(r"[a-z]{2,10}")

DEFAULT_CURRENCY = "usd"

def clean_user_id(raw: Any) -> str:
    user_id = raw.strip() if isinstance(raw, str) else ""
    if not user_id or not USER_ID_PATTERN.fullmatch(user_id):
        raise InvalidParameterError("Invalid or missing 'userId'")
    return user_id

def clean_coin_id(raw: Any, field: str = "coinId") -> str:
    """
    코인 ID 정규화 (공백 제거 + 소문자)
    field 는 오류 메시지에 표시할 요청 필드명
    """
    coin_id = raw.strip().lower() if isinstance(raw, str) else ""
    if not coin_id or not COIN_ID_PATTERN.fullmatch(coin_id):
        if field == "id":
            raise InvalidParameterError("Invalid or missing 'id' in request body")
        raise InvalidParameterError(f"Invalid or missing '{field}'")
    return coin_id

def clean_currency(raw: str | None) -> str:
    currency = str(raw or DEFAULT_CURRENCY).lower()
    if not CURRENCY_PATTERN.fullmatch(currency):
        raise InvalidParameterError("Invalid currency parameter")
    return currency
