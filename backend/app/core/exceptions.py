from typing import Any


class APIError(Exception):
    """응답 봉투(status / message / data)로 변환되는 애플리케이션 예외"""

    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None, data: Any = None):
        self.message = message or self.message
        self.status_code = status_code or self.status_code
        self.data = data
        super().__init__(self.message)


class InvalidParameterError(APIError):
    """식별자/파라미터 형식 오류 (저장소 접근 전에 거부)"""

    status_code = 400
    message = "Invalid request parameter"


class UpstreamError(APIError):
    """CoinGecko 가 비정상 상태 코드를 응답한 경우. 상태 코드와 본문을 그대로 전달"""

    message = "Upstream CoinGecko error"

    def __init__(self, status_code: int, body: str):
        super().__init__(status_code=status_code, data={"error": body})
        self.body = body


class UpstreamUnavailableError(APIError):
    status_code = 500
    message = "Failed to fetch data"


class StoreUnavailableError(APIError):
    """저장소 접근 불가 또는 트랜잭션 재시도 초과"""

    status_code = 500
    message = "Document store unavailable"
