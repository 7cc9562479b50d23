import httpx
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from core.config import settings
from core.exceptions import UpstreamError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

class CoinGeckoService:
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.COINGECKO_BASE_URL
        self.api_key = api_key or settings.COINGECKO_API_KEY
        self.timeout = timeout or settings.COINGECKO_TIMEOUT_SECONDS
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-cg-demo-api-key"] = self.api_key
        return headers

    @property
    def client(self) -> httpx.AsyncClient:
        # 모든 요청이 공유하는 클라이언트 (최초 사용 시 생성)
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._get_headers(),
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_markets(self, currency: str) -> Any:
        """시가총액 기준 코인 시세 목록"""
        return await self._get_json("/coins/markets", params={"vs_currency": currency})

    async def get_coin(self, coin_id: str) -> Any:
        """코인 상세 정보"""
        return await self._get_json(f"/coins/{quote(coin_id, safe='')}")

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            response = await self.client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"⛔ CoinGecko 요청 실패 ({path}): {e}", exc_info=True)
            raise UpstreamUnavailableError() from e

        if not response.is_success:
            text = response.text
            logger.error(f"⛔ CoinGecko API Error ({path}): status={response.status_code}, body={text}")
            raise UpstreamError(response.status_code, text)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"⛔ CoinGecko 응답 JSON 파싱 실패 ({path}): {e}")
            raise UpstreamUnavailableError() from e

coingecko_service = CoinGeckoService()

def get_coingecko_service() -> CoinGeckoService:
    return coingecko_service
