"""USD/TRY exchange rate from the public currency API, with fallback."""

import time
from decimal import Decimal, InvalidOperation

import httpx
import structlog

from fintrack.config import Settings, settings

logger = structlog.get_logger()

RATE_CACHE_TTL = 300  # 5 minutes


class MarketDataService:
    def __init__(self, config: Settings = settings, client: httpx.AsyncClient | None = None):
        self.config = config
        self.client = client
        self._rate: Decimal | None = None
        self._rate_time: float = 0

    async def _fetch(self, client: httpx.AsyncClient) -> Decimal:
        response = await client.get(self.config.usd_try_rate_url, timeout=self.config.http_timeout)
        response.raise_for_status()
        return Decimal(str(response.json()["usd"]["try"]))

    async def usd_try_rate(self) -> Decimal:
        """Current USD->TRY rate; the configured fallback when the API fails."""
        now = time.time()
        if self._rate is not None and (now - self._rate_time) < RATE_CACHE_TTL:
            return self._rate

        try:
            if self.client is not None:
                rate = await self._fetch(self.client)
            else:
                async with httpx.AsyncClient() as client:
                    rate = await self._fetch(client)
        except (httpx.HTTPError, ValueError, KeyError, TypeError, InvalidOperation) as e:
            logger.warning(
                "usd_try_rate_fallback",
                error=str(e),
                fallback=str(self.config.usd_try_fallback_rate),
            )
            return self.config.usd_try_fallback_rate

        self._rate = rate
        self._rate_time = now
        logger.info("usd_try_rate_fetched", rate=str(rate))
        return rate
