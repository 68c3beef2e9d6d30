# wordguard/utils/http_client.py
import asyncio
import logging
from typing import Any, Mapping, Optional

import aiohttp
import backoff

logger = logging.getLogger(__name__)


def backoff_hdlr(details):
    """Логирует информацию о повторных попытках запроса."""
    logger.warning(
        "Backing off {wait:0.1f}s after {tries} tries calling function {target.__name__} due to {exception}".format(
            **details
        )
    )


def _is_client_error(e: Exception) -> bool:
    """Ошибки 4xx повторять бессмысленно."""
    return isinstance(e, aiohttp.ClientResponseError) and 400 <= e.status < 500


class HTTPClient:
    """
    Класс-обертка над aiohttp.ClientSession для централизованного
    управления HTTP-запросами, таймаутами и заголовками.
    """

    def __init__(self, default_timeout: int = 20):
        self.default_timeout = default_timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Лениво создает и возвращает сессию aiohttp."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=100,
                limit_per_host=30,
                ttl_dns_cache=300,
            )
            timeout = aiohttp.ClientTimeout(total=30, connect=10)
            self._session = aiohttp.ClientSession(connector=connector, timeout=timeout)
        return self._session

    @backoff.on_exception(
        backoff.expo,
        (aiohttp.ClientError, asyncio.TimeoutError),
        max_tries=3,
        giveup=_is_client_error,
        on_backoff=backoff_hdlr,
    )
    async def post(
        self,
        url: str,
        *,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> Any:
        """
        Выполняет POST-запрос и возвращает разобранный JSON-ответ.

        Тело передаётся либо как форма (`data`), либо как JSON (`json`).
        Сетевые ошибки и 5xx повторяются с экспоненциальной задержкой,
        ответы 4xx пробрасываются сразу.
        """
        session = await self._get_session()
        aio_timeout = aiohttp.ClientTimeout(total=timeout or self.default_timeout)

        try:
            async with session.post(
                url,
                data=data,
                json=json,
                params=params,
                headers=dict(headers or {}),
                timeout=aio_timeout,
            ) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

        except aiohttp.ClientResponseError as e:
            logger.error(
                f"Request to {url} failed with status {e.status}, message='{e.message}'"
            )
            raise
        except asyncio.TimeoutError:
            logger.error(f"Request to {url} timed out after {timeout or self.default_timeout} seconds.")
            raise

    async def close(self):
        """Корректно закрывает сессию при остановке приложения."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.info("HTTP client session closed.")
