from collections.abc import Callable, Iterator

import httpx
import pytest

from cronjoborg.client import ClientConfig, CronJobClient
from cronjoborg.config import get_settings

MockHandler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(sent_requests: list[httpx.Request]) -> Iterator[Callable[..., CronJobClient]]:
    clients: list[CronJobClient] = []

    def factory(
        payload: object = None,
        *,
        status_code: int = 200,
        content: bytes | None = None,
        handler: MockHandler | None = None,
    ) -> CronJobClient:
        def record(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if handler is not None:
                return handler(request)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=payload)

        client = CronJobClient("test-key", ClientConfig(transport=httpx.MockTransport(record)))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
