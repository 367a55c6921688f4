from datetime import date
from typing import Any, AsyncIterator, Callable, List

import httpx
import pytest
import pytest_asyncio

from oracle_hcm_mcp import HcmConfig, HcmHttpClient, OracleHcmBridge

BASE_URL = "https://hcm.example.com"
USERNAME = "agent"
PASSWORD = "s3cret-pw"
TODAY = date(2026, 1, 15)


class HcmStub:
    """
    Stand-in for the HCM REST API behind an ``httpx.MockTransport``.

    Every outbound request is recorded; the reply comes from ``responder``,
    which defaults to an empty collection.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"items": []}
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def reply_json(self, payload: Any, status_code: int = 200) -> None:
        self.responder = lambda request: httpx.Response(status_code, json=payload)

    def reply_text(self, text: str, status_code: int = 200) -> None:
        self.responder = lambda request: httpx.Response(status_code, text=text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request reached the HCM stub"
        return self.requests[-1]


@pytest.fixture
def config() -> HcmConfig:
    return HcmConfig(base_url=BASE_URL, password=PASSWORD, username=USERNAME)


@pytest.fixture
def hcm() -> HcmStub:
    return HcmStub()


@pytest_asyncio.fixture
async def client(config: HcmConfig, hcm: HcmStub) -> AsyncIterator[HcmHttpClient]:
    async with HcmHttpClient(config, transport=hcm.transport) as http_client:
        yield http_client


@pytest_asyncio.fixture
async def bridge(config: HcmConfig, hcm: HcmStub) -> AsyncIterator[OracleHcmBridge]:
    async with OracleHcmBridge(config, transport=hcm.transport, today=lambda: TODAY) as hcm_bridge:
        yield hcm_bridge
