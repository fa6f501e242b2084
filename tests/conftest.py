from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from shelfsync.adapters.http_resilience import ResilientClient
from shelfsync.config import KeyCrmConfig, ResilienceConfig, StrapiConfig
from tests.support.fakes import FakeKeyCrmServer, FakeStrapiServer, RecordingSleep

if TYPE_CHECKING:
    from collections.abc import Callable

KEYCRM_TEST_URL = "https://keycrm.test/v1"
STRAPI_TEST_URL = "https://strapi.test"


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def strapi_server() -> FakeStrapiServer:
    return FakeStrapiServer()


@pytest.fixture
def keycrm_server() -> FakeKeyCrmServer:
    return FakeKeyCrmServer()


@pytest.fixture
def keycrm_config() -> KeyCrmConfig:
    # no client-side throttle so the suite never waits on the limiter
    return KeyCrmConfig(
        api_token="test-token",
        resilience=ResilienceConfig(name="keycrm", base_url=KEYCRM_TEST_URL),
    )


@pytest.fixture
def strapi_config() -> StrapiConfig:
    return StrapiConfig(
        base_url=STRAPI_TEST_URL,
        api_token=None,
        resilience=ResilienceConfig(name="strapi", base_url=STRAPI_TEST_URL),
    )


@pytest.fixture
def client_factory(
    keycrm_server: FakeKeyCrmServer,
    strapi_server: FakeStrapiServer,
) -> Callable[[ResilienceConfig], ResilientClient]:
    """Route each system's client to its fake server by resilience name."""

    handlers: dict[str, Callable[[httpx.Request], httpx.Response]] = {
        "keycrm": keycrm_server,
        "strapi": strapi_server,
    }

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handlers[resilience.name]))

    return factory
