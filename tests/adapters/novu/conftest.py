"""Shared fixtures for Novu adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from novurest.adapters.novu import NovuClient
from novurest.config.novu import NovuConfig
from tests.support.novu_api import FakeNovuApi, Handler, make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def fake_api() -> FakeNovuApi:
    return FakeNovuApi()


@pytest.fixture
def novu_config() -> NovuConfig:
    return NovuConfig(api_key="test-api-key")


@pytest.fixture
def make_novu_client(
    novu_config: NovuConfig, fake_api: FakeNovuApi
) -> Callable[..., NovuClient]:
    def build(handler: Handler | None = None) -> NovuClient:
        return NovuClient(
            novu_config, client_factory=make_client_factory(handler or fake_api.handle)
        )

    return build
