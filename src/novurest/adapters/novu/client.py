"""Async client for the Novu REST API."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Any

from novurest.adapters.http_resilience import ResilientClient
from novurest.config.novu import NovuConfig, get_novu_config

from .schema import TriggerPayload
from .subscribers import Subscribers

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    import httpx

    from novurest.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

TriggerRecipient = str | Mapping[str, Any]


def _default_client_factory(config: ResilienceConfig, headers: dict[str, str]) -> ResilientClient:
    return ResilientClient(config, headers=headers)


class NovuClient:
    """Entry point to the Novu API.

    Requests are returned as raw ``httpx.Response`` objects; checking the status
    is up to the caller. Use it as an async context manager, or call ``aclose``.
    """

    def __init__(
        self,
        config: NovuConfig | None = None,
        *,
        api_key: str | None = None,
        client_factory: Callable[[ResilienceConfig, dict[str, str]], ResilientClient]
        | None = None,
    ) -> None:
        if config is None:
            config = NovuConfig(api_key=api_key) if api_key is not None else get_novu_config()
        self.config = config
        factory = client_factory or _default_client_factory
        self._client = factory(config.resilience, config.headers)
        self.subscribers = Subscribers(self._client)

    async def __aenter__(self) -> NovuClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def trigger(
        self,
        event_name: str,
        *,
        to: TriggerRecipient | list[TriggerRecipient],
        payload: Mapping[str, Any] | None = None,
        overrides: Mapping[str, Any] | None = None,
        actor: TriggerRecipient | None = None,
        tenant: str | Mapping[str, Any] | None = None,
        transaction_id: str | None = None,
    ) -> httpx.Response:
        """Trigger the workflow identified by ``event_name``."""

        if not event_name:
            raise ValueError("Event name must be a non-empty string")
        body = TriggerPayload(
            name=event_name,
            to=_plain(to),
            payload=dict(payload or {}),
            overrides=dict(overrides) if overrides is not None else None,
            actor=_plain(actor),
            tenant=_plain(tenant),
            transaction_id=transaction_id,
        )
        log.debug("Triggering workflow %s", event_name)
        return await self._client.post("/events/trigger", json=body.to_payload())


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
