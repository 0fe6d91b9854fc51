"""Subscriber endpoints of the Novu API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal
from urllib.parse import quote

from novurest.domain.types import parse_provider_id, require_subscriber_id

from . import device_tokens
from .schema import (
    ChannelCredentials,
    ChannelCredentialsPayload,
    CredentialsPayload,
    SubscriberPayload,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from novurest.adapters.http_resilience import ResilientClient
    from novurest.domain.types import ProviderId


def _subscriber_path(subscriber_id: str) -> str:
    return f"/subscribers/{quote(require_subscriber_id(subscriber_id), safe='')}"


def _subscriber_payload(payload: SubscriberPayload | Mapping[str, Any] | None) -> dict[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, SubscriberPayload):
        return payload.to_payload()
    return dict(payload)


def _credentials_body(
    provider_id: ProviderId | str,
    credentials: ChannelCredentials | Mapping[str, Any],
    integration_identifier: str | None,
) -> dict[str, Any]:
    if isinstance(credentials, ChannelCredentials):
        credentials = credentials.to_payload()
    body = CredentialsPayload(
        provider_id=parse_provider_id(provider_id).value,
        integration_identifier=integration_identifier,
        credentials=ChannelCredentialsPayload.model_validate(credentials),
    )
    return body.to_payload()


class Subscribers:
    """Subscriber operations sharing the transport of a ``NovuClient``.

    Every method sends a single request and returns the raw ``httpx.Response``,
    except the device-token helpers which coordinate several of them.
    """

    def __init__(self, client: ResilientClient) -> None:
        self._client = client

    async def create(
        self,
        subscriber_id: str,
        payload: SubscriberPayload | Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        """Create a subscriber; the API upserts, updating only the attributes sent."""

        body = {
            "subscriberId": require_subscriber_id(subscriber_id),
            **_subscriber_payload(payload),
        }
        return await self._client.post("/subscribers", json=body)

    async def get(self, subscriber_id: str) -> httpx.Response:
        return await self._client.get(_subscriber_path(subscriber_id))

    async def update(
        self,
        subscriber_id: str,
        payload: SubscriberPayload | Mapping[str, Any],
    ) -> httpx.Response:
        return await self._client.put(
            _subscriber_path(subscriber_id), json=_subscriber_payload(payload)
        )

    async def delete(self, subscriber_id: str) -> httpx.Response:
        return await self._client.delete(_subscriber_path(subscriber_id))

    async def set_credentials(
        self,
        subscriber_id: str,
        provider_id: ProviderId | str,
        credentials: ChannelCredentials | Mapping[str, Any],
        *,
        integration_identifier: str | None = None,
    ) -> httpx.Response:
        """Overwrite the named credential fields of one channel.

        Fields left out are kept by the API, but ``device_tokens`` replaces the
        stored list instead of appending to it.
        """

        body = _credentials_body(provider_id, credentials, integration_identifier)
        return await self._client.put(f"{_subscriber_path(subscriber_id)}/credentials", json=body)

    async def update_credentials(
        self,
        subscriber_id: str,
        provider_id: ProviderId | str,
        credentials: ChannelCredentials | Mapping[str, Any],
        *,
        integration_identifier: str | None = None,
    ) -> httpx.Response:
        """Merge credentials into one channel; device tokens are appended server-side."""

        body = _credentials_body(provider_id, credentials, integration_identifier)
        return await self._client.patch(
            f"{_subscriber_path(subscriber_id)}/credentials", json=body
        )

    async def delete_credentials(
        self,
        subscriber_id: str,
        provider_id: ProviderId | str,
    ) -> httpx.Response:
        provider = parse_provider_id(provider_id)
        return await self._client.delete(
            f"{_subscriber_path(subscriber_id)}/credentials/{provider}"
        )

    async def delete_device_tokens(
        self,
        subscriber_id: str,
        provider_id: ProviderId | str,
        tokens_to_delete: Iterable[str],
    ) -> httpx.Response | Literal[True]:
        return await device_tokens.delete_device_tokens(
            self, subscriber_id, provider_id, tokens_to_delete
        )

    async def replace_device_tokens(
        self,
        subscriber_ids: Iterable[str],
        provider_id: ProviderId | str,
        old_tokens: Iterable[str],
        new_tokens: Iterable[str],
    ) -> Literal[True]:
        return await device_tokens.replace_device_tokens(
            self, subscriber_ids, provider_id, old_tokens, new_tokens
        )
