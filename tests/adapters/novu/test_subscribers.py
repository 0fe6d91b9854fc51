"""Request shaping of the subscriber endpoints."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from novurest.adapters.novu import (
    ChannelCredentials,
    ChannelCredentialsPayload,
    SubscriberPayload,
    SubscriberResponse,
)
from novurest.domain.types import ChatProviderId

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from novurest.adapters.novu import NovuClient, Subscribers
    from tests.support.novu_api import FakeNovuApi


def _call(
    make_novu_client: Callable[..., NovuClient],
    operation: Callable[[Subscribers], Awaitable[httpx.Response]],
) -> httpx.Response:
    async def run() -> httpx.Response:
        async with make_novu_client() as client:
            return await operation(client.subscribers)

    return asyncio.run(run())


def test_create_sends_subscriber_id_with_attributes(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    payload = SubscriberPayload(email="ada@example.com", first_name="Ada", data={"plan": "pro"})

    response = _call(make_novu_client, lambda subscribers: subscribers.create("s1", payload))

    assert response.status_code == 201
    request = fake_api.requests[-1]
    assert request.method == "POST"
    assert request.path == "/v1/subscribers"
    assert request.body == {
        "subscriberId": "s1",
        "email": "ada@example.com",
        "firstName": "Ada",
        "data": {"plan": "pro"},
    }


def test_create_accepts_plain_mapping(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    _call(make_novu_client, lambda subscribers: subscribers.create("s1", {"locale": "de"}))

    assert fake_api.requests[-1].body == {"subscriberId": "s1", "locale": "de"}


def test_get_update_and_delete_target_subscriber_path(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    fake_api.tokens["s1"] = {}

    async def run(subscribers: Subscribers) -> httpx.Response:
        await subscribers.get("s1")
        await subscribers.update("s1", SubscriberPayload(last_name="Lovelace"))
        return await subscribers.delete("s1")

    _call(make_novu_client, run)

    assert [(request.method, request.path) for request in fake_api.requests] == [
        ("GET", "/v1/subscribers/s1"),
        ("PUT", "/v1/subscribers/s1"),
        ("DELETE", "/v1/subscribers/s1"),
    ]
    assert fake_api.requests[1].body == {"lastName": "Lovelace"}


def test_set_credentials_puts_provider_and_credentials(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    _call(
        make_novu_client,
        lambda subscribers: subscribers.set_credentials(
            "s1", "fcm", ChannelCredentials(device_tokens=["t1", "t2"])
        ),
    )

    request = fake_api.requests[-1]
    assert request.method == "PUT"
    assert request.path == "/v1/subscribers/s1/credentials"
    assert request.body == {"providerId": "fcm", "credentials": {"deviceTokens": ["t1", "t2"]}}
    assert fake_api.tokens["s1"]["fcm"] == ["t1", "t2"]


def test_set_credentials_keeps_empty_token_list(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    _call(
        make_novu_client,
        lambda subscribers: subscribers.set_credentials("s1", "apns", {"deviceTokens": []}),
    )

    assert fake_api.requests[-1].body == {"providerId": "apns", "credentials": {"deviceTokens": []}}


def test_set_credentials_for_chat_provider_omits_device_tokens(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    _call(
        make_novu_client,
        lambda subscribers: subscribers.set_credentials(
            "s1",
            ChatProviderId.SLACK,
            {"webhookUrl": "https://hooks.slack.test/abc"},
            integration_identifier="slack-main",
        ),
    )

    assert fake_api.requests[-1].body == {
        "providerId": "slack",
        "integrationIdentifier": "slack-main",
        "credentials": {"webhookUrl": "https://hooks.slack.test/abc"},
    }


def test_update_and_delete_credentials(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    async def run(subscribers: Subscribers) -> httpx.Response:
        await subscribers.update_credentials(
            "s1", "expo", ChannelCredentials(device_tokens=["ExponentPushToken[x]"])
        )
        return await subscribers.delete_credentials("s1", "expo")

    _call(make_novu_client, run)

    assert [(request.method, request.path) for request in fake_api.requests] == [
        ("PATCH", "/v1/subscribers/s1/credentials"),
        ("DELETE", "/v1/subscribers/s1/credentials/expo"),
    ]
    assert fake_api.requests[0].device_tokens == ["ExponentPushToken[x]"]


def test_subscriber_id_is_escaped_in_path(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    _call(make_novu_client, lambda subscribers: subscribers.delete("team/42"))

    assert fake_api.requests[-1].path == "/v1/subscribers/team%2F42"


def test_set_credentials_passes_unmodelled_keys_through(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    _call(
        make_novu_client,
        lambda subscribers: subscribers.set_credentials(
            "s1", "fcm", {"deviceTokens": ["t"], "token": "bot-xyz"}
        ),
    )

    assert fake_api.requests[-1].body == {
        "providerId": "fcm",
        "credentials": {"deviceTokens": ["t"], "token": "bot-xyz"},
    }


def test_update_credentials_keeps_extra_keys_of_payload_model(
    fake_api: FakeNovuApi, make_novu_client: Callable[..., NovuClient]
) -> None:
    credentials = ChannelCredentialsPayload(webhook_url="https://hooks.test", team_id="T1")

    _call(
        make_novu_client,
        lambda subscribers: subscribers.update_credentials("s1", "msteams", credentials),
    )

    assert fake_api.requests[-1].body == {
        "providerId": "msteams",
        "credentials": {"webhookUrl": "https://hooks.test", "team_id": "T1"},
    }


@pytest.mark.parametrize("subscriber_id", ["", "   "])
def test_blank_subscriber_id_is_rejected(
    subscriber_id: str,
    fake_api: FakeNovuApi,
    make_novu_client: Callable[..., NovuClient],
) -> None:
    with pytest.raises(ValueError, match="non-empty"):
        _call(make_novu_client, lambda subscribers: subscribers.get(subscriber_id))

    assert fake_api.requests == []


def test_subscriber_response_ignores_unknown_fields() -> None:
    response = SubscriberResponse.model_validate(
        {
            "data": {
                "_id": "internal",
                "subscriberId": "s1",
                "channels": [
                    {"providerId": "fcm", "credentials": {"deviceTokens": ["a"]}, "_id": "c1"},
                    {"providerId": "slack", "credentials": {"webhookUrl": "https://x"}},
                    {"providerId": "apns"},
                ],
            }
        }
    )

    subscriber = response.data
    assert subscriber.device_tokens("fcm") == ["a"]
    assert subscriber.device_tokens("slack") == []
    assert subscriber.device_tokens("apns") == []
    assert subscriber.device_tokens("expo") == []
