from __future__ import annotations

import pytest

from novurest.domain.types import (
    ChatProviderId,
    PushProviderId,
    is_push_provider,
    parse_provider_id,
    require_subscriber_id,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("fcm", PushProviderId.FCM),
        ("one-signal", PushProviderId.ONE_SIGNAL),
        ("push-webhook", PushProviderId.PUSH_WEBHOOK),
        ("msteams", ChatProviderId.MSTEAMS),
        (ChatProviderId.MATTERMOST, ChatProviderId.MATTERMOST),
    ],
)
def test_parse_provider_id(value: str, expected: object) -> None:
    assert parse_provider_id(value) is expected


def test_parse_provider_id_rejects_unknown_values() -> None:
    with pytest.raises(ValueError, match="Unknown provider id"):
        parse_provider_id("FCM")


def test_push_and_chat_providers_are_told_apart() -> None:
    assert is_push_provider(PushProviderId.APNS)
    assert not is_push_provider(ChatProviderId.DISCORD)
    assert str(PushProviderId.EXPO) == "expo"


def test_require_subscriber_id_returns_value_unchanged() -> None:
    assert require_subscriber_id(" s1") == " s1"


@pytest.mark.parametrize("subscriber_id", ["", " \t"])
def test_require_subscriber_id_rejects_blank_values(subscriber_id: str) -> None:
    with pytest.raises(ValueError, match="non-empty"):
        require_subscriber_id(subscriber_id)
