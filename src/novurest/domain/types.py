"""Provider identifiers understood by subscriber channels."""

from __future__ import annotations

from enum import StrEnum


class PushProviderId(StrEnum):
    FCM = "fcm"
    APNS = "apns"
    EXPO = "expo"
    ONE_SIGNAL = "one-signal"
    PUSH_WEBHOOK = "push-webhook"


class ChatProviderId(StrEnum):
    SLACK = "slack"
    DISCORD = "discord"
    MSTEAMS = "msteams"
    MATTERMOST = "mattermost"


type ProviderId = PushProviderId | ChatProviderId


def parse_provider_id(value: ProviderId | str) -> ProviderId:
    """Return the enum member for ``value`` or raise ``ValueError``."""

    if isinstance(value, PushProviderId | ChatProviderId):
        return value
    for enum_type in (PushProviderId, ChatProviderId):
        try:
            return enum_type(value)
        except ValueError:
            continue
    raise ValueError(f"Unknown provider id: {value!r}")


def require_subscriber_id(subscriber_id: str) -> str:
    """Return ``subscriber_id`` unchanged, or raise ``ValueError`` when it is blank."""

    if not isinstance(subscriber_id, str) or not subscriber_id.strip():
        raise ValueError("Subscriber id must be a non-empty string")
    return subscriber_id


def is_push_provider(provider_id: ProviderId) -> bool:
    return isinstance(provider_id, PushProviderId)


__all__ = [
    "ChatProviderId",
    "ProviderId",
    "PushProviderId",
    "is_push_provider",
    "parse_provider_id",
    "require_subscriber_id",
]
