"""Public interface for the Novu adapter."""

from __future__ import annotations

from .client import NovuClient
from .device_tokens import CredentialAccessor, delete_device_tokens, replace_device_tokens
from .errors import DeviceTokenBatchError, NovuAPIError
from .schema import (
    ChannelCredentials,
    ChannelCredentialsPayload,
    SubscriberChannel,
    SubscriberData,
    SubscriberPayload,
    SubscriberResponse,
)
from .subscribers import Subscribers

__all__ = [
    "ChannelCredentials",
    "ChannelCredentialsPayload",
    "CredentialAccessor",
    "DeviceTokenBatchError",
    "NovuAPIError",
    "NovuClient",
    "SubscriberChannel",
    "SubscriberData",
    "SubscriberPayload",
    "SubscriberResponse",
    "Subscribers",
    "delete_device_tokens",
    "replace_device_tokens",
]
