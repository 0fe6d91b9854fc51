"""Pydantic models describing the Novu API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NovuBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class ChannelCredentials(NovuBaseModel):
    webhook_url: str | None = Field(default=None, alias="webhookUrl")
    channel: str | None = None
    device_tokens: list[str] | None = Field(default=None, alias="deviceTokens")
    alert_uid: str | None = Field(default=None, alias="alertUid")
    title: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    state: str | None = None
    external_url: str | None = Field(default=None, alias="externalUrl")


class ChannelCredentialsPayload(ChannelCredentials):
    """Credentials as sent on writes; keys without a field here are passed through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class SubscriberChannel(NovuBaseModel):
    provider_id: str = Field(alias="providerId")
    integration_identifier: str | None = Field(default=None, alias="integrationIdentifier")
    credentials: ChannelCredentials | None = None


class SubscriberData(NovuBaseModel):
    subscriber_id: str | None = Field(default=None, alias="subscriberId")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None
    phone: str | None = None
    channels: list[SubscriberChannel] = Field(default_factory=list)

    def channel(self, provider_id: str) -> SubscriberChannel | None:
        return next((ch for ch in self.channels if ch.provider_id == provider_id), None)

    def device_tokens(self, provider_id: str) -> list[str]:
        """Device tokens of the channel for ``provider_id``; empty when it has none."""

        channel = self.channel(provider_id)
        if channel is None or channel.credentials is None:
            return []
        return list(channel.credentials.device_tokens or [])


class SubscriberResponse(NovuBaseModel):
    data: SubscriberData


class SubscriberPayload(NovuBaseModel):
    """Attributes accepted when creating or updating a subscriber."""

    email: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    phone: str | None = None
    avatar: str | None = None
    locale: str | None = None
    data: dict[str, Any] | None = None


class CredentialsPayload(NovuBaseModel):
    provider_id: str = Field(alias="providerId")
    integration_identifier: str | None = Field(default=None, alias="integrationIdentifier")
    credentials: ChannelCredentialsPayload


class TriggerPayload(NovuBaseModel):
    name: str
    to: str | dict[str, Any] | list[str | dict[str, Any]]
    payload: dict[str, Any] = Field(default_factory=dict)
    overrides: dict[str, Any] | None = None
    actor: str | dict[str, Any] | None = None
    tenant: str | dict[str, Any] | None = None
    transaction_id: str | None = Field(default=None, alias="transactionId")
