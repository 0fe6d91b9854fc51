"""Device-token reconciliation over the subscriber credentials endpoint.

The credentials ``PUT`` replaces the whole ``deviceTokens`` list, so removing
tokens is a read followed by a two-phase write: clear the list, then set the
surviving tokens. Nothing here retries or locks. Two reconciliations running
against the same (subscriber, provider) pair interleave freely and the last
write wins; callers must not overlap them.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal, Protocol

import httpx

from novurest.domain.device_tokens import DeviceTokenDelta
from novurest.domain.types import parse_provider_id, require_subscriber_id

from .errors import DeviceTokenBatchError, NovuAPIError
from .schema import ChannelCredentials, SubscriberResponse

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from novurest.domain.types import ProviderId

log = getLogger(__name__)


class CredentialAccessor(Protocol):
    async def get(self, subscriber_id: str) -> httpx.Response: ...

    async def set_credentials(
        self,
        subscriber_id: str,
        provider_id: ProviderId | str,
        credentials: ChannelCredentials | Mapping[str, Any],
    ) -> httpx.Response: ...


async def delete_device_tokens(
    accessor: CredentialAccessor,
    subscriber_id: str,
    provider_id: ProviderId | str,
    tokens_to_delete: Iterable[str],
) -> httpx.Response | Literal[True]:
    """Remove ``tokens_to_delete`` from one subscriber channel.

    Returns ``True`` when there was nothing to remove (unknown channel, no
    credentials, empty token list, or no overlap). Otherwise returns the response
    of the last write issued. A failed read is returned unchanged and no write is
    attempted.

    If the clearing write fails its response is returned and the final write is
    skipped. The channel may then be left without any device tokens; this state
    is not repaired automatically.
    """

    require_subscriber_id(subscriber_id)
    provider = parse_provider_id(provider_id)
    delta = DeviceTokenDelta.removal(tokens_to_delete)

    response = await accessor.get(subscriber_id)
    if not response.is_success:
        log.debug(
            "Reading subscriber %s failed with status %s", subscriber_id, response.status_code
        )
        return response

    subscriber = SubscriberResponse.model_validate(response.json()).data
    current = subscriber.device_tokens(provider)
    if not current or not delta.removes_from(current):
        log.debug("No %s device tokens to remove for subscriber %s", provider, subscriber_id)
        return True

    remaining = delta.remaining(current)

    cleared = await accessor.set_credentials(
        subscriber_id, provider, ChannelCredentials(device_tokens=[])
    )
    if not cleared.is_success:
        log.warning(
            "Clearing %s device tokens for subscriber %s failed with status %s; "
            "the channel may be left without tokens",
            provider,
            subscriber_id,
            cleared.status_code,
        )
        return cleared

    log.info(
        "Removing %d of %d %s device tokens for subscriber %s",
        len(current) - len(remaining),
        len(current),
        provider,
        subscriber_id,
    )
    return await accessor.set_credentials(
        subscriber_id, provider, ChannelCredentials(device_tokens=remaining)
    )


async def replace_device_tokens(
    accessor: CredentialAccessor,
    subscriber_ids: Iterable[str],
    provider_id: ProviderId | str,
    old_tokens: Iterable[str],
    new_tokens: Iterable[str],
) -> Literal[True]:
    """Swap ``old_tokens`` for ``new_tokens`` on every subscriber, concurrently.

    Each subscriber runs its own chain: ``delete_device_tokens`` with the old
    tokens, then a write of the new tokens once the removal has fully finished.
    Chains of different subscribers are not ordered with respect to each other.

    Every chain runs to completion. If any of them failed, a
    ``DeviceTokenBatchError`` is raised whose ``outcomes`` tell which subscribers
    went through; it is chained to the first failure in input order. Blank
    subscriber ids are rejected with ``ValueError`` before any request is sent.
    """

    provider = parse_provider_id(provider_id)
    delta = DeviceTokenDelta.replacement(old_tokens, new_tokens)
    if isinstance(subscriber_ids, str):
        raise TypeError("Expected a collection of subscriber ids, got str")
    ids = [require_subscriber_id(subscriber_id) for subscriber_id in dict.fromkeys(subscriber_ids)]
    if not ids:
        return True

    results = await asyncio.gather(
        *(
            _replace_for_subscriber(accessor, subscriber_id, provider, delta)
            for subscriber_id in ids
        ),
        return_exceptions=True,
    )

    outcomes: dict[str, BaseException | None] = {}
    for subscriber_id, result in zip(ids, results, strict=True):
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        outcomes[subscriber_id] = result if isinstance(result, BaseException) else None

    failures = [exc for exc in outcomes.values() if exc is not None]
    if failures:
        log.warning(
            "Replacing %s device tokens failed for %d of %d subscribers",
            provider,
            len(failures),
            len(ids),
        )
        raise DeviceTokenBatchError(
            f"Replacing device tokens failed for {len(failures)} of {len(ids)} subscribers",
            outcomes=outcomes,
        ) from failures[0]

    return True


async def _replace_for_subscriber(
    accessor: CredentialAccessor,
    subscriber_id: str,
    provider: ProviderId,
    delta: DeviceTokenDelta,
) -> None:
    deleted = await delete_device_tokens(accessor, subscriber_id, provider, delta.tokens_to_remove)
    if isinstance(deleted, httpx.Response) and not deleted.is_success:
        raise NovuAPIError(
            f"Removing device tokens for subscriber {subscriber_id} failed "
            f"with status {deleted.status_code}",
            response=deleted,
        )

    response = await accessor.set_credentials(
        subscriber_id, provider, ChannelCredentials(device_tokens=list(delta.tokens_to_add))
    )
    if not response.is_success:
        raise NovuAPIError(
            f"Setting device tokens for subscriber {subscriber_id} failed "
            f"with status {response.status_code}",
            response=response,
        )
