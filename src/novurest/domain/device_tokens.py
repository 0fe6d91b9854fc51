"""Set arithmetic over device-token lists.

A ``DeviceTokenDelta`` describes what one reconciliation wants to change on a
single (subscriber, provider) channel. It never touches the network; the
adapters decide which writes a delta turns into.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def token_list(tokens: Iterable[str]) -> list[str]:
    """Materialise a collection of tokens, refusing a bare string."""

    if isinstance(tokens, str | bytes):
        raise TypeError(f"Expected a collection of tokens, got {type(tokens).__name__}")
    return list(tokens)


@dataclass(frozen=True, slots=True)
class DeviceTokenDelta:
    tokens_to_remove: frozenset[str] = frozenset()
    tokens_to_add: tuple[str, ...] = ()

    @classmethod
    def removal(cls, tokens: Iterable[str]) -> DeviceTokenDelta:
        return cls(tokens_to_remove=frozenset(token_list(tokens)))

    @classmethod
    def replacement(cls, old_tokens: Iterable[str], new_tokens: Iterable[str]) -> DeviceTokenDelta:
        return cls(
            tokens_to_remove=frozenset(token_list(old_tokens)),
            tokens_to_add=tuple(token_list(new_tokens)),
        )

    def remaining(self, current: Sequence[str]) -> list[str]:
        """Tokens of ``current`` that survive the removal, in their original order."""

        return [token for token in current if token not in self.tokens_to_remove]

    def removes_from(self, current: Sequence[str]) -> bool:
        return len(self.remaining(current)) != len(current)


__all__ = ["DeviceTokenDelta", "token_list"]
