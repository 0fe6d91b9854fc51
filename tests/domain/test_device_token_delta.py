from __future__ import annotations

import pytest

from novurest.domain.device_tokens import DeviceTokenDelta, token_list


def test_remaining_keeps_original_order() -> None:
    delta = DeviceTokenDelta.removal(["B"])

    assert delta.remaining(["A", "B", "C"]) == ["A", "C"]
    assert delta.removes_from(["A", "B", "C"])


def test_remaining_drops_duplicates_of_removed_token() -> None:
    delta = DeviceTokenDelta.removal({"A"})

    assert delta.remaining(["A", "B", "A", "C"]) == ["B", "C"]


def test_no_overlap_removes_nothing() -> None:
    delta = DeviceTokenDelta.removal(["Z"])

    assert delta.remaining(["A", "B"]) == ["A", "B"]
    assert not delta.removes_from(["A", "B"])
    assert not delta.removes_from([])


def test_replacement_keeps_new_token_order() -> None:
    delta = DeviceTokenDelta.replacement(["old", "old"], iter(["n2", "n1"]))

    assert delta.tokens_to_remove == frozenset({"old"})
    assert delta.tokens_to_add == ("n2", "n1")


def test_single_string_is_not_a_token_collection() -> None:
    with pytest.raises(TypeError, match="collection of tokens"):
        DeviceTokenDelta.removal("abc")
    with pytest.raises(TypeError, match="collection of tokens"):
        DeviceTokenDelta.replacement(["old"], "new")


def test_token_list_materialises_iterables() -> None:
    assert token_list(iter(["a", "b"])) == ["a", "b"]
    assert token_list(("a",)) == ["a"]
