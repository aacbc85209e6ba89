"""Tests for edit rendering and the per-sender edit cache."""

from __future__ import annotations

from roombridge.core.edit_diff import EditCache, compute_edit_diff
from roombridge.models.config import BridgeConfig
from roombridge.models.message import RemoteMessage, RemoteUser


def _msg(text: str, v: int = 1, user_id: str = "u1") -> RemoteMessage:
    return RemoteMessage(from_user=RemoteUser(id=user_id, username=user_id), text=text, v=v)


class TestComputeEditDiff:
    def test_typo_fix_at_end(self) -> None:
        diff = compute_edit_diff("I like appels", "I like apples")
        assert diff.body == "(edited) ... like appels => ... like apples"
        assert " => " in diff.body
        assert diff.formatted_body == (
            '<i>(edited)</i> ... like <font color="red">appels</font>'
            ' =&gt; ... like <font color="green">apples</font>'
        )

    def test_edit_in_the_middle_shows_context_both_sides(self) -> None:
        diff = compute_edit_diff("the quick brwn fox jumps", "the quick brown fox jumps")
        assert diff.body == "(edited) ... quick brwn fox ... => ... quick brown fox ..."

    def test_whole_message_replaced(self) -> None:
        diff = compute_edit_diff("hello", "goodbye")
        assert diff.body == "(edited) hello => goodbye"

    def test_short_prefix_has_no_ellipsis(self) -> None:
        diff = compute_edit_diff("hi thre", "hi there")
        assert diff.body == "(edited) hi thre => hi there"

    def test_literal_text_is_escaped_in_html_only(self) -> None:
        diff = compute_edit_diff("a <b>", "a <i>")
        assert diff.body == "(edited) a <b> => a <i>"
        assert diff.formatted_body == (
            '<i>(edited)</i> a <font color="red">&lt;b&gt;</font>'
            ' =&gt; a <font color="green">&lt;i&gt;</font>'
        )

    def test_suffix_never_overlaps_prefix(self) -> None:
        diff = compute_edit_diff("a a", "a a a")
        assert diff.body == "(edited) a a => a a a"

    def test_config_controls_rendering(self) -> None:
        config = BridgeConfig(
            removed_color="#f00", added_color="#0f0", edited_label="[edit]", ellipsis="…"
        )
        diff = compute_edit_diff("I like appels", "I like apples", config)
        assert diff.body == "[edit] … like appels => … like apples"
        assert '<font color="#f00">appels</font>' in diff.formatted_body
        assert '<font color="#0f0">apples</font>' in diff.formatted_body
        assert diff.formatted_body.startswith("<i>[edit]</i> ")


class TestEditCache:
    def test_first_version_is_stored_without_predecessor(self) -> None:
        cache = EditCache()
        first = _msg("one")
        assert cache.record(first) is None
        assert cache.get("u1") is first

    def test_revision_returns_predecessor(self) -> None:
        cache = EditCache()
        first = _msg("one")
        cache.record(first)
        second = _msg("two", v=2)
        assert cache.record(second) is first
        assert cache.get("u1") is second

    def test_revision_without_predecessor(self) -> None:
        cache = EditCache()
        assert cache.record(_msg("two", v=2)) is None
        assert "u1" in cache

    def test_new_message_overwrites_without_diff(self) -> None:
        cache = EditCache()
        cache.record(_msg("one"))
        newer = _msg("another")
        assert cache.record(newer) is None
        assert cache.get("u1") is newer

    def test_senders_are_independent(self) -> None:
        cache = EditCache()
        cache.record(_msg("alice says", user_id="alice"))
        assert cache.record(_msg("bob edits", v=2, user_id="bob")) is None
        assert len(cache) == 2

    def test_message_without_sender_ignored(self) -> None:
        cache = EditCache()
        assert cache.record(RemoteMessage(text="orphan", v=2)) is None
        assert len(cache) == 0
