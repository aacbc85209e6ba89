"""Readable rendering of in-place message edits.

The home network cannot edit a message after it has been sent, so an
edit on the remote side is relayed as a new message that shows only the
changed region with one word of context on each side::

    (edited) ... like appels => ... like apples

Nearly all edits are small typo fixes, so a common prefix/suffix scan is
enough; there is no general-purpose diff here.

Known limitation: the scan compares code points. A change that only
differs in combining marks is split at the wrong place, and rich-text
bodies are never diffed (only the plain ``text`` of a message is used).
"""

from __future__ import annotations

from roombridge.core.formatting import escape_html, final_word, first_word
from roombridge.models.config import BridgeConfig
from roombridge.models.message import EditDiff, RemoteMessage


def _common_prefix_len(prev: str, curr: str) -> int:
    limit = min(len(prev), len(curr))
    i = 0
    while i < limit and curr[i] == prev[i]:
        i += 1
    # retreat to the start of a word
    while i > 0 and not curr[i - 1].isspace():
        i -= 1
    return i


def _common_suffix_len(prev: str, curr: str, prefix_len: int) -> int:
    # never let the suffix overlap the prefix already claimed
    limit = min(len(prev), len(curr)) - prefix_len
    i = 0
    while i < limit and curr[-1 - i] == prev[-1 - i]:
        i += 1
    # retreat to the end of a word
    while i > 0 and not curr[len(curr) - i].isspace():
        i -= 1
    return i


def compute_edit_diff(prev: str, curr: str, config: BridgeConfig | None = None) -> EditDiff:
    """Render the change from *prev* to *curr* as plain and HTML bodies."""
    config = config or BridgeConfig()

    prefix_len = _common_prefix_len(prev, curr)
    suffix_len = _common_suffix_len(prev, curr, prefix_len)

    prefix = curr[:prefix_len]
    suffix = curr[len(curr) - suffix_len :]
    prev_mid = prev[prefix_len : len(prev) - suffix_len]
    curr_mid = curr[prefix_len : len(curr) - suffix_len]

    before = final_word(prefix)
    if before != prefix:
        before = f"{config.ellipsis} {before}"
    after = first_word(suffix)
    if after != suffix:
        after = f"{after} {config.ellipsis}"

    body = (
        f"{config.edited_label} "
        f"{before}{prev_mid}{after} => {before}{curr_mid}{after}"
    )

    before = escape_html(before)
    after = escape_html(after)
    formatted_body = (
        f"<i>{escape_html(config.edited_label)}</i> "
        f'{before}<font color="{config.removed_color}">{escape_html(prev_mid)}</font>{after}'
        " =&gt; "
        f'{before}<font color="{config.added_color}">{escape_html(curr_mid)}</font>{after}'
    )
    return EditDiff(body=body, formatted_body=formatted_body)


class EditCache:
    """Last message relayed from each remote sender in one room.

    Entries live as long as the room does; the cache is bounded by the
    number of distinct senders, so nothing is evicted.
    """

    def __init__(self) -> None:
        self._messages: dict[str, RemoteMessage] = {}

    def record(self, message: RemoteMessage) -> RemoteMessage | None:
        """Store *message* and return the version it revises, if any.

        A first-version message only overwrites the entry. A revision
        returns the cached predecessor, or ``None`` when the bridge never
        saw an earlier version from that sender.
        """
        if message.from_user is None:
            return None
        sender_id = message.from_user.id
        previous = self._messages.get(sender_id) if message.is_revision else None
        self._messages[sender_id] = message
        return previous

    def get(self, sender_id: str) -> RemoteMessage | None:
        return self._messages.get(sender_id)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, sender_id: object) -> bool:
        return sender_id in self._messages
