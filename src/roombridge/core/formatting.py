"""Stateless text helpers for cross-network message rendering."""

from __future__ import annotations

import re

_FIRST_WORD = re.compile(r"^\s*\S+")
_FINAL_WORD = re.compile(r"\S+\s*$")
_NON_WORD = re.compile(r"\W")


def escape_html(s: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for the home network's HTML bodies.

    Ampersands go first so the entities produced for angle brackets are
    not escaped a second time.
    """
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def quotemeta(s: str) -> str:
    """Backslash-escape every non-word character of *s* for use in a regex."""
    return _NON_WORD.sub(lambda m: "\\" + m.group(0), s)


def first_word(s: str) -> str:
    """Return the first word of *s* with any whitespace before it."""
    match = _FIRST_WORD.search(s)
    return match.group(0) if match else ""


def final_word(s: str) -> str:
    """Return the last word of *s* with any whitespace after it."""
    match = _FINAL_WORD.search(s)
    return match.group(0) if match else ""


def strip_self_mention(
    body: str, formatted_body: str | None, username: str
) -> tuple[str, str | None]:
    """Drop a leading ``@username `` mention from a status message.

    Status messages arrive as ``"@bob waves hello"``; on the home network
    the sender is already shown, so only ``"waves hello"`` is kept. The
    HTML body is matched against the mention ``<span>`` the remote side
    renders, which is a best-effort pattern rather than an HTML parse.
    """
    quoted = quotemeta(username)
    body = re.sub(f"^@{quoted} ", "", body, count=1)
    if formatted_body is not None:
        formatted_body = re.sub(f"^<span [^>]+>@{quoted}</span> ", "", formatted_body, count=1)
    return body, formatted_body


def escape_emphasis(s: str) -> str:
    """Escape ``*`` so a body can sit inside markdown emphasis."""
    return s.replace("*", "\\*")


def remote_emote_text(sender: str, body: str) -> str:
    """Render an emote for the remote room as ``*sender body*``."""
    return "*" + escape_emphasis(f"{sender} {body}") + "*"


def remote_plain_text(sender: str, body: str) -> str:
    """Render a message for the remote room with the sender in code spans."""
    return f"`{sender}` {body}"


def echo_html(sender: str, body: str) -> str:
    """Rich-text rendering of a home message echoed to a sibling room."""
    return f"<code>{escape_html(sender)}</code> {escape_html(body)}"
