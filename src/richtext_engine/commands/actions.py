"""Toolbar command implementations operating on an ``EditingSession``."""

from __future__ import annotations

from richtext_engine.engine.session import EditingSession
from richtext_engine.styles import FormatFlag, HeaderLevel

from .models import CommandResult


def toggle_header(session: EditingSession, level: HeaderLevel) -> CommandResult:
    attrs = session.toggle_header(level)
    state = attrs.header_level.value if attrs.header_level else "off"
    return CommandResult(message=f"header:{state}")


def toggle_format(session: EditingSession, flag: FormatFlag) -> CommandResult:
    attrs = session.toggle_format(flag)
    state = "on" if attrs.has_format(flag) else "off"
    return CommandResult(message=f"{flag.value}:{state}")


def toggle_blockquote(session: EditingSession) -> CommandResult:
    attrs = session.toggle_blockquote()
    return CommandResult(message="blockquote:on" if attrs.is_blockquote else "blockquote:off")


def insert_ordered_list(session: EditingSession) -> CommandResult:
    session.insert_ordered_list()
    return CommandResult(message="insert_ordered_list")


def insert_unordered_list(session: EditingSession) -> CommandResult:
    session.insert_unordered_list()
    return CommandResult(message="insert_unordered_list")


def insert_blockquote(session: EditingSession) -> CommandResult:
    session.insert_blockquote()
    return CommandResult(message="insert_blockquote")


def quote_lines(session: EditingSession) -> CommandResult:
    before = session.buffer.version
    session.quote_lines()
    if session.buffer.version == before:
        return CommandResult(status="noop", message="already_quoted")
    return CommandResult(message="quote_lines")


__all__ = [
    "insert_blockquote",
    "insert_ordered_list",
    "insert_unordered_list",
    "quote_lines",
    "toggle_blockquote",
    "toggle_format",
    "toggle_header",
]
