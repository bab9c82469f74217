# src/fdl_parser/utils/strings.py

from __future__ import annotations


def strip_quotes(text: str) -> str:
    """
    Remove one leading and one trailing double quote, if present.

    Unquoted input is returned unchanged, so the helper is idempotent on
    already-stripped values:

        strip_quotes('"hello"') -> 'hello'
        strip_quotes('hello')   -> 'hello'
    """
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text
