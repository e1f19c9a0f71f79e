"""Parser for double-quoted string literals with escape sequences.

A string literal is enclosed in double quotes and may contain any character
except an unescaped backslash or double quote. Recognised escapes are
``\\b \\f \\n \\r \\t \\" \\\\ \\/`` and ``\\u{XXXX}`` with one to six hex
digits. A backslash followed by whitespace discards all of that whitespace.
"""

from __future__ import annotations

import re

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\x08",
    "f": "\x0c",
    "\\": "\\",
    "/": "/",
    '"': '"',
}
_WHITESPACE = frozenset(" \t\r\n")
_LITERAL = re.compile(r'[^"\\]+')
_WS_RUN = re.compile(r"[ \t\r\n]+")
_HEX_RUN = re.compile(r"[0-9A-Fa-f]{0,6}")
_MAX_HEX_DIGITS = 6
_MAX_CODE_POINT = 0x10FFFF


class StringParseError(ValueError):
    """The input does not start with a valid string literal.

    ``incomplete`` is true when the input ended before the literal did,
    as opposed to containing something that can never be valid.
    """

    def __init__(self, message: str, incomplete: bool = False) -> None:
        super().__init__(message)
        self.incomplete = incomplete


def _incomplete() -> StringParseError:
    return StringParseError("input ended inside a string literal", incomplete=True)


def _unicode_escape(text: str, pos: int) -> tuple[str, int]:
    """Parse ``{XXXX}`` starting at ``pos`` (just after the ``u``)."""
    if pos >= len(text):
        raise _incomplete()
    if text[pos] != "{":
        raise StringParseError("expected '{' after \\u")
    digits_match = _HEX_RUN.match(text, pos + 1)
    digits, after = digits_match.group(), digits_match.end()
    if len(digits) < _MAX_HEX_DIGITS and after == len(text):
        raise _incomplete()
    if not digits:
        raise StringParseError("\\u{} needs at least one hex digit")
    if after >= len(text):
        raise _incomplete()
    if text[after] != "}":
        raise StringParseError("expected '}' to close \\u{...}")
    code_point = int(digits, 16)
    if code_point > _MAX_CODE_POINT or 0xD800 <= code_point <= 0xDFFF:
        raise StringParseError(f"invalid code point U+{code_point:X}")
    return chr(code_point), after + 1


def _escape(text: str, pos: int) -> tuple[str, int]:
    """Parse an escape whose backslash ends just before ``pos``."""
    if pos >= len(text):
        raise _incomplete()
    ch = text[pos]
    if ch == "u":
        return _unicode_escape(text, pos + 1)
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch], pos + 1
    if ch in _WHITESPACE:
        return "", _WS_RUN.match(text, pos).end()
    raise StringParseError(f"invalid escape sequence \\{ch}")


def parse_string(text: str) -> tuple[str, str]:
    """Parse a string literal at the start of ``text``.

    Returns the remaining input and the decoded string.
    """
    if not text:
        raise _incomplete()
    if text[0] != '"':
        raise StringParseError("expected opening double quote")
    pieces: list[str] = []
    pos, end = 1, len(text)
    while pos < end:
        ch = text[pos]
        if ch == '"':
            return text[pos + 1 :], "".join(pieces)
        if ch == "\\":
            piece, pos = _escape(text, pos + 1)
        else:
            literal = _LITERAL.match(text, pos)
            piece, pos = literal.group(), literal.end()
        pieces.append(piece)
    raise _incomplete()