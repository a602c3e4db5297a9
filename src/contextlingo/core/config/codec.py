"""Scalar value codec for the exported configuration format.

Converts single values to and from the text tokens that appear after
``key:`` or ``-`` in an exported document.

Encoding always produces a lossless token: strings are written in fully
escaped double-quoted form (JSON string escapes, which are also valid YAML
double-quoted escapes), so ``#``, ``:``, quotes and newlines inside a value
can never be mistaken for structure.

Decoding is tolerant and never raises. Anything that cannot be decoded
cleanly comes back as its raw text so one bad hand edit cannot abort an
import.

Usage:
    from contextlingo.core.config.codec import decode_scalar, encode_scalar

    token = encode_scalar('He said "hi" # not a comment')
    assert decode_scalar(token) == 'He said "hi" # not a comment'
"""

import json
import logging
import math
import re
from collections.abc import Sequence
from typing import Any

from contextlingo.core.config.constants import MAX_NESTING_DEPTH
from contextlingo.core.types import Value

logger = logging.getLogger(__name__)

QUOTE_CHARS: tuple[str, str] = ('"', "'")

# A quote only opens a quoted span at the start of a token or after one of
# these characters, so apostrophes inside bare words stay literal.
_QUOTE_OPENERS = " \t[{,:"

_NUMBER_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_INT_PATTERN = re.compile(r"[-+]?\d+")

# \uXXXX or any single escaped character
_ESCAPE_PATTERN = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "0": "\0",
    "/": "/",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None}

# Characters str.splitlines treats as line breaks that JSON leaves unescaped
_LINE_BREAK_ESCAPES: dict[str, str] = {
    "\u0085": "\\u0085",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


# =============================================================================
# Quote helpers
# =============================================================================


def find_closing_quote(text: str, start: int) -> int:
    """Find the unescaped quote that closes the span opened at ``start``.

    Args:
        text: Text containing the quoted span.
        start: Index of the opening quote character.

    Returns:
        Index of the closing quote, or -1 if the span is unterminated.

    """
    quote = text[start]
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i
        i += 1
    return -1


def is_fully_quoted(token: str) -> bool:
    """Check whether a token is one complete quoted string and nothing else."""
    if len(token) < 2 or token[0] not in QUOTE_CHARS:
        return False
    return find_closing_quote(token, 0) == len(token) - 1


def _opens_quote(text: str, i: int) -> bool:
    return text[i] in QUOTE_CHARS and (i == 0 or text[i - 1] in _QUOTE_OPENERS)


def unescape(body: str) -> str:
    """Resolve backslash escapes in the body of a quoted string.

    Unknown escapes are kept verbatim (backslash included).

    Args:
        body: String content between the quotes.

    Returns:
        Unescaped string.

    """

    def replace(match: re.Match[str]) -> str:
        code = match.group(1)
        if len(code) == 5 and code[0] == "u":
            return chr(int(code[1:], 16))
        return _SIMPLE_ESCAPES.get(code, match.group(0))

    text = _ESCAPE_PATTERN.sub(replace, body)
    try:
        # Join UTF-16 surrogate pairs written as two \uXXXX escapes
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeError:
        return text


def _quote(text: str) -> str:
    quoted = json.dumps(text, ensure_ascii=False)
    for char, escape in _LINE_BREAK_ESCAPES.items():
        quoted = quoted.replace(char, escape)
    return quoted


def _decode_quoted(token: str) -> str:
    if token[0] == '"':
        try:
            decoded = json.loads(token)
        except ValueError:
            pass
        else:
            if isinstance(decoded, str):
                return decoded
    return unescape(token[1:-1])


# =============================================================================
# Token helpers
# =============================================================================


def strip_comment(text: str) -> str:
    """Remove a trailing ``# comment`` that is not inside a quoted span.

    Args:
        text: Raw token text.

    Returns:
        Text truncated at the first unquoted ``#`` (right-stripped),
        or the original text if it has no comment.

    """
    i = 0
    while i < len(text):
        if _opens_quote(text, i):
            end = find_closing_quote(text, i)
            if end == -1:
                # Unterminated quote swallows the rest of the line
                return text
            i = end + 1
            continue
        if text[i] == "#":
            return text[:i].rstrip()
        i += 1
    return text


def split_top_level(body: str) -> list[str]:
    """Split an inline list body on commas outside quotes and brackets.

    Args:
        body: Text between the outer ``[`` and ``]``.

    Returns:
        Stripped element tokens. Empty elements (``[a,,b]``, trailing
        comma) are dropped.

    """
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    while i < len(body):
        ch = body[i]
        if _opens_quote(body, i):
            end = find_closing_quote(body, i)
            if end != -1:
                i = end + 1
                continue
        elif ch in "[{":
            depth += 1
        elif ch in "]}":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            parts.append(body[start:i])
            start = i + 1
        i += 1
    parts.append(body[start:])
    return [part.strip() for part in parts if part.strip()]


def _parse_number(text: str) -> int | float | None:
    if not _NUMBER_PATTERN.fullmatch(text):
        return None
    try:
        if _INT_PATTERN.fullmatch(text):
            return int(text)
        return float(text)
    except ValueError:
        # int() refuses absurdly long digit strings
        return None


# =============================================================================
# Public API
# =============================================================================


def is_inline_list(values: Sequence[Any]) -> bool:
    """Check whether a list can be written on a single bracketed line."""
    return not any(isinstance(v, (dict, list, tuple)) for v in values)


def encode_scalar(value: Value) -> str:
    """Encode a value as a single-line token.

    Args:
        value: None, bool, number, string, or a list of such values.

    Returns:
        Token text: ``null``, ``true``/``false``, decimal number, escaped
        double-quoted string, ``[]`` or a bracketed inline list.

    Raises:
        TypeError: If value is a non-empty mapping or a list containing
            containers; those need block encoding by the dumper.

    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            logger.debug("Encoding non-finite float %r as null", value)
            return "null"
        return repr(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        if not is_inline_list(value):
            raise TypeError("list with nested containers needs block encoding")
        return "[" + ", ".join(encode_scalar(v) for v in value) + "]"
    if isinstance(value, dict):
        if not value:
            return "{}"
        raise TypeError("mapping values need block encoding")
    return _quote(str(value))


def decode_scalar(token: str, *, depth: int = 0) -> Value:
    """Decode a single-line token back into a value.

    Rules, in order:
    1. Fully quoted token -> unescaped string (``#`` inside is kept).
    2. Strip a trailing comment at the first unquoted ``#``.
    3. ``true``/``false``/``null``/``[]``/``{}`` literals (case-sensitive).
    4. Decimal number -> int or float.
    5. ``[...]`` -> list, elements decoded recursively.
    6. Anything else -> the text, with one layer of matching quotes removed.

    Never raises. Lists nested deeper than MAX_NESTING_DEPTH are kept
    as their raw text.

    Args:
        token: Token text (surrounding whitespace allowed).
        depth: Current list nesting level.

    Returns:
        Decoded value.

    """
    text = token.strip()
    if is_fully_quoted(text):
        return _decode_quoted(text)

    text = strip_comment(text)
    if is_fully_quoted(text):
        return _decode_quoted(text)

    if text in _LITERALS:
        return _LITERALS[text]
    if text == "[]":
        return []
    if text == "{}":
        return {}

    number = _parse_number(text)
    if number is not None:
        return number

    if len(text) >= 2 and text[0] == "[" and text[-1] == "]":
        if depth >= MAX_NESTING_DEPTH:
            logger.debug("Inline list nested deeper than %d levels kept as text", depth)
            return text
        return [decode_scalar(part, depth=depth + 1) for part in split_top_level(text[1:-1])]

    if len(text) >= 2 and text[0] == text[-1] and text[0] in QUOTE_CHARS:
        return text[1:-1]
    return text
