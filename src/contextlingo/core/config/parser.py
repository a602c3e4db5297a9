"""Structured parser for exported configuration documents.

Indentation-driven recursive descent over a pre-processed line list. Blank
lines and full-line comments are dropped up front; trailing comments are
left in place and removed by the value codec, which knows about quotes.

The parser never raises. Lines it cannot place are skipped and reported as
ParseIssue entries so callers can show them to the user, while the rest of
the document is still returned.

Usage:
    from contextlingo.core.config.parser import parse, parse_with_diagnostics

    document = parse(text)
    result = parse_with_diagnostics(text)
    for issue in result.issues:
        print(issue.line, issue.reason)
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

from contextlingo.core.config.codec import (
    QUOTE_CHARS,
    decode_scalar,
    find_closing_quote,
    strip_comment,
)
from contextlingo.core.config.constants import INDENT_WIDTH, MAX_NESTING_DEPTH
from contextlingo.core.types import ConfigDocument, Value

logger = logging.getLogger(__name__)

# Key separator: a colon followed by whitespace or end of line
_KEY_SEPARATOR = re.compile(r":(?=\s|$)")
_QUOTED_KEY_TAIL = re.compile(r"\s*:(?=\s|$)")


@dataclass(frozen=True)
class ParseIssue:
    """A line the parser skipped or could only partially recover.

    Attributes:
        line: 1-based line number in the input text.
        text: The offending line, stripped.
        reason: Human-readable explanation.

    """

    line: int
    text: str
    reason: str


@dataclass
class ParseResult:
    """Parsed document plus recovery diagnostics.

    Attributes:
        document: Parsed sections (partial when issues were found).
        issues: Lines that were skipped or recovered, in input order.

    """

    document: ConfigDocument = field(default_factory=dict)
    issues: list[ParseIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every line was understood."""
        return not self.issues


class _Line(NamedTuple):
    number: int
    indent: int
    content: str


def _preprocess(text: str) -> list[_Line]:
    """Split text into significant lines with their indentation column.

    Only line feeds end a line; a carriage return before one is dropped.
    """
    lines: list[_Line] = []
    for number, raw in enumerate(text.lstrip("\ufeff").split("\n"), start=1):
        raw = raw.removesuffix("\r")
        content = raw.lstrip(" \t")
        if not content.strip() or content.startswith("#"):
            continue
        leading = raw[: len(raw) - len(content)]
        if "\t" in leading:
            leading = leading.expandtabs(INDENT_WIDTH)
        lines.append(_Line(number, len(leading), content.rstrip()))
    return lines


def _is_dash(content: str) -> bool:
    return content == "-" or content.startswith(("- ", "-\t"))


def _is_empty_value(raw: str) -> bool:
    return not strip_comment(raw.strip())


def split_key(content: str) -> tuple[str, str] | None:
    """Split ``key: value`` content into the key and the raw value text.

    Quoted keys are unescaped. The separator is the first colon followed
    by whitespace or end of line that is not inside quotes or a comment.

    Args:
        content: Line content without leading indentation.

    Returns:
        (key, raw value) tuple, or None if the content is not a key line.

    """
    if content[0] in QUOTE_CHARS:
        end = find_closing_quote(content, 0)
        if end == -1:
            return None
        tail = _QUOTED_KEY_TAIL.match(content, end + 1)
        if tail is None:
            return None
        return str(decode_scalar(content[: end + 1])), content[tail.end() :]

    match = _KEY_SEPARATOR.search(strip_comment(content))
    if match is None:
        return None
    key = content[: match.start()].strip()
    if not key or key[0] in "[{":
        return None
    return key, content[match.end() :]


class _BlockParser:
    """Recursive-descent state shared across one parse run."""

    def __init__(self) -> None:
        self.issues: list[ParseIssue] = []

    def _issue(self, line: _Line, reason: str) -> None:
        logger.debug("Line %d skipped (%s): %s", line.number, reason, line.content)
        self.issues.append(ParseIssue(line.number, line.content, reason))

    def parse_nested(self, block: Sequence[_Line], depth: int = 0) -> Value:
        """Parse a block whose own indentation is its shallowest line.

        An empty block is an empty mapping. A block nested deeper than
        MAX_NESTING_DEPTH is skipped, reported once and read as an empty
        mapping.
        """
        if not block:
            return {}
        if depth > MAX_NESTING_DEPTH:
            self._issue(
                block[0], f"nested deeper than {MAX_NESTING_DEPTH} levels, block skipped"
            )
            return {}
        indent = min(line.indent for line in block)
        value, _ = self.parse_block(block, 0, indent, depth)
        return value

    def parse_block(
        self, lines: Sequence[_Line], start: int, indent: int, depth: int = 0
    ) -> tuple[Value, int]:
        """Parse consecutive lines at ``indent`` starting from ``start``.

        Args:
            lines: Line list being parsed.
            start: Index of the first line of the block.
            indent: Column this block is responsible for.
            depth: Nesting level of the block.

        Returns:
            (mapping or list, index of the first line not consumed).

        """
        mapping: dict[str, Value] = {}
        key_lines: list[_Line] = []
        items: list[Value] = []
        i = start
        while i < len(lines):
            line = lines[i]
            if line.indent < indent:
                break
            if line.indent > indent:
                self._issue(line, "unexpected indentation")
                i += 1
                continue

            if _is_dash(line.content):
                item, i = self._parse_dash(lines, i, depth)
                items.append(item)
                continue

            entry = split_key(line.content)
            if entry is None:
                self._issue(line, "expected 'key: value' or '- item'")
                i += 1
                continue

            key, raw = entry
            if _is_empty_value(raw):
                end = self._block_end(lines, i + 1, line.indent)
                if end == i + 1:
                    # "key:" directly followed by dashes at its own column
                    end = self._sequence_end(lines, i + 1, line.indent)
                value = self.parse_nested(lines[i + 1 : end], depth + 1)
                i = end
            else:
                value = self._decode(line, raw)
                i += 1

            if key in mapping:
                self._issue(line, f"duplicate key '{key}', last value wins")
            mapping[key] = value
            key_lines.append(line)

        if items:
            for line in key_lines:
                self._issue(line, "key mixed into a list block was dropped")
            return items, i
        return mapping, i

    @staticmethod
    def _block_end(lines: Sequence[_Line], start: int, parent_indent: int) -> int:
        end = start
        while end < len(lines) and lines[end].indent > parent_indent:
            end += 1
        return end

    @staticmethod
    def _sequence_end(lines: Sequence[_Line], start: int, key_indent: int) -> int:
        end = start
        while end < len(lines):
            line = lines[end]
            if line.indent > key_indent or (
                line.indent == key_indent and _is_dash(line.content)
            ):
                end += 1
            else:
                break
        return end

    def _parse_dash(self, lines: Sequence[_Line], i: int, depth: int = 0) -> tuple[Value, int]:
        """Parse one ``-`` item and the deeper lines that belong to it."""
        line = lines[i]
        body = line.content[1:]
        text = body.lstrip()
        end = self._block_end(lines, i + 1, line.indent)
        children = lines[i + 1 : end]

        if _is_empty_value(text):
            return self.parse_nested(children, depth + 1), end

        if _is_dash(text) or split_key(text) is not None:
            # Inline record: the text after the dash is the first line of a
            # block whose column is where that text starts
            column = line.indent + len(body) - len(text) + 1
            if children:
                column = min(column, *(child.indent for child in children))
            virtual = _Line(line.number, column, text)
            return self.parse_nested([virtual, *children], depth + 1), end

        for child in children:
            self._issue(child, "unexpected indentation")
        return self._decode(line, text), end

    def _decode(self, line: _Line, raw: str) -> Value:
        text = raw.strip()
        if text[0] in QUOTE_CHARS and find_closing_quote(text, 0) == -1:
            self._issue(line, "unterminated quote, value kept as raw text")
        return decode_scalar(text)


def parse_with_diagnostics(text: str) -> ParseResult:
    """Parse document text, collecting recovery diagnostics.

    Args:
        text: Exported document text.

    Returns:
        ParseResult with the parsed mapping and any skipped lines. The
        document is always a mapping; a list at the root is reported and
        discarded.

    """
    parser = _BlockParser()
    lines = _preprocess(text)
    value = parser.parse_nested(lines)
    if not isinstance(value, dict):
        first = lines[0]
        parser.issues.append(
            ParseIssue(first.number, first.content, "document root is not a mapping")
        )
        value = {}
    parser.issues.sort(key=lambda issue: issue.line)
    if parser.issues:
        logger.debug("Parsed with %d recovered line(s)", len(parser.issues))
    return ParseResult(document=value, issues=parser.issues)


def parse(text: str) -> ConfigDocument:
    """Parse document text into a configuration document.

    Never raises; see parse_with_diagnostics for skipped lines.

    Args:
        text: Exported document text.

    Returns:
        Section name -> parsed value.

    """
    return parse_with_diagnostics(text).document
