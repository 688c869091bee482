"""Parser for the `.properties` key/value text format.

Supported syntax:
- ``key=value``, ``key:value`` or ``key value``
- ``#`` and ``!`` comment lines
- line continuation with a trailing backslash
- escapes: ``\\t \\n \\r \\f``, ``\\uXXXX`` and ``\\<c>`` for a literal ``<c>``

Whitespace around keys and values is trimmed. A line that cannot be
decoded is skipped with a warning instead of failing the whole file.
"""
from __future__ import annotations

import re
import string
from typing import Dict, Iterator, TextIO, Tuple

from loguru import logger

WHITESPACE = " \t\f"
SEPARATORS = "=:"
COMMENT_MARKERS = "#!"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(text: str, source: str = "<string>") -> Dict[str, str]:
    """
    Parse `.properties` text into an ordered mapping.

    Args:
        text: Full file contents
        source: Name used in warnings about skipped lines

    Returns:
        Mapping of key to value; for duplicate keys the last one wins
    """
    properties: Dict[str, str] = {}
    for lineno, line in _logical_lines(text):
        key_raw, value_raw = _split_entry(line)
        try:
            key = _unescape(key_raw)
            value = _unescape(value_raw)
        except ValueError as e:
            logger.warning(f"Skipping malformed property at {source}:{lineno}: {e}")
            continue
        properties[key] = value
    return properties


def load_properties(stream: TextIO, source: str = "<stream>") -> Dict[str, str]:
    """Read a text stream to the end and parse it."""
    return parse_properties(stream.read(), source=source)


def _logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (starting line number, joined line) for every entry line."""
    pending = None
    start = 0
    for lineno, physical in enumerate(_LINE_BREAK.split(text), start=1):
        line = physical.lstrip(WHITESPACE)
        if pending is None:
            if not line or line[0] in COMMENT_MARKERS:
                continue
            start = lineno
            pending = ""
        if _continues(line):
            pending += line[:-1]
            continue
        yield start, pending + line
        pending = None
    if pending:
        yield start, pending


def _continues(line: str) -> bool:
    """A line continues when it ends in an odd number of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _split_entry(line: str) -> Tuple[str, str]:
    """Split a logical line at the first unescaped separator."""
    n = len(line)
    i = 0
    escaped = False
    while i < n:
        c = line[i]
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c in SEPARATORS or c in WHITESPACE:
            break
        i += 1
    key_raw = line[:i]

    j = i
    while j < n and line[j] in WHITESPACE:
        j += 1
    if j < n and line[j] in SEPARATORS:
        j += 1
    while j < n and line[j] in WHITESPACE:
        j += 1

    return key_raw, _rstrip_unescaped(line[j:])


def _rstrip_unescaped(raw: str) -> str:
    """Strip trailing whitespace, keeping whitespace written as an escape."""
    end = len(raw)
    while end > 0 and raw[end - 1] in WHITESPACE:
        backslashes = 0
        i = end - 2
        while i >= 0 and raw[i] == "\\":
            backslashes += 1
            i -= 1
        if backslashes % 2 == 1:
            break
        end -= 1
    return raw[:end]


def _unescape(raw: str) -> str:
    if "\\" not in raw:
        return raw

    out = []
    i = 0
    n = len(raw)
    while i < n:
        c = raw[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        i += 1
        if i >= n:
            break
        c = raw[i]
        if c == "u":
            digits = raw[i + 1:i + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise ValueError(f"malformed \\uxxxx escape '\\u{digits}'")
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_ESCAPES.get(c, c))
        i += 1
    return "".join(out)


__all__ = ["parse_properties", "load_properties"]
