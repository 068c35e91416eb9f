"""
Parser for flat `key=value` property files.

Grammar handled:
    - `#` or `!` as the first non-blank character marks a comment line
    - key ends at the first unescaped `=`, `:` or whitespace
    - whitespace around the separator is ignored
    - an odd number of trailing backslashes continues the line
    - escapes: \\t \\n \\r \\f \\uXXXX, and \\<c> for any other c
"""

from __future__ import annotations

import re
from typing import Iterator

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX4 = re.compile(r"[0-9a-fA-F]{4}")
# only these end a natural line; \f and other Unicode breaks stay inside it
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class PropertiesSyntaxError(ValueError):
    """Raised for a malformed \\uXXXX escape."""

    def __init__(self, message: str, line: str) -> None:
        super().__init__(f"{message}: {line!r}")
        self.line = line


def parse_properties(text: str) -> dict[str, str]:
    """
    Parse property-file text into an ordered dict.
    Later duplicates override earlier ones but keep the first key's position.
    """
    out: dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_pair(line)
        out[_unescape(raw_key, line)] = _unescape(raw_value, line)
    return out


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    pending: str | None = None
    for natural in _LINE_BREAK.split(text):
        line = natural.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue
        if _continues(line):
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending is not None:
        # file ended on a continuation
        yield pending


def _split_pair(line: str) -> tuple[str, str]:
    n = len(line)
    i = 0
    while i < n:
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    i = min(i, n)
    key = line[:i]

    j = i
    while j < n and line[j] in _WHITESPACE:
        j += 1
    if j < n and line[j] in _SEPARATORS:
        j += 1
    while j < n and line[j] in _WHITESPACE:
        j += 1
    return key, line[j:]


def _unescape(s: str, line: str) -> str:
    if "\\" not in s:
        return s
    out: list[str] = []
    i = 0
    n = len(s)
    while i < n:
        c = s[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        i += 1
        if i >= n:
            break
        c = s[i]
        if c == "u":
            digits = s[i + 1 : i + 5]
            if not _HEX4.fullmatch(digits):
                raise PropertiesSyntaxError("Malformed \\uXXXX escape", line)
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_ESCAPES.get(c, c))
        i += 1
    return "".join(out)
