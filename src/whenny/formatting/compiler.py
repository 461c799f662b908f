"""Compile pattern strings into token tuples.

Two dialects are understood:

* bracket: ``"{monthShort} {dayOrdinal}, {year}"``
* letter (moment.js style): ``"MMM Do, YYYY"`` with ``[...]`` for literal text

Compilation is pure, so results are memoised per (pattern, dialect, strict).
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import List

from whenny.errors import UnknownFieldError, UnterminatedLiteralError
from whenny.formatting.tokens import (
    BRACKET_FIELDS,
    LETTER_FIELDS,
    LETTER_TOKENS_BY_LENGTH,
    CompiledPattern,
    Dialect,
    FormatToken,
    LiteralToken,
)

logger = logging.getLogger(__name__)


BRACKET_FIELD_RE = re.compile(r"\{([A-Za-z]\w*)\}")


def detect_dialect(pattern: str) -> Dialect:
    """Pick the bracket dialect only when a known ``{name}`` field appears.

    Braces around anything else are literal text inside a letter pattern.
    """
    for match in BRACKET_FIELD_RE.finditer(pattern):
        if match.group(1) in BRACKET_FIELDS:
            return Dialect.BRACKET
    return Dialect.LETTER


@lru_cache(maxsize=256)
def compile_pattern(pattern: str, dialect: Dialect = Dialect.AUTO, *, strict: bool = False) -> CompiledPattern:
    """Turn ``pattern`` into an immutable tuple of literal and field tokens.

    Unknown ``{name}`` fields are kept as literal text unless ``strict`` is
    set, in which case they raise ``UnknownFieldError``. An unclosed ``[``
    in the letter dialect raises ``UnterminatedLiteralError``.
    """
    if dialect is Dialect.AUTO:
        dialect = detect_dialect(pattern)
    logger.debug("Compiling %s pattern %r", dialect.value, pattern)
    if dialect is Dialect.BRACKET:
        tokens = _compile_bracket(pattern, strict=strict)
    else:
        tokens = _compile_letter(pattern)
    return tuple(tokens)


def _compile_bracket(pattern: str, *, strict: bool) -> List[FormatToken]:
    builder = _TokenBuilder()
    position = 0
    for match in BRACKET_FIELD_RE.finditer(pattern):
        builder.literal(pattern[position:match.start()])
        name = match.group(1)
        field = BRACKET_FIELDS.get(name)
        if field is None:
            if strict:
                raise UnknownFieldError(name, pattern=pattern)
            builder.literal(match.group(0))
        else:
            builder.field(field)
        position = match.end()
    builder.literal(pattern[position:])
    return builder.finish()


def _compile_letter(pattern: str) -> List[FormatToken]:
    builder = _TokenBuilder()
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "[":
            close = pattern.find("]", index + 1)
            if close == -1:
                raise UnterminatedLiteralError(pattern, index)
            builder.literal(pattern[index + 1:close])
            index = close + 1
            continue
        for token in LETTER_TOKENS_BY_LENGTH:
            if pattern.startswith(token, index):
                builder.field(LETTER_FIELDS[token])
                index += len(token)
                break
        else:
            builder.literal(char)
            index += 1
    return builder.finish()


class _TokenBuilder:
    """Accumulates tokens, merging adjacent literal runs."""

    def __init__(self) -> None:
        self.tokens: List[FormatToken] = []
        self._pending: List[str] = []

    def literal(self, text: str) -> None:
        if text:
            self._pending.append(text)

    def field(self, token: FormatToken) -> None:
        self._flush()
        self.tokens.append(token)

    def _flush(self) -> None:
        if self._pending:
            self.tokens.append(LiteralToken("".join(self._pending)))
            self._pending = []

    def finish(self) -> List[FormatToken]:
        self._flush()
        return self.tokens


__all__ = ["BRACKET_FIELD_RE", "compile_pattern", "detect_dialect"]
