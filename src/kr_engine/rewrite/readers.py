"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.

Readers that walk a SourceCursor and append to an OutputBuffer. Each reader
advances the cursor past exactly what it consumed; string readers return the
source literal (quotes included) so callers can inspect it.
"""

from __future__ import annotations

from typing import List

from kr_engine.errors import ScanFault
from kr_engine.rewrite.cursor import END_OF_INPUT, OutputBuffer, SourceCursor

QUOTE = '"'
BACKSLASH = "\\"
ARRAY_OPEN = "["
ARRAY_CLOSE = "]"
# Between array elements only separators may appear.
ARRAY_SEPARATORS = frozenset({","})
# Between a key and its value only the colon may appear.
KEY_VALUE_SEPARATORS = frozenset({":"})


def read_filler(src: SourceCursor, out: OutputBuffer) -> str:
    start = src.pos
    while src.peek() not in (END_OF_INPUT, QUOTE, ARRAY_OPEN):
        out.emit(src.take())
    return src.text[start : src.pos]


def _expect_quote(src: SourceCursor) -> None:
    if src.peek() != QUOTE:
        raise ScanFault(f"expected string literal, found {src.peek()!r}", src.pos)


def _skip_body(src: SourceCursor, out: OutputBuffer | None) -> None:
    r"""
    Consume a literal body through its closing quote.

    A backslash escapes exactly the following codepoint, so ``\\"`` ends the
    literal while ``\"`` does not. The closing quote is consumed but not
    emitted; body codepoints are emitted only when ``out`` is given.
    """
    escaped = False
    while True:
        ch = src.take()
        if escaped:
            escaped = False
        elif ch == BACKSLASH:
            escaped = True
        elif ch == QUOTE:
            return
        if out is not None:
            out.emit(ch)


def read_string(src: SourceCursor, out: OutputBuffer) -> str:
    _expect_quote(src)
    start = src.pos
    out.emit(src.take())
    _skip_body(src, out)
    out.emit(QUOTE)
    return src.text[start : src.pos]


def read_redacted_string(src: SourceCursor, out: OutputBuffer, replace_char: str) -> str:
    """Emit ``"<replace_char>"`` in place of the literal; ``""`` is copied as-is."""
    _expect_quote(src)
    start = src.pos
    out.emit(src.take())
    if src.peek() == QUOTE:
        out.emit(src.take())
        return QUOTE + QUOTE
    _skip_body(src, None)
    out.emit(replace_char)
    out.emit(QUOTE)
    return src.text[start : src.pos]


def _read_literal(src: SourceCursor, out: OutputBuffer, replace: bool, replace_char: str) -> str:
    if replace:
        return read_redacted_string(src, out, replace_char)
    return read_string(src, out)


def read_value(src: SourceCursor, out: OutputBuffer, replace: bool, replace_char: str) -> List[str]:
    """
    Read one value: a string literal or a bracketed array of string literals.

    Returns the source literals in document order. When ``replace`` is set,
    every non-empty literal is redacted, array elements included.
    """
    lead = src.peek()
    if lead == QUOTE:
        return [_read_literal(src, out, replace, replace_char)]
    if lead != ARRAY_OPEN:
        if lead == END_OF_INPUT:
            raise ScanFault("missing value after key", src.pos)
        raise ScanFault(f"unsupported value starting with {lead!r}", src.pos)

    literals: List[str] = []
    out.emit(src.take())
    while True:
        ch = src.peek()
        if ch == ARRAY_CLOSE:
            out.emit(src.take())
            return literals
        if ch == QUOTE:
            literals.append(_read_literal(src, out, replace, replace_char))
            continue
        if ch == END_OF_INPUT:
            raise ScanFault("unterminated array", src.pos, unterminated=True)
        if not (ch.isspace() or ch in ARRAY_SEPARATORS):
            raise ScanFault(f"unsupported array element starting with {ch!r}", src.pos)
        out.emit(src.take("array"))


def check_key_value_filler(filler: str, offset: int) -> None:
    """Reject bare literals (numbers, booleans, nulls, objects) hiding in the separator run."""
    for index, ch in enumerate(filler):
        if ch.isspace() or ch in KEY_VALUE_SEPARATORS:
            continue
        raise ScanFault(f"unsupported value starting with {ch!r}", offset + index)
