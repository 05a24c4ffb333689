"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

MALFORMED_VALUE_MSG = "only strings and arrays of strings are allowed as values"
UNTERMINATED_STRING_MSG = "string literal or array is not terminated before end of input"


class MalformedValueError(ValueError):
    """A value is neither a string literal nor an array of string literals."""

    def __init__(self, message: str = MALFORMED_VALUE_MSG) -> None:
        super().__init__(message)


class UnterminatedStringError(MalformedValueError):
    """A string literal or array ran into end of input before its closing delimiter."""

    def __init__(self, message: str = UNTERMINATED_STRING_MSG) -> None:
        super().__init__(message)


class ScanFault(Exception):
    """
    Internal scanner failure with the offset where it happened.

    Never escapes the public entry points: callers translate it into one of the
    public errors above, dropping the position detail.
    """

    def __init__(self, detail: str, offset: int, *, unterminated: bool = False) -> None:
        super().__init__(f"{detail} at offset {offset}")
        self.detail = detail
        self.offset = offset
        self.unterminated = unterminated

    def to_public(self) -> MalformedValueError:
        if self.unterminated:
            return UnterminatedStringError()
        return MalformedValueError()
