"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from kr_engine.errors import ScanFault

END_OF_INPUT = ""


@dataclass
class SourceCursor:
    """Forward-only read position over an immutable document."""

    text: str
    pos: int = 0

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Current codepoint, or END_OF_INPUT once the text is consumed."""
        if self.pos >= len(self.text):
            return END_OF_INPUT
        return self.text[self.pos]

    def take(self, what: str = "string literal") -> str:
        if self.pos >= len(self.text):
            raise ScanFault(f"unterminated {what}", self.pos, unterminated=True)
        ch = self.text[self.pos]
        self.pos += 1
        return ch


@dataclass
class OutputBuffer:
    """Append-only accumulator for the rewritten document."""

    capacity: int
    _parts: List[str] = field(default_factory=list)
    written: int = 0

    def emit(self, ch: str) -> None:
        if self.written + len(ch) > self.capacity:
            raise ScanFault("output would exceed source length", self.written)
        self._parts.append(ch)
        self.written += len(ch)

    def render(self) -> str:
        return "".join(self._parts)


class DiscardingBuffer(OutputBuffer):
    """Sink for scans that only inspect the document."""

    def __init__(self) -> None:
        super().__init__(capacity=0)

    def emit(self, ch: str) -> None:
        return None
