"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from kr_engine.config import DEFAULT_REPLACE_CHAR, DEFAULT_TARGET_SUFFIX, RedactionPolicy
from kr_engine.errors import ScanFault
from kr_engine.rewrite.cursor import OutputBuffer, SourceCursor
from kr_engine.rewrite.readers import check_key_value_filler, read_filler, read_string, read_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedactionResult:
    text: str
    members: int = 0
    matched_keys: List[str] = field(default_factory=list)
    redacted_values: int = 0

    def summary(self) -> dict:
        return {
            "members": self.members,
            "matched_keys": len(self.matched_keys),
            "redacted_values": self.redacted_values,
        }


@dataclass(frozen=True)
class Member:
    key: str
    key_offset: int
    literals: List[str]
    replace: bool


def walk_members(
    src: SourceCursor,
    out: OutputBuffer,
    policy: RedactionPolicy,
    *,
    redact: bool = True,
) -> Iterator[Member]:
    """
    Walk ``filler key filler value filler`` members until the source is exhausted.

    ``literals`` are the value's source literals. Matched values are written
    redacted only when ``redact`` is set; otherwise they are copied verbatim.
    """
    while True:
        read_filler(src, out)
        if src.exhausted:
            return

        key_offset = src.pos
        key = read_string(src, out)
        replace = policy.matches_key(key)

        filler_start = src.pos
        check_key_value_filler(read_filler(src, out), filler_start)

        literals = read_value(src, out, replace and redact, policy.replace_char)
        read_filler(src, out)
        yield Member(key=key, key_offset=key_offset, literals=literals, replace=replace)


def _rewrite(text: str, policy: RedactionPolicy) -> RedactionResult:
    src = SourceCursor(text)
    out = OutputBuffer(capacity=len(text))
    members = 0
    matched: List[str] = []
    redacted = 0

    for member in walk_members(src, out, policy):
        members += 1
        if member.replace:
            matched.append(member.key)
            redacted += sum(1 for literal in member.literals if literal != '""')

    return RedactionResult(text=out.render(), members=members, matched_keys=matched, redacted_values=redacted)


def redact_document(text: str, policy: Optional[RedactionPolicy] = None) -> RedactionResult:
    """
    Copy ``text`` with the value of every key ending in the policy suffix redacted.

    Raises MalformedValueError (or its UnterminatedStringError subclass) with a
    uniform message; no partial output is ever returned.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    policy = policy or RedactionPolicy()
    try:
        return _rewrite(text, policy)
    except ScanFault as exc:
        logger.debug("redaction scan failed: %s", exc)
        raise exc.to_public() from None


def transform(text: str, *, suffix: str = DEFAULT_TARGET_SUFFIX, replace_char: str = DEFAULT_REPLACE_CHAR) -> str:
    return redact_document(text, RedactionPolicy(suffix=suffix, replace_char=replace_char)).text
