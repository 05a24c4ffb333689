"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from kr_engine.config import RedactionPolicy, redaction_enforce_enabled
from kr_engine.errors import ScanFault
from kr_engine.rewrite.cursor import DiscardingBuffer, SourceCursor
from kr_engine.rewrite.transform import walk_members

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnredactedValue:
    key: str
    offset: int


def find_unredacted(text: str, policy: Optional[RedactionPolicy] = None) -> List[UnredactedValue]:
    """Matched keys whose value still holds a literal other than ``""`` or the marker."""
    policy = policy or RedactionPolicy()
    allowed = {'""', f'"{policy.replace_char}"'}
    findings: List[UnredactedValue] = []
    try:
        for member in walk_members(SourceCursor(text), DiscardingBuffer(), policy, redact=False):
            if member.replace and any(literal not in allowed for literal in member.literals):
                findings.append(UnredactedValue(key=member.key, offset=member.key_offset))
    except ScanFault as exc:
        logger.debug("redaction guard scan failed: %s", exc)
        raise exc.to_public() from None
    return findings


def redaction_guard_text(
    path: Union[Path, str],
    text: str,
    policy: Optional[RedactionPolicy] = None,
) -> List[UnredactedValue]:
    findings = find_unredacted(text, policy)
    if not findings:
        return findings
    summary = ", ".join(f"{item.key}@{item.offset}" for item in findings)
    msg = f"Unredacted values detected for {path}: {summary}"
    if redaction_enforce_enabled():
        raise RuntimeError(msg)
    logger.warning("%s (set REDACTION_ENFORCE=1 to fail closed)", msg)
    return findings
