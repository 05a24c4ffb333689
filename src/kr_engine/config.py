"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_TARGET_SUFFIX = "_X"
DEFAULT_REPLACE_CHAR = "*"

TARGET_SUFFIX_ENV = "KEYREDACT_TARGET_SUFFIX"
REPLACE_CHAR_ENV = "KEYREDACT_REPLACE_CHAR"

_FORBIDDEN_MARKERS = frozenset({'"', "\\"})


@dataclass(frozen=True)
class RedactionPolicy:
    suffix: str = DEFAULT_TARGET_SUFFIX
    replace_char: str = DEFAULT_REPLACE_CHAR

    def __post_init__(self) -> None:
        if not isinstance(self.suffix, str):
            raise ValueError("suffix must be a string")
        if not isinstance(self.replace_char, str) or len(self.replace_char) != 1:
            raise ValueError(f"replace_char must be a single character, got {self.replace_char!r}")
        if self.replace_char in _FORBIDDEN_MARKERS:
            raise ValueError(f"replace_char {self.replace_char!r} would break the string literal")

    @property
    def key_pattern(self) -> str:
        """Suffix followed by the closing quote of the key literal."""
        return f'{self.suffix}"'

    def matches_key(self, key_literal: str) -> bool:
        pattern = self.key_pattern
        return len(key_literal) >= len(pattern) and key_literal.endswith(pattern)

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] = os.environ,
        *,
        suffix: Optional[str] = None,
        replace_char: Optional[str] = None,
    ) -> "RedactionPolicy":
        """Resolve a policy from explicit overrides, then the environment, then the defaults."""
        if suffix is None:
            suffix = env.get(TARGET_SUFFIX_ENV, DEFAULT_TARGET_SUFFIX)
        if replace_char is None:
            replace_char = env.get(REPLACE_CHAR_ENV) or DEFAULT_REPLACE_CHAR
        return cls(suffix=suffix, replace_char=replace_char)


def redaction_enforce_enabled(env: Mapping[str, str] = os.environ) -> bool:
    return env.get("REDACTION_ENFORCE", "").strip() == "1"
