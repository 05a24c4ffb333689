"""
KeyRedact engine package.
"""

from kr_engine.config import DEFAULT_REPLACE_CHAR, DEFAULT_TARGET_SUFFIX, RedactionPolicy
from kr_engine.errors import MalformedValueError, UnterminatedStringError
from kr_engine.rewrite import RedactionResult, redact_document, transform

__all__ = [
    "DEFAULT_REPLACE_CHAR",
    "DEFAULT_TARGET_SUFFIX",
    "MalformedValueError",
    "RedactionPolicy",
    "RedactionResult",
    "UnterminatedStringError",
    "redact_document",
    "transform",
]
