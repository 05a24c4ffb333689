"""
KeyRedact rewrite package.
"""

from kr_engine.rewrite.transform import RedactionResult, redact_document, transform

__all__ = [
    "RedactionResult",
    "redact_document",
    "transform",
]
