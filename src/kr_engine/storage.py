"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

STDIO = "-"
S3_SCHEME = "s3://"


class StorageError(RuntimeError):
    """Document could not be read from or written to its location."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"{location}: {reason}")
        self.location = location
        self.reason = reason


def _get_client(client=None):
    return client or boto3.client("s3")


def parse_s3_uri(uri: str) -> Optional[Tuple[str, str]]:
    if not uri.startswith(S3_SCHEME):
        return None
    rest = uri[len(S3_SCHEME) :]
    bucket, _, key = rest.partition("/")
    if not bucket or not key:
        raise StorageError(uri, "s3 uri must be s3://<bucket>/<key>")
    return bucket, key


def _client_error_reason(exc: ClientError) -> str:
    code = exc.response.get("Error", {}).get("Code", "")
    if code in {"NoSuchKey", "NoSuchBucket", "404"}:
        return "not_found"
    if code in {"AccessDenied", "403"}:
        return "access_denied"
    return f"error:{code or exc.__class__.__name__}"


def _failure(location: str, exc: Exception) -> StorageError:
    return StorageError(location, f"error:{exc.__class__.__name__}")


def read_document(location: str, *, client=None) -> str:
    parsed = parse_s3_uri(location)
    try:
        if location == STDIO:
            return sys.stdin.read()
        if parsed:
            bucket, key = parsed
            try:
                resp = _get_client(client).get_object(Bucket=bucket, Key=key)
            except ClientError as exc:
                raise StorageError(location, _client_error_reason(exc)) from exc
            return resp["Body"].read().decode("utf-8")
        path = Path(location)
        if not path.exists():
            raise StorageError(location, "not_found")
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeError, BotoCoreError) as exc:
        raise _failure(location, exc) from exc


def write_document(location: str, text: str, *, client=None) -> None:
    parsed = parse_s3_uri(location)
    try:
        if location == STDIO:
            sys.stdout.write(text)
            return
        if parsed:
            bucket, key = parsed
            try:
                _get_client(client).put_object(
                    Bucket=bucket,
                    Key=key,
                    Body=text.encode("utf-8"),
                    ContentType="application/json",
                )
            except ClientError as exc:
                raise StorageError(location, _client_error_reason(exc)) from exc
            logger.info("Wrote s3://%s/%s (%d chars)", bucket, key, len(text))
            return
        path = Path(location)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except (OSError, UnicodeError, BotoCoreError) as exc:
        raise _failure(location, exc) from exc
