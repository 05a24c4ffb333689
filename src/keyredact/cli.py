"""
KeyRedact
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from kr_engine.config import RedactionPolicy
from kr_engine.errors import MalformedValueError
from kr_engine.guard import redaction_guard_text
from kr_engine.rewrite import redact_document
from kr_engine.storage import STDIO, StorageError, read_document, write_document

from . import __version__
from .selftest import SelfTestOutcome, run_selftest

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2


def _setup_logging() -> None:
    if logging.getLogger().hasHandlers():
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _resolve_policy(args: argparse.Namespace) -> RedactionPolicy:
    try:
        return RedactionPolicy.from_env(suffix=args.suffix, replace_char=args.replace_char)
    except ValueError as exc:
        logger.error("Invalid redaction policy: %s", exc)
        raise SystemExit(EXIT_INVALID_INPUT) from exc


def _redact(args: argparse.Namespace) -> int:
    _setup_logging()
    policy = _resolve_policy(args)

    try:
        text = read_document(args.input)
    except StorageError as exc:
        logger.error("Failed to read input: %s", exc)
        return EXIT_FAILED

    try:
        result = redact_document(text, policy)
    except MalformedValueError as exc:
        logger.error("Refusing to redact %s: %s", args.input, exc)
        return EXIT_INVALID_INPUT

    try:
        write_document(args.output, result.text)
    except StorageError as exc:
        logger.error("Failed to write output: %s", exc)
        return EXIT_FAILED

    logger.info(
        "Redacted %d value(s) under %d matching key(s) of %d member(s) (suffix=%r)",
        result.redacted_values,
        len(result.matched_keys),
        result.members,
        policy.suffix,
    )
    if args.json:
        # stdout carries the document itself when writing to "-".
        stream = sys.stderr if args.output == STDIO else sys.stdout
        print(json.dumps(result.summary(), sort_keys=True), file=stream)
    return EXIT_OK


def _check(args: argparse.Namespace) -> int:
    _setup_logging()
    policy = _resolve_policy(args)

    try:
        text = read_document(args.input)
    except StorageError as exc:
        logger.error("Failed to read input: %s", exc)
        return EXIT_FAILED

    try:
        findings = redaction_guard_text(args.input, text, policy)
    except MalformedValueError as exc:
        logger.error("Cannot check %s: %s", args.input, exc)
        return EXIT_INVALID_INPUT
    except RuntimeError as exc:
        logger.error("%s", exc)
        return EXIT_FAILED

    if findings:
        print(f"[check] FAIL {args.input}: {len(findings)} unredacted value(s)")
        return EXIT_FAILED
    print(f"[check] OK {args.input}")
    return EXIT_OK


def _print_outcome(outcome: SelfTestOutcome) -> None:
    status = "OK" if outcome.ok else "FAIL"
    print(f"[selftest] {status} {outcome.number}: {outcome.name}")
    if not outcome.ok:
        print(f"Expected: {outcome.expected}")
        print(f"Actual  : {outcome.actual}")


def _selftest(args: argparse.Namespace) -> int:
    outcomes = run_selftest(report=_print_outcome)
    failures = [outcome for outcome in outcomes if not outcome.ok]
    if failures:
        print(f"Self-test failed: {len(failures)} of {len(outcomes)} case(s)")
        return EXIT_FAILED
    print(f"Passed all {len(outcomes)} self-test case(s)")
    return EXIT_OK


def _add_policy_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--suffix",
        help="Key suffix whose values are redacted (default: KEYREDACT_TARGET_SUFFIX or '_X').",
    )
    parser.add_argument(
        "--replace-char",
        help="Single marker character written in place of values (default: KEYREDACT_REPLACE_CHAR or '*').",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyredact",
        description="Redact values of suffix-matched keys in flat JSON documents.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    redact_cmd = subparsers.add_parser("redact", help="Write a redacted copy of a document")
    redact_cmd.add_argument("--input", required=True, help="Input path, s3://bucket/key, or '-' for stdin.")
    redact_cmd.add_argument("--output", required=True, help="Output path, s3://bucket/key, or '-' for stdout.")
    redact_cmd.add_argument("--json", action="store_true", help="Print redaction counters as JSON.")
    _add_policy_args(redact_cmd)
    redact_cmd.set_defaults(func=_redact)

    check_cmd = subparsers.add_parser("check", help="Fail if suffix-matched keys still hold values")
    check_cmd.add_argument("--input", required=True, help="Input path, s3://bucket/key, or '-' for stdin.")
    _add_policy_args(check_cmd)
    check_cmd.set_defaults(func=_check)

    selftest_cmd = subparsers.add_parser("selftest", help="Run the built-in redaction cases")
    selftest_cmd.set_defaults(func=_selftest)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
