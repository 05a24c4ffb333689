from __future__ import annotations

import pytest

from kr_engine.config import (
    REPLACE_CHAR_ENV,
    TARGET_SUFFIX_ENV,
    RedactionPolicy,
    redaction_enforce_enabled,
)


def test_defaults() -> None:
    policy = RedactionPolicy()
    assert policy.suffix == "_X"
    assert policy.replace_char == "*"
    assert policy.key_pattern == '_X"'


def test_matches_key_requires_suffix_before_closing_quote() -> None:
    policy = RedactionPolicy()
    assert policy.matches_key('"key_X"')
    assert policy.matches_key('"_X"')
    assert not policy.matches_key('"key_Xbar"')
    assert not policy.matches_key('"key_x"')
    assert not policy.matches_key('X"')


def test_matches_key_with_multibyte_suffix() -> None:
    policy = RedactionPolicy(suffix="_סוד")
    assert policy.matches_key('"שם_סוד"')
    assert not policy.matches_key('"שם_סוד_"')


@pytest.mark.parametrize("marker", ["", "**", '"', "\\"])
def test_invalid_markers_rejected(marker: str) -> None:
    with pytest.raises(ValueError):
        RedactionPolicy(replace_char=marker)


def test_from_env_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TARGET_SUFFIX_ENV, "_secret")
    monkeypatch.setenv(REPLACE_CHAR_ENV, "#")
    policy = RedactionPolicy.from_env()
    assert policy == RedactionPolicy(suffix="_secret", replace_char="#")


def test_from_env_explicit_overrides_win() -> None:
    env = {TARGET_SUFFIX_ENV: "_secret", REPLACE_CHAR_ENV: "#"}
    policy = RedactionPolicy.from_env(env, suffix="_pw")
    assert policy == RedactionPolicy(suffix="_pw", replace_char="#")


def test_from_env_falls_back_to_defaults() -> None:
    assert RedactionPolicy.from_env({}) == RedactionPolicy()


def test_redaction_enforce_flag() -> None:
    assert redaction_enforce_enabled({"REDACTION_ENFORCE": "1"}) is True
    assert redaction_enforce_enabled({"REDACTION_ENFORCE": "0"}) is False
    assert redaction_enforce_enabled({}) is False


def test_from_env_accepts_empty_suffix() -> None:
    policy = RedactionPolicy.from_env({TARGET_SUFFIX_ENV: ""})
    assert policy.suffix == ""
    assert policy.matches_key('"anything"')
