from __future__ import annotations

import io
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from keyredact import cli
from keyredact.selftest import CASES, run_selftest


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_redact_writes_output_and_json_summary(tmp_path: Path, capsys) -> None:
    src = _write(tmp_path / "in.json", '{"user": "u", "pass_X": "p", "ids_X": ["1", ""]}')
    dst = tmp_path / "out.json"

    rc = cli.main(["redact", "--input", str(src), "--output", str(dst), "--json"])

    assert rc == 0
    assert dst.read_text(encoding="utf-8") == '{"user": "u", "pass_X": "*", "ids_X": ["*", ""]}'
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"matched_keys": 2, "members": 3, "redacted_values": 2}


def test_redact_honours_policy_flags(tmp_path: Path) -> None:
    src = _write(tmp_path / "in.json", '"a_pw": "x", "b_X": "y"')
    dst = tmp_path / "out.json"

    rc = cli.main(["redact", "--input", str(src), "--output", str(dst), "--suffix", "_pw", "--replace-char", "#"])

    assert rc == 0
    assert dst.read_text(encoding="utf-8") == '"a_pw": "#", "b_X": "y"'


def test_redact_reads_policy_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYREDACT_TARGET_SUFFIX", "_token")
    src = _write(tmp_path / "in.json", '"api_token": "x", "b_X": "y"')
    dst = tmp_path / "out.json"

    assert cli.main(["redact", "--input", str(src), "--output", str(dst)]) == 0
    assert dst.read_text(encoding="utf-8") == '"api_token": "*", "b_X": "y"'


def test_redact_stdin_to_stdout(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO('"k_X": "v"'))
    rc = cli.main(["redact", "--input", "-", "--output", "-"])
    assert rc == 0
    assert capsys.readouterr().out == '"k_X": "*"'


def test_redact_malformed_input_leaves_no_output(tmp_path: Path) -> None:
    src = _write(tmp_path / "in.json", '"k_X": "v", "n": 12')
    dst = tmp_path / "out.json"

    rc = cli.main(["redact", "--input", str(src), "--output", str(dst)])

    assert rc == 2
    assert not dst.exists()


def test_redact_missing_input(tmp_path: Path) -> None:
    rc = cli.main(["redact", "--input", str(tmp_path / "missing.json"), "--output", str(tmp_path / "o.json")])
    assert rc == 1


def test_redact_invalid_marker_exits_2(tmp_path: Path) -> None:
    src = _write(tmp_path / "in.json", '"k": "v"')
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["redact", "--input", str(src), "--output", str(tmp_path / "o.json"), "--replace-char", "**"])
    assert excinfo.value.code == 2


def test_check_passes_on_redacted_document(tmp_path: Path, capsys, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REDACTION_ENFORCE", raising=False)
    src = _write(tmp_path / "in.json", '"k_X": "*", "k": "v"')
    assert cli.main(["check", "--input", str(src)]) == 0
    assert "[check] OK" in capsys.readouterr().out


def test_check_fails_on_leaked_value(tmp_path: Path, capsys, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REDACTION_ENFORCE", raising=False)
    src = _write(tmp_path / "in.json", '"k_X": "leak"')
    assert cli.main(["check", "--input", str(src)]) == 1
    assert "1 unredacted value(s)" in capsys.readouterr().out


def test_check_fails_closed_when_enforced(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REDACTION_ENFORCE", "1")
    src = _write(tmp_path / "in.json", '"k_X": "leak"')
    assert cli.main(["check", "--input", str(src)]) == 1


def test_check_malformed_input(tmp_path: Path) -> None:
    src = _write(tmp_path / "in.json", '"k_X": true')
    assert cli.main(["check", "--input", str(src)]) == 2


def test_selftest_command_passes(capsys) -> None:
    assert cli.main(["selftest"]) == 0
    out = capsys.readouterr().out
    assert "[selftest] OK 3: original string unchanged" in out
    assert "Passed all 8 self-test case(s)" in out


def test_selftest_runs_every_case_in_order() -> None:
    outcomes = run_selftest()
    assert len(outcomes) == len(CASES) + 1
    assert [o.number for o in outcomes] == list(range(1, len(outcomes) + 1))
    assert all(o.ok for o in outcomes), [o.name for o in outcomes if not o.ok]


def test_module_entry_point_version() -> None:
    root = Path(__file__).resolve().parents[1]
    result = subprocess.run(
        [sys.executable, "-m", "keyredact", "--version"],
        capture_output=True,
        text=True,
        env={**os.environ, "PYTHONPATH": str(root / "src")},
    )
    assert result.returncode == 0
    assert result.stdout.startswith("keyredact ")


def test_missing_subcommand_is_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2


def test_redact_to_stdout_sends_json_summary_to_stderr(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO('"k_X": "v", "a": "b"'))

    rc = cli.main(["redact", "--input", "-", "--output", "-", "--json"])

    assert rc == 0
    captured = capsys.readouterr()
    assert captured.out == '"k_X": "*", "a": "b"'
    assert json.loads(captured.err.strip().splitlines()[-1]) == {"matched_keys": 1, "members": 2, "redacted_values": 1}
