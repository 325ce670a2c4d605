# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json

import pytest

from httpcheck.cli import main as cli
from httpcheck.errors import ErrorKind
from httpcheck.models.result import CheckResult

VALID = json.dumps({"url": "http://example/health", "expected_output": "200"})


def test_build_parser_subcommands():
    parser = cli.build_parser()
    args = parser.parse_args(["run", VALID, "--json", "--timeout", "2.5"])
    assert args.command == "run"
    assert args.json is True
    assert args.timeout == 2.5

    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args([])
    assert excinfo.value.code == 2


def test_validate_command(capsys):
    assert cli.main(["validate", VALID]) == cli.EXIT_OK
    assert "configuration OK" in capsys.readouterr().out

    bad = json.dumps({"url": "http://example", "expected_output": "700"})
    assert cli.main(["validate", bad]) == cli.EXIT_CHECK_FAILED
    err = capsys.readouterr().err
    assert "InvalidStatusCode" in err
    assert "700" in err


def test_validate_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(VALID))
    assert cli.main(["validate", "-"]) == cli.EXIT_OK
    assert "configuration OK" in capsys.readouterr().out


def test_run_command_json_output(monkeypatch, capsys):
    captured = {}

    def fake_execute(document, ctx):
        captured["document"] = document
        captured["ctx"] = ctx
        return CheckResult(ok=False, kind=ErrorKind.MATCH_FAILURE, message="expected status code: 200; got: 503")

    monkeypatch.setattr(cli, "execute", fake_execute)
    assert cli.main(["run", VALID, "--json", "--timeout", "3"]) == cli.EXIT_CHECK_FAILED

    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is False
    assert payload["kind"] == "MatchFailure"
    assert captured["document"] == VALID
    assert captured["ctx"].remaining() <= 3


def test_run_command_summary(monkeypatch, capsys):
    monkeypatch.setattr(cli, "execute", lambda document, ctx: CheckResult.success(elapsed=0.25))
    assert cli.main(["run", VALID]) == cli.EXIT_OK
    assert "OK" in capsys.readouterr().out

    monkeypatch.setattr(
        cli,
        "execute",
        lambda document, ctx: CheckResult(ok=False, kind=ErrorKind.TRANSPORT_ERROR, message="refused"),
    )
    assert cli.main(["run", VALID]) == cli.EXIT_CHECK_FAILED
    assert "FAIL TransportError: refused" in capsys.readouterr().out


def test_run_command_summary_includes_failure_reason(monkeypatch, capsys):
    monkeypatch.setattr(
        cli,
        "execute",
        lambda document, ctx: CheckResult(
            ok=False, kind=ErrorKind.TRANSPORT_ERROR, message="refused", category="CONNECTION_ERROR"
        ),
    )
    assert cli.main(["run", VALID]) == cli.EXIT_CHECK_FAILED
    out = capsys.readouterr().out
    assert "FAIL TransportError: refused" in out
    assert "Reason: Network connectivity issue" in out


def test_run_command_summary_omits_reason_for_match_failure(monkeypatch, capsys):
    monkeypatch.setattr(
        cli,
        "execute",
        lambda document, ctx: CheckResult(ok=False, kind=ErrorKind.MATCH_FAILURE, message="expected output not found"),
    )
    assert cli.main(["run", VALID]) == cli.EXIT_CHECK_FAILED
    assert "Reason:" not in capsys.readouterr().out
