from __future__ import annotations

import pytest
from conftest import EXECUTION_ARN, STATE_MACHINE_ARN, FakeSfn, entered, started

import stepfunction_trigger.trigger.main as cli_main
from stepfunction_trigger.trigger.engine.client import StepFunctionsClient


@pytest.fixture(autouse=True)
def _fake_engine(monkeypatch: pytest.MonkeyPatch, fake_sfn: FakeSfn) -> None:
    monkeypatch.setattr(
        cli_main, "build_engine", lambda _settings: StepFunctionsClient(sfn=fake_sfn)
    )
    # configure_logging replaces root handlers, which would hide output from capsys.
    monkeypatch.setattr(cli_main, "configure_logging", lambda _level: None)


def test_start_prints_execution_arn(
    monkeypatch: pytest.MonkeyPatch, fake_sfn: FakeSfn, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TRIGGER_STATE_MACHINE_ARN", STATE_MACHINE_ARN)

    code = cli_main.main(["start", "--marks", "[1, 2, 3]"])

    assert code == 0
    assert capsys.readouterr().out.strip() == EXECUTION_ARN
    assert fake_sfn.start_calls[0]["input"] == '{"marks": [1, 2, 3]}'


def test_start_without_state_machine_fails(capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main.main(["start", "--marks", "[1]"])

    assert code == 1
    assert "TRIGGER_STATE_MACHINE_ARN" in capsys.readouterr().err


def test_status_prints_summary(fake_sfn: FakeSfn, capsys: pytest.CaptureFixture[str]) -> None:
    fake_sfn.set_history([started(), entered("Grade")])

    code = cli_main.main(["status", "--execution-arn", EXECUTION_ARN])

    assert code == 0
    out = capsys.readouterr().out
    assert "Passed States: ExecutionStarted, Grade" in out
    assert "Current State: Grade" in out
    assert fake_sfn.describe_calls == [{"executionArn": EXECUTION_ARN}]


def test_invalid_settings_exit_2(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("TRIGGER_READ_TIMEOUT_SECONDS", "-1")

    assert cli_main.main(["status", "--execution-arn", EXECUTION_ARN]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_status_with_blank_execution_arn_fails(
    fake_sfn: FakeSfn, capsys: pytest.CaptureFixture[str]
) -> None:
    code = cli_main.main(["status", "--execution-arn", " "])

    assert code == 1
    assert "Missing executionArn" in capsys.readouterr().err
    assert fake_sfn.describe_calls == []
