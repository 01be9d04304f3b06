from __future__ import annotations

import os

import pytest
from typer.testing import CliRunner

from pbar_server import __version__, cli

# Unset before each invocation and restored afterwards by CliRunner
ISOLATED_ENV = {
    "PBAR_TEMPLATE_FILE": None,
    "PBAR_BIND_HOST": None,
    "PBAR_BIND_PORT": None,
    "PBAR_WORKERS": None,
    "PBAR_LOG_LEVEL": None,
}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def uvicorn_calls(monkeypatch):
    calls = []

    def fake_run(app, **kwargs):
        calls.append(
            {
                "app": app,
                "template_file": os.environ.get("PBAR_TEMPLATE_FILE"),
                "log_level_env": os.environ.get("PBAR_LOG_LEVEL"),
                **kwargs,
            }
        )

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)
    return calls


def test_defaults(runner, uvicorn_calls):
    result = runner.invoke(cli.app, [], env=ISOLATED_ENV)

    assert result.exit_code == 0, result.output
    [call] = uvicorn_calls
    assert call["app"] == cli.APP_FACTORY
    assert call["factory"] is True
    assert call["host"] == "127.0.0.1"
    assert call["port"] == 5005
    assert call["workers"] == 1
    assert call["template_file"] is None
    assert call["log_level_env"] == "INFO"


def test_options(runner, uvicorn_calls, tmp_path):
    template = tmp_path / "bar.svg"
    template.write_text("<svg>{{ progress }}</svg>", encoding="utf-8")

    result = runner.invoke(
        cli.app,
        ["-f", str(template), "--ip", "0.0.0.0", "-p", "8080", "-w", "4", "-v"],
        env=ISOLATED_ENV,
    )

    assert result.exit_code == 0, result.output
    [call] = uvicorn_calls
    assert call["host"] == "0.0.0.0"
    assert call["port"] == 8080
    assert call["workers"] == 4
    assert call["template_file"] == str(template.resolve())
    assert call["log_level_env"] == "DEBUG"
    assert call["log_level"] == "debug"


def test_settings_supply_defaults(runner, uvicorn_calls):
    env = {**ISOLATED_ENV, "PBAR_BIND_PORT": "9001", "PBAR_WORKERS": "2"}

    result = runner.invoke(cli.app, [], env=env)

    assert result.exit_code == 0, result.output
    [call] = uvicorn_calls
    assert call["port"] == 9001
    assert call["workers"] == 2


def test_unreadable_template_exits_before_serving(runner, uvicorn_calls, tmp_path):
    result = runner.invoke(cli.app, ["-f", str(tmp_path / "missing.svg")], env=ISOLATED_ENV)

    assert result.exit_code == 1
    assert uvicorn_calls == []


def test_malformed_template_exits_before_serving(runner, uvicorn_calls, tmp_path):
    template = tmp_path / "broken.svg"
    template.write_text("{% for %}", encoding="utf-8")

    result = runner.invoke(cli.app, ["-f", str(template)], env=ISOLATED_ENV)

    assert result.exit_code == 1
    assert uvicorn_calls == []


@pytest.mark.parametrize("args", [["--port", "0"], ["--workers", "0"]])
def test_rejects_out_of_range_numbers(runner, uvicorn_calls, args):
    result = runner.invoke(cli.app, args, env=ISOLATED_ENV)

    assert result.exit_code == 2
    assert uvicorn_calls == []


def test_version(runner, uvicorn_calls):
    result = runner.invoke(cli.app, ["--version"], env=ISOLATED_ENV)

    assert result.exit_code == 0
    assert result.output.strip() == __version__
    assert uvicorn_calls == []
