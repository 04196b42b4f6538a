"""CLI tests — `panel send` and `panel config` through click's test runner."""

import json

import pytest
from click.testing import CliRunner

from assistant_panel import __version__, config as config_module
from assistant_panel.cli.main import main


@pytest.fixture(autouse=True)
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_FILE", path)
    return path


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_send_prints_snapshot_json(runner):
    result = runner.invoke(main, ["send", "hello", "--reply", "hi there", "--delay", "0", "--json"])
    assert result.exit_code == 0, result.output
    snapshot = json.loads(result.output)
    assert snapshot["state"] == "idle"
    assert [m["sender"] for m in snapshot["messages"]] == ["user", "assistant"]
    assert [m["content"] for m in snapshot["messages"]] == ["hello", "hi there"]


def test_send_renders_reply(runner):
    result = runner.invoke(main, ["send", "hello", "--reply", "hi there", "--delay", "0"])
    assert result.exit_code == 0, result.output
    assert "hi there" in result.output


def test_send_uses_canned_reply(runner):
    result = runner.invoke(main, ["send", "hello", "--delay", "0", "--json"])
    assert result.exit_code == 0, result.output
    snapshot = json.loads(result.output)
    assert snapshot["messages"][1]["content"] == config_module.DEFAULT_CANNED_REPLY


def test_send_rejects_blank_message(runner):
    result = runner.invoke(main, ["send", "   ", "--delay", "0"])
    assert result.exit_code == 1
    assert "Message is empty" in result.output


def test_send_reports_timeout(runner):
    result = runner.invoke(main, ["send", "hello", "--delay", "5", "--timeout", "0.01", "--json"])
    assert result.exit_code == 1
    snapshot = json.loads(result.output)
    assert snapshot["state"] == "idle"
    assert len(snapshot["messages"]) == 1


def test_config_set_and_show(runner, config_file):
    result = runner.invoke(main, ["config", "set", "reply_timeout", "12"])
    assert result.exit_code == 0, result.output
    assert json.loads(config_file.read_text()) == {"reply_timeout": 12.0}

    result = runner.invoke(main, ["config", "show", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["reply_timeout"] == 12.0


def test_config_set_none_clears_optional_value(runner, config_file):
    runner.invoke(main, ["config", "set", "failure_notice", "Try again later"])
    result = runner.invoke(main, ["config", "set", "failure_notice", "none"])
    assert result.exit_code == 0, result.output
    assert json.loads(config_file.read_text()) == {"failure_notice": None}


def test_config_set_rejects_unknown_key(runner, config_file):
    result = runner.invoke(main, ["config", "set", "colour", "blue"])
    assert result.exit_code == 2
    assert not config_file.exists()


def test_config_set_rejects_invalid_value(runner, config_file):
    result = runner.invoke(main, ["config", "set", "reply_timeout", "-1"])
    assert result.exit_code == 1
    assert not config_file.exists()


def test_config_file_drives_send(runner, config_file):
    config_file.write_text(json.dumps({"canned_reply": "configured", "reply_delay": 0}))
    result = runner.invoke(main, ["send", "hello", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["messages"][1]["content"] == "configured"


def test_config_reset(runner, config_file):
    config_file.write_text(json.dumps({"overlap_policy": "queue"}))
    result = runner.invoke(main, ["config", "reset"])
    assert result.exit_code == 0
    assert json.loads(config_file.read_text()) == {}


def test_chat_history_new_and_quit(runner):
    result = runner.invoke(main, ["chat", "--delay", "0"], input="hello\n/history\n/new\n/history\n/quit\n")
    assert result.exit_code == 0, result.output
    assert result.output.count("help you with that") == 2
    assert "New chat started." in result.output


def test_chat_skips_blank_input_and_ends_on_eof(runner):
    result = runner.invoke(main, ["chat", "--delay", "0"], input="   \nhello\n")
    assert result.exit_code == 0, result.output
    assert result.output.count("help you with that") == 1


def test_chat_reports_timeout(runner):
    result = runner.invoke(main, ["chat", "--delay", "5", "--timeout", "0.01"], input="hello\n/exit\n")
    assert result.exit_code == 0, result.output
    assert "Assistant unavailable" in result.output
