import json
import pytest
from sonic_odyssey import utils


def test_merge_config_keeps_defaults_for_missing_keys():
    merged = utils.merge_config(utils.DEFAULT_CONFIG, {"retries": {"box": 5}})
    assert merged["retries"]["box"] == 5
    assert merged["retries"]["transaction"] == 3
    assert merged["daily_claim"]["max_stage"] == 3


def test_merge_config_does_not_mutate_defaults():
    utils.merge_config(utils.DEFAULT_CONFIG, {"api": {"timeout": 99}})
    assert utils.DEFAULT_CONFIG["api"]["timeout"] == 15


def test_load_config_merges_file(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"network": {"type": 1}}))
    config = utils.load_config(str(config_file))
    assert config["network"]["type"] == 1
    assert config["auto_flow"]["interval_hours"] == 12


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        utils.load_config(str(tmp_path / "missing.json"))


def test_log_lines_written_to_file(log_to_tmp):
    utils.success_log("box opened")
    utils.error_log("claim failed")
    lines = log_to_tmp.read_text().splitlines()
    assert lines[0].startswith(">> SUCCESS | ")
    assert lines[0].endswith("| box opened")
    assert lines[1].startswith(">> ERROR | ")


def test_debug_log_respects_debug_mode(log_to_tmp, monkeypatch):
    monkeypatch.setattr(utils, "DEBUG_MODE", False)
    utils.debug_log("hidden")
    assert not log_to_tmp.exists()

    utils.set_debug_mode(True)
    utils.debug_log("shown")
    assert "shown" in log_to_tmp.read_text()


def test_headers_use_raw_token():
    user_agent = utils.get_user_agents()[0]
    headers = utils.get_headers(user_agent, token="abc.def")
    assert headers["Authorization"] == "abc.def"
    assert headers["Sec-Ch-Ua-Platform"] == '"Windows"'
    assert "Authorization" not in utils.get_headers(user_agent)


def test_ask_yes_no(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _: " Y ")
    assert utils.ask_yes_no("Continue?") is True
    monkeypatch.setattr("builtins.input", lambda _: "n")
    assert utils.ask_yes_no("Continue?") is False
