import copy
from unittest.mock import MagicMock
import pytest
from solders.keypair import Keypair
from sonic_odyssey import utils


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else str(body)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path, monkeypatch):
    log_file = tmp_path / "app.log"
    monkeypatch.setattr(utils, "LOG_FILE", str(log_file))
    return log_file


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    for module in ("transactions", "rewards", "main", "utils"):
        monkeypatch.setattr(f"sonic_odyssey.{module}.sleep", lambda *_: None)


@pytest.fixture
def config():
    cfg = copy.deepcopy(utils.DEFAULT_CONFIG)
    cfg["network"]["type"] = 3
    cfg["auto_flow"]["enabled"] = False
    return cfg


@pytest.fixture
def keypair():
    return Keypair()


@pytest.fixture
def session():
    return MagicMock()
