"""Tests for the main.py entrypoint."""

import logging

import pytest
import structlog

import main
from item_client.fetcher import ItemFetcher
from tests.conftest import json_transport


@pytest.fixture
def quiet_logging(monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda log_config: None)


@pytest.fixture
def mock_fetcher(monkeypatch):
    """Route main's fetcher through a MockTransport returning payload."""
    def install(payload, status_code=200):
        def create_fetcher(endpoint=None):
            return ItemFetcher(endpoint, transport=json_transport(payload, status_code=status_code))
        monkeypatch.setattr(main, "create_fetcher", create_fetcher)
    return install


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_prints_item(quiet_logging, mock_fetcher, capsys):
    mock_fetcher({"data_field": "x", "correct_field_name": "y", "extra": 123})

    assert main.main() == 0
    out = capsys.readouterr().out
    assert "ItemDetail(data_field='x', correct_field_name='y')" in out


def test_decode_failure_prints_nothing(quiet_logging, mock_fetcher, capsys):
    mock_fetcher({"data_field": "x"})

    assert main.main() == 1
    assert "ItemDetail(" not in capsys.readouterr().out


def test_request_failure_exits_nonzero(quiet_logging, monkeypatch, unused_port, capsys):
    monkeypatch.setenv("ITEM_API_HOST", "127.0.0.1")
    monkeypatch.setenv("ITEM_API_PORT", str(unused_port))

    assert main.main() == 1
    out = capsys.readouterr().out
    assert "ItemDetail(" not in out


def test_invalid_config_exits_before_fetching(quiet_logging, monkeypatch, capsys):
    def fail(endpoint=None):
        raise AssertionError("fetcher must not be created")

    monkeypatch.setattr(main, "create_fetcher", fail)
    monkeypatch.setenv("ITEM_API_PORT", "0")

    assert main.main() == 1
    assert "Fatal error during startup" in capsys.readouterr().err


def test_setup_logging_sets_level(restore_logging):
    main.setup_logging({"level": "debug", "format": "console"})
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_defaults_to_info(restore_logging):
    main.setup_logging({})
    assert logging.getLogger().level == logging.INFO


def test_stdout_carries_only_the_item(mock_fetcher, restore_logging, capfd):
    mock_fetcher({"data_field": "x", "correct_field_name": "y"})

    assert main.main() == 0
    out, err = capfd.readouterr()
    assert out == "ItemDetail(data_field='x', correct_field_name='y')\n"
    assert "item_fetched" in err
