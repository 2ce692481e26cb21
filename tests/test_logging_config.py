import logging

from utils import logging_config


def test_configure_logging_sets_requested_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    assert logging_config.configure_logging("warning") is None
    assert calls[0]["level"] == logging.WARNING


def test_unknown_level_falls_back_to_info(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    logging_config.configure_logging("chatty")
    assert calls[0]["level"] == logging.INFO
