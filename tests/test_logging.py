import json
import logging

import pytest
import structlog

from customer_server.observability import configure_logging


def test_json_rendering(fresh_logging, capsys) -> None:
    configure_logging("info", json=True)
    structlog.get_logger("customers").info("customer_added", customer_id=7)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "customer_added"
    assert payload["customer_id"] == 7
    assert payload["level"] == "info"
    assert payload["logger"] == "customers"
    assert "timestamp" in payload


def test_console_rendering(fresh_logging, capsys) -> None:
    configure_logging(logging.DEBUG, json=False)
    structlog.get_logger("customers").debug("lookup", customer_id=3)

    line = capsys.readouterr().out.strip().splitlines()[-1]
    assert not line.startswith("{")
    assert "lookup" in line
    assert "customer_id=3" in line
    assert logging.getLogger().level == logging.DEBUG


def test_second_call_is_ignored(fresh_logging, capsys) -> None:
    configure_logging("warning", json=True)
    configure_logging("debug", json=False)

    assert logging.getLogger().level == logging.WARNING
    structlog.get_logger("customers").warning("still_json")
    assert json.loads(capsys.readouterr().out.strip().splitlines()[-1])["event"] == "still_json"


def test_unknown_level_is_rejected(fresh_logging) -> None:
    with pytest.raises(ValueError):
        configure_logging("LOUD")

    configure_logging("error")
    assert logging.getLogger().level == logging.ERROR


def test_uvicorn_loggers_share_the_root_handler(fresh_logging) -> None:
    configure_logging("info")

    handler = logging.getLogger().handlers[0]
    assert logging.getLogger("uvicorn.error").handlers == [handler]
    assert logging.getLogger("uvicorn.error").propagate is False
    assert logging.getLogger("uvicorn.access").disabled is True
