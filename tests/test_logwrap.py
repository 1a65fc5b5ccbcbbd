import logging

from timed_futures._impl.logwrap import LogWrapper


def test_debug_enabled(caplog):
    log = LogWrapper(logging.getLogger("test-logwrap"))

    with caplog.at_level(logging.DEBUG):
        log.debug("visible %s", 1)

    assert "visible 1" in caplog.text


def test_debug_disabled(caplog, monkeypatch):
    monkeypatch.setenv("TIMED_FUTURES_DEBUG", "0")
    log = LogWrapper(logging.getLogger("test-logwrap"))

    with caplog.at_level(logging.DEBUG):
        log.debug("hidden")
        log.exception("shown")

    assert "hidden" not in caplog.text
    assert "shown" in caplog.text
