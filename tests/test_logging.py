import logging
import threading

from nfobridge.utils import logging as log_module


def test_concurrent_setup_attaches_handlers_once(monkeypatch):
    logger = logging.getLogger(log_module.LOGGER_NAME)
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "_nfobridge_configured", False, raising=False)
    monkeypatch.delenv("LOG_DIR", raising=False)

    barrier = threading.Barrier(8)

    def setup():
        barrier.wait()
        log_module._setup_logging()

    threads = [threading.Thread(target=setup) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(logger.handlers) == 1


def test_sensitive_values_are_masked():
    assert log_module._mask_sensitive_data("GET /x?api_key=abc123&page=2") == "GET /x?api_key=***masked***&page=2"
