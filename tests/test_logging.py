import io
import logging

import pytest

from ztcentral.utils.logging import ColoredFormatter, get_logger, set_log_level, setup_logger


@pytest.fixture
def logger_name(request):
    name = f"ztcentral_test_{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


def test_setup_logger_writes_file(tmp_path, logger_name):
    log_file = tmp_path / "logs" / "client.log"
    logger = setup_logger(logger_name, level="debug", file_path=log_file, use_colors=False)
    logger.info("network listed")

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 2
    assert "network listed" in log_file.read_text()


def test_setup_logger_replaces_handlers(logger_name):
    setup_logger(logger_name)
    logger = setup_logger(logger_name)
    assert len(logger.handlers) == 1


def test_colored_formatter_only_colors_terminals():
    record = logging.LogRecord("ztcentral", logging.WARNING, __file__, 1, "slow down", None, None)
    formatter = ColoredFormatter("%(levelname)s %(message)s", stream=io.StringIO())
    assert formatter.format(record) == "WARNING slow down"


def test_get_logger_leaves_sub_loggers_unconfigured():
    logger = get_logger("ztcentral.network.test_sub")
    assert logger.handlers == []


def test_set_log_level(logger_name):
    logger = setup_logger(logger_name, level=logging.WARNING)
    set_log_level("error", logger_name)
    assert logger.level == logging.ERROR


def test_library_loggers_use_module_names():
    from ztcentral import client
    from ztcentral.config import manager
    from ztcentral.network import client as transport, codec, ratelimit, retry

    for module in (client, manager, transport, codec, ratelimit, retry):
        assert module.logger.name == module.__name__
