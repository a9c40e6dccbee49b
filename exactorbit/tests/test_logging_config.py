import logging

import pytest

from exactorbit.logging_config import setup_logging

CONFIGURED = [
    '',
    'exactorbit.algorithms.dynamics.simulation',
    'exactorbit.algorithms.dynamics.sampling',
]


@pytest.fixture
def restore_logging():
    saved = {}
    for name in CONFIGURED:
        logger = logging.getLogger(name)
        saved[name] = (list(logger.handlers), logger.level, logger.propagate)
    yield
    for name, (handlers, level, propagate) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate


def test_debug_goes_to_log_file(tmp_path, restore_logging):
    log_dir = tmp_path / "logs"
    setup_logging(log_dir=log_dir)

    logging.getLogger("exactorbit.algorithms.dynamics.simulation").debug("probe message")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_dir.is_dir()
    assert (log_dir / "simulation.log").read_text(encoding="utf8").count("probe message") == 1


def test_logger_levels(tmp_path, restore_logging):
    setup_logging(log_dir=tmp_path)
    assert logging.getLogger("exactorbit.algorithms.dynamics.simulation").level == logging.DEBUG
    assert logging.getLogger("exactorbit.algorithms.dynamics.sampling").propagate is False
    assert logging.getLogger().level == logging.INFO


def test_console_only(tmp_path, restore_logging):
    setup_logging(log_dir=tmp_path / "unused", log_to_file=False)
    assert not (tmp_path / "unused").exists()
    assert [type(h) for h in logging.getLogger().handlers] == [logging.StreamHandler]
