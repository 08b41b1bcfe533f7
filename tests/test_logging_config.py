import logging

import pytest

from hyperdice.logging_config import ENGINE_MODULES, setup_logging


@pytest.fixture
def package_logger():
    yield
    logger = logging.getLogger("hyperdice")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    for name in ENGINE_MODULES + ("viewer",):
        logging.getLogger(f"hyperdice.{name}").setLevel(logging.NOTSET)


def test_console_only(package_logger):
    logger = setup_logging(logging.DEBUG)
    assert logger.name == "hyperdice"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_repeated_setup_does_not_duplicate(package_logger):
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_engine_frames_stay_quiet_by_default(package_logger):
    setup_logging(logging.DEBUG)
    assert logging.getLogger("hyperdice.viewer").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("hyperdice.mesh").isEnabledFor(logging.DEBUG)
    assert logging.getLogger("hyperdice.mesh").isEnabledFor(logging.WARNING)


def test_engine_level_is_separate(package_logger):
    setup_logging(logging.INFO, engine_level=logging.DEBUG)
    for name in ENGINE_MODULES:
        assert logging.getLogger(f"hyperdice.{name}").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("hyperdice.viewer").isEnabledFor(logging.DEBUG)
    assert logging.getLogger("hyperdice.viewer").isEnabledFor(logging.INFO)


def test_engine_debug_reaches_handler(package_logger, capsys):
    setup_logging(logging.WARNING, engine_level=logging.DEBUG)
    logging.getLogger("hyperdice.visibility").debug("Sorted %d cells", 24)
    logging.getLogger("hyperdice.viewer").info("Selected %s", "8-cell")
    out = capsys.readouterr().out
    assert "hyperdice.visibility - DEBUG - Sorted 24 cells" in out
    assert "Selected" not in out


def test_log_file(package_logger, tmp_path):
    path = tmp_path / "dice.log"
    logger = setup_logging(logging.INFO, str(path))
    assert len(logger.handlers) == 2
    logging.getLogger("hyperdice.viewer").info("Selected %s", "24-cell")
    for handler in logger.handlers:
        handler.flush()
    text = path.read_text(encoding="utf-8")
    assert "hyperdice.viewer - INFO - Selected 24-cell" in text
