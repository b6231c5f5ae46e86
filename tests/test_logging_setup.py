from __future__ import annotations

import logging

from phrasegen.logging_setup import LOGGER_NAME, setup_logging
from phrasegen.populate import parse_args


def test_setup_logging_writes_file(tmp_path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logging("DEBUG", str(log_file))
    try:
        logging.getLogger(f"{LOGGER_NAME}.orchestrator").info("vocab group 1 done")
        for handler in logger.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "vocab group 1 done" in content
        assert "phrasegen.orchestrator" in content
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


def test_setup_logging_is_repeatable() -> None:
    setup_logging()
    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    logger.handlers.clear()


def test_populate_arguments() -> None:
    args = parse_args(["--mock", "--log-level", "debug"])
    assert args.mock is True
    assert args.log_level == "debug"
