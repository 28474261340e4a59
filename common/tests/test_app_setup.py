import logging

from common.app_setup import print_and_log, print_error, set_print_logger, setup_logging


def test_setup_logging_writes_to_logfile(tmp_path):
    logfile = tmp_path / "log.txt"
    logger = setup_logging(app_name="rolespecs-test", logfile=str(logfile))
    try:
        print_and_log("Built 2 role specs")
        print_error("Unknown role: ghost")
        text = logfile.read_text()
        assert "INFO" in text and "Built 2 role specs" in text
        assert "ERROR" in text and "Unknown role: ghost" in text
    finally:
        for h in logger.handlers[:]:
            logger.removeHandler(h)
            h.close()
        set_print_logger(None)


def test_setup_logging_level(tmp_path):
    logger = setup_logging(loglevel=logging.DEBUG, logfile=str(tmp_path / "debug.txt"))
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        for h in logger.handlers[:]:
            logger.removeHandler(h)
            h.close()
        logger.setLevel(logging.WARNING)
        set_print_logger(None)


def test_console_handler():
    logger = setup_logging(console=True)
    try:
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert not isinstance(logger.handlers[0], logging.FileHandler)
    finally:
        logger.removeHandler(logger.handlers[0])
        set_print_logger(None)
