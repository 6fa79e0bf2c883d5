"""Console and file logging for the rcl command-line scripts."""
import logging
import logging.handlers
import sys
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
LOG_FILE_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class Colors:
    """ANSI escapes used for level names."""
    RESET = "\033[0m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    BOLD_RED = "\033[1;31m"


class ColoredFormatter(logging.Formatter):
    """Tints the level name only; message text stays plain for grepping."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD_RED,
    }

    def formatMessage(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().formatMessage(record)
        plain = record.levelname
        record.levelname = f"{color}{plain}{Colors.RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain


def setup_cli_logging(level=logging.INFO, quiet=False, log_file=None, color=None):
    """
    Route records to stderr (stdout may carry dot text) and, when log_file is
    given, to a rotating DEBUG-level file. color=None colours only a terminal.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING if quiet else level)
    if color is None:
        color = sys.stderr.isatty()
    formatter_class = ColoredFormatter if color else logging.Formatter
    console_handler.setFormatter(formatter_class(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=LOG_FILE_BYTES, backupCount=LOG_FILE_BACKUPS
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug("CLI logging initialized (color=%s).", color)
