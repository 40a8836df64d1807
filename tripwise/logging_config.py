import logging
import sys
from typing import Union


class _ColoredFormatter(logging.Formatter):
    _COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    _RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self._COLORS.get(record.levelname, '')
        if not color:
            return message
        return f"{color}{message}{self._RESET}"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Send TripWise logs to stdout, coloured when attached to a terminal.

    Safe to call repeatedly; Streamlit reruns the app script on every
    interaction.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    log_format = '%(asctime)s [%(levelname)s] %(name)s %(funcName)s():%(lineno)d - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    logger = logging.getLogger('tripwise')
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    formatter = (
        _ColoredFormatter(log_format, datefmt=date_format)
        if sys.stdout.isatty()
        else logging.Formatter(log_format, datefmt=date_format)
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('geopy').setLevel(logging.WARNING)
