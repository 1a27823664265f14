"""
Logging Configuration
Sets up the 'heartvolume' logger for the command-line renderer.
"""
import logging
import os
import sys
from typing import Optional

from heartvolume.errors import EncodingError

LOGGER_NAME = "heartvolume"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configures the 'heartvolume' logger.

    The console shows INFO (DEBUG with `verbose`). A log file, when given,
    always receives the full DEBUG trace, including build and render timings.

    Args:
        verbose: Show DEBUG messages on the console.
        log_file: Optional path to save logs to a file.

    Raises:
        EncodingError: If the log file cannot be opened. The console handler
                       is already installed at that point, so the caller can
                       still report the failure.
    """
    console_level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else console_level)

    # Repeated CLI invocations in one process must not stack handlers
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # numba reports JIT compilation at DEBUG on its own logger
    logging.getLogger("numba").setLevel(logging.WARNING)

    if log_file:
        abs_path = os.path.abspath(log_file)
        try:
            file_handler = logging.FileHandler(abs_path, mode='w', encoding='utf-8')
        except OSError as e:
            raise EncodingError(f"Unable to open the log file '{abs_path}'. ({e})") from e
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(
        f"Logging initialized (console={logging.getLevelName(console_level)}, "
        f"log file={log_file or 'none'})."
    )
