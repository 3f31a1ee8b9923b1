import logging
import sys


def setup_logging(level: int = logging.INFO, stream=None):
    """
    Configure logging for the application.

    Sets third-party loggers (e.g., 'requests', 'urllib3') to WARNING and configures the
    root logger with a custom format. Records go to stderr by default so that stdout only
    carries fetched log lines.

    Parameters:
        level (int): Root logging level. Defaults to INFO.
        stream (optional): Output stream for the handler. Defaults to sys.stderr.
    """
    for logger_name in ("requests", "urllib3"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    logging.basicConfig(
        handlers=[stream_handler],
        format=(
            "{asctime:^} | {levelname: ^8} | {filename: ^14} {lineno: <4} | {message}"
        ),
        style="{",
        datefmt="%d.%m.%Y %H:%M:%S",
        level=level,
        force=True,
    )


def get_logger(name: str = None) -> logging.Logger:
    """
    Retrieve a logger instance with the given name.

    Parameters:
        name (str, optional): The name of the logger. Defaults to None for the root logger.

    Returns:
        logging.Logger: The configured logger.
    """
    return logging.getLogger(name)
