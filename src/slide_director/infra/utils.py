import logging

from rich.logging import RichHandler

# HTTP clients under the chat model log every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(level: str = "WARNING", verbose: bool = False) -> logging.Logger:
    """
    Configures Rich console logging for the CLI and returns the package logger.

    Args:
        level: Root log level name.
        verbose: Log the package at DEBUG regardless of ``level``.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )
    package_logger = logging.getLogger("slide_director")
    if verbose:
        package_logger.setLevel(logging.DEBUG)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return package_logger
