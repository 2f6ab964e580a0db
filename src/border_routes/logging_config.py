"""
Logging setup for border_routes.

The CLI and the backend both call setup_logging() once at startup; library
modules only ever do logging.getLogger(__name__).
"""

import logging
import sys
from typing import Iterable

from rich.console import Console
from rich.logging import RichHandler

# HTTP client libraries log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def setup_logging(
    level: str = "INFO",
    use_rich: bool = True,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Install a single handler on the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Unknown names fall back to INFO.
        use_rich: Colored Rich output on stderr; plain timestamped lines otherwise.
        quiet: Logger names that are capped at WARNING.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(file=sys.stderr),
            level=numeric_level,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
            log_time_format="[%H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured: level={level}, rich={use_rich}")
