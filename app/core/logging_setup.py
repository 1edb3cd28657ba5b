import logging
import sys

from app.core.config import settings


def setup_logging(log_file: str = None):
    """Configures logging to write to the console and, if configured, a file."""
    log_file = settings.log_file if log_file is None else log_file
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    # Ensure specific loggers are also propagating or handled
    logging.getLogger("uvicorn").handlers = []  # Avoid double logging if uvicorn sets its own
    logging.getLogger("uvicorn").propagate = True
    logging.getLogger("google").setLevel(logging.INFO)
