# app/core/logging_config.py
import logging
import sys

# Chatty third-party loggers; their INFO lines drown the alert trail
NOISY_LOGGERS = ("uvicorn.access", "urllib3", "sqlalchemy.engine")


def setup_logging(level: str = "INFO"):
    """
    Send every log record to stdout with a timestamp.
    Called once from the FastAPI lifespan; ``level`` comes from LOG_LEVEL.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured at %s", level.upper())
