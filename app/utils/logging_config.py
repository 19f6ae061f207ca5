"""
Logging setup for the CV Validator API
"""
import functools
import logging
import logging.config
import os
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

LOGGER_PREFIX = "cv_validator"

FORMATS = {
    "simple": "%(levelname)s - %(name)s - %(message)s",
    "detailed": "%(asctime)s | %(levelname)-8s | %(name)-36s | %(message)s",
}


def setup_logging(level: str = "INFO", enable_file: bool = True, format_style: str = "detailed") -> None:
    """
    Console logging plus, optionally, one rotating file under LOG_DIR (default logs/).
    pdfminer is held at ERROR; it warns about every malformed object in a CV.
    """
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": format_style,
            "stream": "ext://sys.stdout",
        }
    }
    if enable_file:
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "detailed",
            "filename": str(log_dir / f"cv_validator_{datetime.now().strftime('%Y%m%d')}.log"),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "encoding": "utf8",
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {name: {"format": fmt, "datefmt": "%Y-%m-%d %H:%M:%S"} for name, fmt in FORMATS.items()},
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        "loggers": {"pdfminer": {"level": "ERROR"}},
    })
    get_logger("logging").info(f"Logging configured - level={level}, file={enable_file}")


def configure_for_environment():
    """Pick a logging profile from ENVIRONMENT and LOG_LEVEL"""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    if environment == "testing":
        setup_logging(level="WARNING", enable_file=False, format_style="simple")
    elif environment == "development":
        setup_logging(level="DEBUG")
    else:
        setup_logging(level=level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_api_call(operation: str):
    """
    Log duration and verdict of a validation endpoint.
    Only outcome flags and counts are logged, never the submitted field values.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            logger = get_logger(f"api.{operation}")
            start = time.perf_counter()
            try:
                verdict = await func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{operation} raised {e.__class__.__name__} after {time.perf_counter() - start:.3f}s")
                raise
            logger.info(
                f"{operation} -> success={verdict.success} mismatches={len(verdict.mismatches)} "
                f"in {time.perf_counter() - start:.3f}s"
            )
            return verdict
        return wrapper
    return decorator


@contextmanager
def extraction_timer(logger: logging.Logger, size: int, slow_ms: float = 2000):
    """
    Time one PDF extraction. The caller stores the extracted text length in the
    yielded dict under "chars" so it ends up in the log line.
    """
    stats = {"chars": None}
    start = time.perf_counter()
    try:
        yield stats
    except Exception:
        logger.error(f"PDF extraction failed after {(time.perf_counter() - start) * 1000:.0f}ms ({size} bytes)")
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    log = logger.warning if elapsed_ms > slow_ms else logger.info
    log(f"Extracted {stats['chars']} chars from {size} byte PDF in {elapsed_ms:.0f}ms")
