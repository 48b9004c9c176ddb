"""Logging and timing helpers for experiment scripts."""
import logging
import time
from contextlib import contextmanager

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level=logging.INFO):
    """Configure root logging for a script run.

    The library itself only creates module loggers; scripts call this once.

    Parameters
    ----------
    level : int or str
        Logging level, e.g. logging.DEBUG or 'DEBUG'
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(level=level, format=LOG_FORMAT)


@contextmanager
def measure_time():
    """Context manager to measure elapsed time.

    Usage:
        with measure_time() as metrics:
            kalman_filter(model, m0, P0, ys)
        print(metrics["elapsed_time"])

    Yields:
        dict: Dictionary that will be populated with 'elapsed_time' (seconds).
    """
    start_time = time.perf_counter()
    metrics = {}
    yield metrics
    metrics["elapsed_time"] = time.perf_counter() - start_time
