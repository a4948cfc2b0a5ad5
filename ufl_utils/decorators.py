"""
Reusable decorators for timing and exception logging.
"""
import time
import logging
from functools import wraps
from typing import Optional, Type

from exceptions import UflError

def log_and_time(phase_name: Optional[str] = None, error_cls: Optional[Type[BaseException]] = UflError):
    """
    Logs start/end/duration and logs failures.
    UflError subclasses pass through as raised and are logged without a stack trace.
    Anything else is logged with its stack trace and rethrown as error_cls,
    or unchanged when error_cls is None.
    """
    def outer(func):
        @wraps(func)
        def inner(*args, **kwargs):
            logger = logging.getLogger(func.__module__)
            name = phase_name or func.__name__
            t0 = time.perf_counter()
            logger.info(f"{name} start")
            try:
                result = func(*args, **kwargs)
                dt = time.perf_counter() - t0
                logger.info(f"{name} done in {dt:.3f}s")
                return result
            except UflError as e:
                dt = time.perf_counter() - t0
                logger.error(f"{name} failed after {dt:.3f}s: {e}")
                raise
            except Exception as e:
                dt = time.perf_counter() - t0
                logger.exception(f"{name} failed after {dt:.3f}s: {e}")
                if error_cls is None:
                    raise
                raise error_cls(str(e)) from e
        return inner
    return outer
