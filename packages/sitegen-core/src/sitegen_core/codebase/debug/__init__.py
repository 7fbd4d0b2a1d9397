import logging
import os
import time
from functools import wraps

_SPY_LOGGER = logging.getLogger("sitegen.spy")


def spy_enabled() -> bool:
    """True when ``SITEGEN_SPY`` is set to anything but an off value."""
    val = os.getenv("SITEGEN_SPY", "0")
    return str(val).lower() not in {"", "0", "false", "no", "off"}


def spy_trace(func):
    """Trace calls of ``func`` on the ``sitegen.spy`` logger: entry, exit with duration, and exceptions."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if not spy_enabled():
            return func(*args, **kwargs)
        name = func.__qualname__
        _SPY_LOGGER.debug("-> %s (%d args, kwargs=%s)", name, len(args), sorted(kwargs))
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _SPY_LOGGER.debug("!! %s raised %s: %s", name, type(e).__name__, e)
            raise
        _SPY_LOGGER.debug("<- %s in %.2f ms", name, (time.perf_counter() - started) * 1000)
        return result

    return wrapper
