"""Logging helpers.

Package logger plus the instrumentation decorators applied to the analysis
entrypoints. Everything routes through stdlib logging under the
``trade_ledger_engine`` logger name.
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable


ledger_logger = logging.getLogger("trade_ledger_engine")


def log_operation(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Log start/finish of a named operation at DEBUG level."""

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            ledger_logger.debug("operation start: %s", name)
            result = fn(*args, **kwargs)
            ledger_logger.debug("operation done: %s", name)
            return result

        return wrapper

    return deco


def log_timing(threshold: float = 0.0) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Warn when the wrapped call takes longer than ``threshold`` seconds."""

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed = time.perf_counter() - started
                if threshold and elapsed > threshold:
                    ledger_logger.warning(
                        "slow call: %s took %.3fs (threshold %.3fs)",
                        fn.__qualname__,
                        elapsed,
                        threshold,
                    )
                else:
                    ledger_logger.debug("%s took %.3fs", fn.__qualname__, elapsed)

        return wrapper

    return deco


def log_errors(severity: str = "medium") -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Log exceptions escaping the wrapped call with a severity tag, then re-raise."""

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return fn(*args, **kwargs)
            except Exception:
                ledger_logger.exception("[%s] error in %s", severity, fn.__qualname__)
                raise

        return wrapper

    return deco


def log_ledger_operation(
    event: str,
    details: dict[str, Any] | None = None,
    execution_time: float | None = None,
) -> dict[str, Any]:
    if details:
        ledger_logger.info("[%s] %s", event, details)
    else:
        ledger_logger.info("[%s]", event)
    return {"event": event, "details": details or {}, "execution_time": execution_time}
