"""Retrying a function with back-off, a time limit and cancellation."""

from __future__ import annotations

import enum
import queue
import threading
import time
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

DEFAULT_MAX_RETRY_TIMES = 3
DEFAULT_TIMEOUT = 60.0
DEFAULT_INTERVAL = 2.0

_POLL_INTERVAL = 0.01


class RetryError(Exception):
    """Base class of the errors raised by do."""


class RetryAbort(RetryError):
    """The retry checker chose to stop retrying."""

    def __init__(self, msg: str = "stop retry") -> None:
        super().__init__(msg)


class RetryTimeout(RetryError):
    """The overall time limit ran out."""

    def __init__(self, msg: str = "retry timeout") -> None:
        super().__init__(msg)


class ContextDeadlineExceeded(RetryError):
    """The caller cancelled the operation."""

    def __init__(self, msg: str = "context deadline exceeded") -> None:
        super().__init__(msg)


class EmptyRetryFunc(RetryError):
    """No function was given."""

    def __init__(self, msg: str = "empty retry function") -> None:
        super().__init__(msg)


class TimeFormatError(RetryError):
    """The time limit is not positive."""

    def __init__(self, msg: str = "time out err") -> None:
        super().__init__(msg)


class RetryFailed(RetryError):
    """Every attempt failed; err is the last failure."""

    def __init__(self, err: BaseException) -> None:
        super().__init__(f"retry failed, err={err}")
        self.err = err
        self.__cause__ = err


class BackoffStrategy(enum.IntEnum):
    CONSTANT = 0
    LINEAR = 1
    FIBONACCI = 2


class Strategy(Protocol):
    def sleep(self, times: int) -> float:
        """Seconds to wait after the given attempt number (from 1)."""


def fibonacci_number(n: int) -> int:
    """The n-th Fibonacci number, with fibonacci_number(0) == 0."""
    if n < 0:
        raise ValueError("n must not be negative")
    a, b = 0, 1
    for _ in range(n):
        a, b = b, a + b
    return a


@dataclass(frozen=True)
class Constant:
    """The same wait after every attempt."""

    start_interval: float

    def sleep(self, times: int) -> float:
        return self.start_interval


@dataclass(frozen=True)
class Linear:
    """A wait that grows with the attempt number."""

    start_interval: float

    def sleep(self, times: int) -> float:
        return self.start_interval * times


@dataclass(frozen=True)
class Fibonacci:
    """A wait that grows along the Fibonacci sequence."""

    start_interval: float

    def sleep(self, times: int) -> float:
        return self.start_interval * fibonacci_number(times)


def make_strategy(kind: BackoffStrategy, interval: float) -> Strategy:
    """Build the back-off strategy of the given kind."""
    kind = BackoffStrategy(kind)
    if kind is BackoffStrategy.CONSTANT:
        return Constant(interval)
    if kind is BackoffStrategy.LINEAR:
        return Linear(interval)
    return Fibonacci(interval)


def _is_abort(err: BaseException | None) -> bool:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        if isinstance(err, RetryAbort):
            return True
        seen.add(id(err))
        err = err.__cause__
    return False


def default_retry_checker(err: BaseException) -> bool:
    """Retry on anything but an abort."""
    return not _is_abort(err)


DEFAULT_STRATEGY: Strategy = Linear(DEFAULT_INTERVAL)


def _run(
    fn: Callable[[], Any],
    max_retry_times: int,
    retry_checker: Callable[[BaseException], bool] | None,
    strategy: Strategy | None,
    before_try: Callable[[], None] | None,
    after_try: Callable[[], None] | None,
    results: queue.Queue,
    stop: threading.Event,
) -> None:
    try:
        err: BaseException | None = None
        for attempt in range(max_retry_times):
            if stop.is_set():
                return
            if before_try is not None:
                before_try()
            try:
                value = fn()
            except Exception as exc:
                err = exc
            else:
                if after_try is not None:
                    after_try()
                results.put(("ok", value))
                return
            if after_try is not None:
                after_try()
            if retry_checker is not None and not retry_checker(err):
                results.put(("abort", err))
                return
            if strategy is not None and stop.wait(strategy.sleep(attempt + 1)):
                return
        results.put(("failed", err))
    except BaseException as exc:  # noqa: BLE001 - reported to the caller
        results.put(("panic", exc))


def do(
    fn: Callable[[], Any] | None,
    timeout: float = DEFAULT_TIMEOUT,
    max_retry_times: int = DEFAULT_MAX_RETRY_TIMES,
    retry_checker: Callable[[BaseException], bool] | None = default_retry_checker,
    strategy: Strategy | None = DEFAULT_STRATEGY,
    recover_panic: bool = False,
    before_try: Callable[[], None] | None = None,
    after_try: Callable[[], None] | None = None,
    cancel_event: threading.Event | None = None,
) -> Any:
    """Call fn until it returns without raising, and return its result.

    fn fails an attempt by raising an Exception. Attempts run in a worker
    thread; do raises RetryTimeout after timeout seconds, and
    ContextDeadlineExceeded once cancel_event is set. When retry_checker
    returns False for a failure, RetryAbort is raised; when all attempts
    fail, RetryFailed. An exception from a hook, the checker or the
    strategy is re-raised, or raised as a RetryError if recover_panic is set.
    """
    if fn is None:
        raise EmptyRetryFunc()
    if timeout <= 0:
        raise TimeFormatError()

    results: queue.Queue = queue.Queue(maxsize=1)
    stop = threading.Event()
    worker = threading.Thread(
        target=_run,
        args=(fn, max_retry_times, retry_checker, strategy, before_try, after_try, results, stop),
        daemon=True,
    )
    deadline = time.monotonic() + timeout
    worker.start()
    try:
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise ContextDeadlineExceeded()
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise RetryTimeout()
            try:
                kind, payload = results.get(timeout=min(remaining, _POLL_INTERVAL))
            except queue.Empty:
                continue
            break
    finally:
        stop.set()

    if kind == "ok":
        return payload
    if kind == "abort":
        raise RetryAbort() from payload
    if kind == "panic":
        if not recover_panic:
            raise payload
        stack = "".join(traceback.format_exception(type(payload), payload, payload.__traceback__))
        msg = f"retry function panic has occured, err={payload}, stack:{stack}"
        raise RetryError(f"panic occurred={msg}") from payload
    if payload is None:
        return None
    raise RetryFailed(payload)