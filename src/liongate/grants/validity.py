# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validity combinators: attach liveness conditions to a grant.

Every combinator here is expressed through `validate()`: the returned grant
is valid only while the new predicate *and* the wrapped grant are valid.
Verification and allowance are delegated untouched.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol, runtime_checkable

from .base import Grant

__all__ = (
    "Cancel",
    "Clock",
    "Signal",
    "ValidGrant",
    "now",
    "validate",
    "with_cancel",
    "with_deadline",
    "with_signal",
    "with_timeout",
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@runtime_checkable
class Signal(Protocol):
    """External cancellation signal, e.g. threading.Event or asyncio.Event."""

    def is_set(self) -> bool: ...


def now() -> datetime:
    """Default wall clock used by deadline and timeout grants."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValidGrant(Grant):
    """Grant with one extra liveness predicate."""

    grant: Grant
    predicate: Callable[[], bool]

    def valid(self) -> bool:
        return bool(self.predicate()) and self.grant.valid()

    def verify(self, credentials: Any) -> bool:
        return self.grant.verify(credentials)

    def allows(self, resource: Any) -> bool:
        return self.grant.allows(resource)


def validate(grant: Grant, predicate: Callable[[], bool]) -> Grant:
    """Return a grant that calls `predicate` every time valid() is called.

    Many predicates may be attached by repeated application; all of them must
    return True for valid() to return True. Predicates must be monotonic: once
    one has returned False it must keep returning False.
    """
    if not callable(predicate):
        raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")
    return ValidGrant(grant=grant, predicate=predicate)


class Cancel:
    """One-shot handle that marks its grant invalid.

    Calls after the first have no effect. The handle also satisfies `Signal`,
    so it can drive `with_signal()` on other grants.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def __call__(self) -> None:
        if not self._event.is_set():
            logger.info("Grant cancelled")
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def _live(self) -> bool:
        return not self._event.is_set()

    def __repr__(self) -> str:
        return f"Cancel(cancelled={self.cancelled})"


def with_cancel(grant: Grant) -> tuple[Grant, Cancel]:
    """Return a grant that expires when the returned handle is called."""
    cancel = Cancel()
    return validate(grant, cancel._live), cancel


@dataclass(frozen=True)
class _Unset:
    signal: Signal

    def __call__(self) -> bool:
        return not self.signal.is_set()


def with_signal(grant: Grant, signal: Signal) -> Grant:
    """Return a grant that expires once `signal` is set."""
    if not isinstance(signal, Signal):
        raise TypeError(f"signal must provide is_set(), got {type(signal).__name__}")
    return validate(grant, _Unset(signal))


@dataclass(frozen=True)
class _Before:
    deadline: datetime
    clock: Clock | None = None

    def __call__(self) -> bool:
        current = self.clock() if self.clock is not None else now()
        return current < self.deadline


def with_deadline(grant: Grant, deadline: datetime, *, clock: Clock | None = None) -> Grant:
    """Return a grant that expires once `deadline` has been reached.

    Args:
        grant: Grant to wrap
        deadline: First instant at which the grant is no longer valid
        clock: Time source (default: timezone-aware wall clock)

    Raises:
        ValueError: If `deadline` is naive and the default clock is used, or
            if `deadline` and `clock` disagree on timezone awareness
    """
    if clock is None:
        if deadline.tzinfo is None:
            raise ValueError("deadline must be timezone-aware when using the default clock")
    elif (clock().tzinfo is None) != (deadline.tzinfo is None):
        raise ValueError("deadline and clock must both be timezone-aware or both naive")
    return validate(grant, _Before(deadline, clock))


def with_timeout(
    grant: Grant, timeout: timedelta | float, *, clock: Clock | None = None
) -> Grant:
    """Return a grant that expires `timeout` after construction.

    The expiry point is computed once, here, and not per call.

    Args:
        grant: Grant to wrap
        timeout: Lifetime as a timedelta or in seconds
        clock: Time source (default: timezone-aware wall clock)
    """
    if not isinstance(timeout, timedelta):
        if isinstance(timeout, bool) or not isinstance(timeout, int | float):
            raise TypeError(f"timeout must be timedelta or seconds, got {type(timeout).__name__}")
        timeout = timedelta(seconds=timeout)

    start = clock() if clock is not None else now()
    return validate(grant, _Before(start + timeout, clock))
