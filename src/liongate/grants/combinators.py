# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .base import Grant

__all__ = ("AllowGrant", "VerifyGrant", "accepts", "allow", "verify")

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[[Any], bool])


def _succeeds(check: Callable[[Any], bool], arg: Any) -> bool:
    """Run an inner check, treating a failure as a plain deny."""
    try:
        return bool(check(arg))
    except Exception:
        return False


def _layered(
    fn: Callable[[Any], bool], inner: Callable[[Any], bool], arg: Any, kind: str
) -> bool:
    """Evaluate the newest layer, falling back to the wrapped grant.

    A True from `fn` wins outright. If `fn` raises, the wrapped grant may still
    succeed; otherwise `fn`'s error is re-raised, not the inner one. A clean
    deny from `fn` passes through to the wrapped grant's result unchanged.
    """
    try:
        if fn(arg):
            return True
    except Exception as e:
        if _succeeds(inner, arg):
            logger.debug(f"{kind} layer failed ({type(e).__name__}), inner grant succeeded")
            return True
        raise
    return bool(inner(arg))


@dataclass(frozen=True)
class VerifyGrant(Grant):
    """Grant with one extra credential check."""

    grant: Grant
    fn: Callable[[Any], bool]

    def valid(self) -> bool:
        return self.grant.valid()

    def verify(self, credentials: Any) -> bool:
        return _layered(self.fn, self.grant.verify, credentials, "verify")

    def allows(self, resource: Any) -> bool:
        return self.grant.allows(resource)


@dataclass(frozen=True)
class AllowGrant(Grant):
    """Grant with one extra resource predicate."""

    grant: Grant
    fn: Callable[[Any], bool]

    def valid(self) -> bool:
        return self.grant.valid()

    def verify(self, credentials: Any) -> bool:
        return self.grant.verify(credentials)

    def allows(self, resource: Any) -> bool:
        return _layered(self.fn, self.grant.allows, resource, "allow")


def verify(grant: Grant, fn: Callable[[Any], bool]) -> Grant:
    """Return a grant that calls `fn` when verify() is called.

    Repeated application attaches several functions; they run in reverse
    order of attachment. The first to return True ends the chain and
    verify() returns True. If a function raises and no function beneath it
    returns True, that function's exception propagates. It is valid for every
    function to return False.
    """
    if not callable(fn):
        raise TypeError(f"verify function must be callable, got {type(fn).__name__}")
    return VerifyGrant(grant=grant, fn=fn)


def allow(grant: Grant, fn: Callable[[Any], bool]) -> Grant:
    """Return a grant that calls `fn` when allows() is called.

    Same layering rules as `verify()`: most recent first, any True wins, the
    outermost failing function's exception surfaces only if nothing beneath
    it allows the resource.
    """
    if not callable(fn):
        raise TypeError(f"allow function must be callable, got {type(fn).__name__}")
    return AllowGrant(grant=grant, fn=fn)


def accepts(*types: type) -> Callable[[F], F]:
    """Make a verify/allow function deny arguments of any other type.

    Credentials and resources are opaque, so a function written for one shape
    must answer a clean False for every other shape instead of raising.

    Example:
        @accepts(str)
        def under_tmp(path):
            return path.startswith("/tmp/")
    """
    if not types or not all(isinstance(t, type) for t in types):
        raise TypeError("accepts() requires one or more types")

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(arg: Any) -> bool:
            if not isinstance(arg, types):
                return False
            return fn(arg)

        return wrapper  # type: ignore[return-value]

    return decorator
