# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from typing import Any, NamedTuple

from .errors import INVALID, AccessDeniedError, InvalidGrantError
from .grants.base import Grant

__all__ = ("Decision", "check", "require")

logger = logging.getLogger(__name__)


class Decision(NamedTuple):
    """Outcome of `check()`.

    Unpacks as `(allowed, error)`. Truthiness follows `allowed`, so
    `if check(...)` does what it reads like.
    """

    allowed: bool
    error: Exception | None = None

    def __bool__(self) -> bool:
        return self.allowed

    def raise_for_error(self) -> None:
        """Re-raise the recorded check error, if any."""
        if self.error is not None:
            raise self.error


def _evaluate(credentials: Any, resource: Any, grant: Grant) -> Decision:
    if not grant.valid():
        return Decision(False, INVALID)
    try:
        if not grant.verify(credentials):
            return Decision(False)
    except Exception as e:
        return Decision(False, e)
    try:
        return Decision(bool(grant.allows(resource)))
    except Exception as e:
        return Decision(False, e)


def check(credentials: Any, resource: Any, *grants: Grant) -> Decision:
    """Decide whether any of `grants` lets `credentials` reach `resource`.

    A grant succeeds when it is valid, verifies the credentials, and allows
    the resource. The first success short-circuits the remaining grants.

    Failures are returned, never raised. When nothing succeeds, the error is
    the last one raised by any grant's verify/allows; grants that were merely
    invalid or unauthorized yield a clean deny (error None).

    Args:
        credentials: Opaque credential material passed to verify()
        resource: Opaque resource descriptor passed to allows()
        *grants: Grants to try, in order

    Returns:
        Decision(allowed, error)
    """
    error: Exception | None = None
    for i, grant in enumerate(grants):
        allowed, err = _evaluate(credentials, resource, grant)
        if allowed:
            logger.debug(f"Grant {i} ({type(grant).__name__}) allowed access")
            return Decision(True)
        if err is None:
            continue
        if isinstance(err, InvalidGrantError):
            logger.debug(f"Grant {i} ({type(grant).__name__}) is no longer valid")
            continue
        logger.debug(f"Grant {i} ({type(grant).__name__}) failed: {type(err).__name__}: {err}")
        error = err

    return Decision(False, error)


def require(credentials: Any, resource: Any, *grants: Grant) -> None:
    """Like `check()`, but raise AccessDeniedError instead of returning a deny.

    Raises:
        AccessDeniedError: If no grant allows access; chained to the check
            error when one was recorded
    """
    allowed, error = check(credentials, resource, *grants)
    if allowed:
        return
    raise AccessDeniedError(resource, error) from error
