# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any

from lionherd_core.errors import ConnectionError

__all__ = (
    "INVALID",
    "AccessDeniedError",
    "AllowanceError",
    "CheckError",
    "InvalidGrantError",
    "VerificationError",
)


class InvalidGrantError(Exception):
    """A grant failed its liveness check (cancelled, expired, ...).

    Only the evaluator produces this, via the `INVALID` sentinel. Grant
    implementations never raise it themselves.
    """


INVALID = InvalidGrantError("grant is no longer valid")


class CheckError(ConnectionError):
    """A verify or allow check could not be completed.

    Distinct from a clean deny: wrong or missing credentials are reported by
    returning False, while a CheckError means the check itself failed (e.g. a
    token service was unreachable). Inherits from ConnectionError because
    these failures are transport/backend failures and are retryable by
    default.
    """

    default_message = "Access check could not be completed"
    default_retryable = True


class VerificationError(CheckError):
    """A credential check could not be completed."""

    default_message = "Credential verification failed"


class AllowanceError(CheckError):
    """A resource match could not be completed."""

    default_message = "Resource allowance check failed"


class AccessDeniedError(PermissionError):
    """Raised by `require()` when no grant allows access.

    The underlying check error, if any, is available as `__cause__` and as
    `error`.
    """

    def __init__(self, resource: Any = None, error: Exception | None = None):
        self.resource = resource
        self.error = error
        msg = "Access denied"
        if error is not None:
            msg = f"{msg}: {error}"
        super().__init__(msg)
