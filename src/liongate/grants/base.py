# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Grant interface and the null grant every chain starts from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

__all__ = ("Grant", "NullGrant", "new")


class Grant(ABC):
    """Authentication and authorization guarding some resource.

    A grant answers three independent questions:

    - valid(): is the grant still alive? Once False, it must never become
      True again (e.g. after cancellation or expiry).
    - verify(credentials): do the caller's credentials satisfy the grant?
    - allows(resource): does the grant cover this resource?

    verify() and allows() return False for a clean deny and raise when the
    check itself cannot be completed. Credentials and resources are opaque:
    an argument of an unexpected shape is a clean deny, never an error.

    Grants are immutable. Combinators in `liongate.grants` wrap an existing
    grant and return a new one; the wrapped grant is never modified.
    """

    __slots__ = ()

    @abstractmethod
    def valid(self) -> bool:
        """Report whether this grant is still valid."""

    @abstractmethod
    def verify(self, credentials: Any) -> bool:
        """Report whether `credentials` are acceptable to this grant."""

    @abstractmethod
    def allows(self, resource: Any) -> bool:
        """Report whether this grant covers `resource`."""


@dataclass(frozen=True)
class NullGrant(Grant):
    """Always valid, verifies nobody, allows nothing."""

    def valid(self) -> bool:
        return True

    def verify(self, credentials: Any) -> bool:
        return False

    def allows(self, resource: Any) -> bool:
        return False


_NULL = NullGrant()


def new() -> Grant:
    """Return the empty grant: valid forever, but denies everyone everything."""
    return _NULL
