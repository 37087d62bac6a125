# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Grant interface, the null grant, and the combinators that extend it."""

from .base import Grant, NullGrant, new
from .combinators import AllowGrant, VerifyGrant, accepts, allow, verify
from .validity import (
    Cancel,
    Clock,
    Signal,
    ValidGrant,
    now,
    validate,
    with_cancel,
    with_deadline,
    with_signal,
    with_timeout,
)

__all__ = (
    "AllowGrant",
    "Cancel",
    "Clock",
    "Grant",
    "NullGrant",
    "Signal",
    "ValidGrant",
    "VerifyGrant",
    "accepts",
    "allow",
    "new",
    "now",
    "validate",
    "verify",
    "with_cancel",
    "with_deadline",
    "with_signal",
    "with_timeout",
)
