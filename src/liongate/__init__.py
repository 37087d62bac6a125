# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Composable grants gating access to arbitrary resources.

A grant combines three checks: validity (is it still alive), verification
(are the caller's credentials acceptable) and allowance (does it cover this
resource). Start from `new()`, layer combinators, and decide with `check()`:

    grant = allow(verify(new(), token_ok), under_home)
    grant, cancel = with_cancel(with_timeout(grant, 300))
    allowed, error = check(credentials, "/home/alice/notes.txt", grant)
"""

from .credentials import Credentials
from .errors import (
    INVALID,
    AccessDeniedError,
    AllowanceError,
    CheckError,
    InvalidGrantError,
    VerificationError,
)
from .evaluator import Decision, check, require
from .grants import (
    AllowGrant,
    Cancel,
    Clock,
    Grant,
    NullGrant,
    Signal,
    ValidGrant,
    VerifyGrant,
    accepts,
    allow,
    new,
    validate,
    verify,
    with_cancel,
    with_deadline,
    with_signal,
    with_timeout,
)

__all__ = (
    # Grants
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
    "validate",
    "verify",
    "with_cancel",
    "with_deadline",
    "with_signal",
    "with_timeout",
    # Evaluation
    "Decision",
    "check",
    "require",
    "Credentials",
    # Errors
    "INVALID",
    "AccessDeniedError",
    "AllowanceError",
    "CheckError",
    "InvalidGrantError",
    "VerificationError",
)
