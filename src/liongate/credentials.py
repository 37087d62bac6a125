# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Ready-made credential carrier.

Grants never look inside credentials; verify functions do. Any object can be
passed as credentials. `Credentials` is a convenience for front ends that
build them from request headers and for verify functions written against it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

__all__ = ("Credentials",)


class Credentials(BaseModel):
    """Caller-supplied credential material.

    Secrets are held as SecretStr and never appear in repr() or logs.

    Example:
        creds = Credentials(subject="alice", token="abc123", scopes={"read"})
        grant = verify(new(), lambda c: isinstance(c, Credentials) and c.has_scope("read"))
    """

    model_config = ConfigDict(frozen=True)

    subject: str | None = None
    token: SecretStr | None = Field(None, description="Bearer or API token")
    password: SecretStr | None = None
    scopes: frozenset[str] = Field(default_factory=frozenset)
    attributes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("scopes", mode="before")
    def _split_scopes(cls, v):  # noqa: N805
        # OAuth-style "read write" strings
        if isinstance(v, str):
            return frozenset(v.split())
        return v

    @field_validator("subject")
    def _strip_subject(cls, v: str | None):  # noqa: N805
        if v is None:
            return None
        v = v.strip()
        return v or None

    def has_scope(self, *scopes: str) -> bool:
        """Check that every given scope was granted."""
        return set(scopes) <= self.scopes

    def token_value(self) -> str | None:
        return self.token.get_secret_value() if self.token is not None else None

    def password_value(self) -> str | None:
        return self.password.get_secret_value() if self.password is not None else None
