# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for the Credentials carrier."""

import pytest
from pydantic import SecretStr, ValidationError

from liongate import Credentials


class TestCredentials:
    def test_defaults(self):
        c = Credentials()
        assert c.subject is None
        assert c.token is None
        assert c.password is None
        assert c.scopes == frozenset()
        assert c.attributes == {}

    def test_secrets_hidden(self):
        c = Credentials(subject="alice", token="abc123", password="hunter2")
        assert isinstance(c.token, SecretStr)
        assert "abc123" not in repr(c)
        assert "hunter2" not in repr(c)
        assert "abc123" not in str(c)
        assert c.token_value() == "abc123"
        assert c.password_value() == "hunter2"

    def test_missing_secret_values(self):
        c = Credentials(subject="alice")
        assert c.token_value() is None
        assert c.password_value() is None

    def test_scopes_from_string(self):
        c = Credentials(scopes="read  write")
        assert c.scopes == frozenset({"read", "write"})

    def test_scopes_from_iterable(self):
        c = Credentials(scopes=["read", "read", "admin"])
        assert c.scopes == frozenset({"read", "admin"})

    def test_has_scope(self):
        c = Credentials(scopes={"read", "write"})
        assert c.has_scope("read")
        assert c.has_scope("read", "write")
        assert not c.has_scope("admin")
        assert not c.has_scope("read", "admin")

    def test_subject_normalized(self):
        assert Credentials(subject="  alice ").subject == "alice"
        assert Credentials(subject="   ").subject is None

    def test_frozen(self):
        c = Credentials(subject="alice")
        with pytest.raises(ValidationError):
            c.subject = "mallory"  # type: ignore[misc]

    def test_rejects_bad_types(self):
        with pytest.raises(ValidationError):
            Credentials(subject=123)
