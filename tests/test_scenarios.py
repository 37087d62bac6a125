# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""End-to-end grant scenarios.

These build grants the way a resource owner would: start from new(), layer an
authentication check, an authorization predicate and a lifetime, then decide
with check().
"""

import threading
from datetime import datetime, timezone

from liongate import (
    AllowanceError,
    Credentials,
    VerificationError,
    accepts,
    allow,
    check,
    new,
    verify,
    with_cancel,
    with_signal,
    with_timeout,
)


class TestBuildUp:
    def test_verify_then_allow(self):
        b = new()
        a = verify(b, lambda ctx: True)
        assert a.verify("any ctx") is True
        assert a.allows("anything") is False

        c = allow(a, lambda r: r == "x")
        assert check("ctx", "x", c) == (True, None)
        assert check("ctx", "y", c) == (False, None)

    def test_timeout_at_fixed_instants(self):
        instants = iter(
            [
                datetime.fromtimestamp(10000, tz=timezone.utc),  # construction
                datetime.fromtimestamp(10000, tz=timezone.utc),
                datetime.fromtimestamp(10010, tz=timezone.utc),
            ]
        )
        g = with_timeout(new(), 5, clock=lambda: next(instants))
        assert g.valid() is True
        assert g.valid() is False


class TestFileServer:
    """A file owner gating paths behind token and basic-auth grants."""

    TOKENS = {"t-alice": "alice"}
    PASSWORDS = {"bob": "s3cret"}

    def token_ok(self, creds):
        if not isinstance(creds, Credentials) or creds.token is None:
            return False
        return creds.token_value() in self.TOKENS

    def password_ok(self, creds):
        if not isinstance(creds, Credentials) or creds.subject is None:
            return False
        return self.PASSWORDS.get(creds.subject) == creds.password_value()

    def test_alternative_auth_schemes(self):
        @accepts(str)
        def public(path):
            return path.startswith("/srv/public/")

        g = allow(verify(verify(new(), self.password_ok), self.token_ok), public)

        by_token = Credentials(token="t-alice")
        by_password = Credentials(subject="bob", password="s3cret")
        wrong = Credentials(subject="bob", password="guess")

        assert check(by_token, "/srv/public/a.txt", g) == (True, None)
        assert check(by_password, "/srv/public/a.txt", g) == (True, None)
        assert check(wrong, "/srv/public/a.txt", g) == (False, None)
        assert check(by_token, "/srv/private/a.txt", g) == (False, None)
        assert check(by_token, 404, g) == (False, None)
        assert check({"token": "t-alice"}, "/srv/public/a.txt", g) == (False, None)

    def test_flaky_token_backend_falls_back_to_password(self):
        def token_backend_down(creds):
            raise VerificationError("token service unreachable")

        g = allow(verify(verify(new(), self.password_ok), token_backend_down), lambda r: True)

        ok, err = check(Credentials(subject="bob", password="s3cret"), "/f", g)
        assert (ok, err) == (True, None)

        ok, err = check(Credentials(token="t-alice"), "/f", g)
        assert ok is False
        assert isinstance(err, VerificationError)

    def test_per_user_grants(self):
        """Each user holds a grant for their home; any one may open a file."""

        def home(user):
            return allow(
                verify(new(), lambda c, u=user: isinstance(c, Credentials) and c.subject == u),
                accepts(str)(lambda p, u=user: p.startswith(f"/home/{u}/")),
            )

        grants = [home("alice"), home("bob")]
        alice = Credentials(subject="alice")
        assert check(alice, "/home/alice/notes", *grants)
        assert not check(alice, "/home/bob/notes", *grants)

    def test_revoking_a_session(self):
        session = threading.Event()
        base = allow(verify(new(), lambda c: True), lambda r: True)
        g1 = with_signal(base, session)
        g2, cancel = with_cancel(base)

        assert check("ctx", "/f", g1, g2)
        session.set()
        assert check("ctx", "/f", g1, g2)
        cancel()
        assert check("ctx", "/f", g1, g2) == (False, None)

    def test_acl_outage_surfaces_allowance_error(self):
        def acl(path):
            raise AllowanceError("acl store timeout", details={"path": path})

        g = allow(verify(new(), lambda c: True), acl)
        ok, err = check("ctx", "/f", g)
        assert ok is False
        assert isinstance(err, AllowanceError)
