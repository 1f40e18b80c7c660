"""
Tests for employee_api/core/security.py - password hashing and token signing.
"""
import base64
import json
from datetime import datetime, timedelta, timezone

import pytest

from employee_api.core.errors import InvalidOrExpiredToken
from employee_api.core.security import (
    JWTTokenSigner,
    dummy_verify,
    hash_password,
    verify_password,
)

CLAIMS = {"sub": "1", "id": 1, "username": "admin", "role": "admin"}


def _b64decode(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


class TestPasswordHashing:
    def test_hash_is_pbkdf2(self):
        assert hash_password("admin123").startswith("$pbkdf2-sha256$")

    def test_hash_is_salted(self):
        assert hash_password("admin123") != hash_password("admin123")

    def test_verify_correct(self):
        assert verify_password("admin123", hash_password("admin123")) is True

    def test_verify_wrong(self):
        hashed = hash_password("admin123")
        assert verify_password("admin124", hashed) is False
        assert verify_password("admin", hashed) is False

    def test_verify_missing_hash(self):
        assert verify_password("admin123", None) is False
        assert verify_password("admin123", "") is False

    def test_dummy_verify_runs(self):
        dummy_verify()


class TestJWTTokenSigner:
    def test_round_trip(self, signer):
        payload = signer.verify(signer.issue(CLAIMS))

        assert payload["id"] == 1
        assert payload["username"] == "admin"
        assert payload["role"] == "admin"

    def test_expiry_is_seven_days(self, signer):
        payload = signer.verify(signer.issue(CLAIMS))

        assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60

    def test_accepted_just_before_expiry(self, signer):
        issued = datetime.now(timezone.utc) - timedelta(days=7) + timedelta(minutes=1)

        assert signer.verify(signer.issue(CLAIMS, now=issued))["username"] == "admin"

    def test_rejected_after_expiry(self, signer):
        issued = datetime.now(timezone.utc) - timedelta(days=7) - timedelta(minutes=1)
        token = signer.issue(CLAIMS, now=issued)

        with pytest.raises(InvalidOrExpiredToken):
            signer.verify(token)

    def test_rejects_tampered_payload(self, signer):
        header, payload, sig = signer.issue(CLAIMS).split(".")
        claims = json.loads(_b64decode(payload))
        claims["username"] = "mallory"
        forged = ".".join([header, _b64encode(json.dumps(claims).encode()), sig])

        with pytest.raises(InvalidOrExpiredToken):
            signer.verify(forged)

    def test_rejects_tampered_signature(self, signer):
        header, payload, sig = signer.issue(CLAIMS).split(".")
        flipped = sig[:5] + ("A" if sig[5] != "A" else "B") + sig[6:]

        with pytest.raises(InvalidOrExpiredToken):
            signer.verify(".".join([header, payload, flipped]))

    def test_rejects_token_from_other_secret(self, signer):
        other = JWTTokenSigner("some-other-secret")

        with pytest.raises(InvalidOrExpiredToken):
            signer.verify(other.issue(CLAIMS))

    def test_rejects_garbage(self, signer):
        with pytest.raises(InvalidOrExpiredToken):
            signer.verify("not-a-token")

    def test_custom_expiry(self):
        signer = JWTTokenSigner("k", expires_minutes=5)
        payload = signer.verify(signer.issue(CLAIMS))

        assert payload["exp"] - payload["iat"] == 300

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            JWTTokenSigner("")
