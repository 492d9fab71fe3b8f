"""Unit tests for nutricare.core.security: bcrypt hashing and JWT issue/decode."""

import base64
import json
import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt
from pydantic import SecretStr

from nutricare.core.errors import InvalidHashFormat, InvalidToken
from nutricare.core.security import (
    PasswordHasher,
    TokenIssuer,
    _decode_hash,
    build_password_hasher,
    build_token_issuer,
)
from nutricare.services.credential_store import UserAccount

# Lowest bcrypt cost keeps the suite fast.
TEST_ROUNDS = 4
SECRET = "test-secret-0123456789abcdef0123456789"
B64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def _account(account_id: str = "8d5c1c0e-1111-4222-8333-444455556666", username: str = "alice") -> UserAccount:
    return UserAccount(id=account_id, username=username)


def _segment(token: str, index: int) -> dict:
    part = token.split(".")[index]
    return json.loads(base64.urlsafe_b64decode(part + "=" * (-len(part) % 4)))


class TestPasswordHasher(unittest.TestCase):
    """hash() is salted and one-way; verify() accepts only the right password."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=TEST_ROUNDS)

    def test_hash_differs_from_plaintext(self) -> None:
        for password in ("s3cret", "correct horse battery staple", "pässwörd", "x" * 128):
            self.assertNotEqual(self.hasher.hash(password), password)

    def test_same_password_hashes_differently(self) -> None:
        first = self.hasher.hash("s3cret")
        second = self.hasher.hash("s3cret")
        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.verify("s3cret", first))
        self.assertTrue(self.hasher.verify("s3cret", second))

    def test_wrong_password_rejected(self) -> None:
        hashed = self.hasher.hash("s3cret")
        self.assertFalse(self.hasher.verify("S3cret", hashed))
        self.assertFalse(self.hasher.verify("", hashed))

    def test_cost_factor_embedded_in_hash(self) -> None:
        self.assertTrue(self.hasher.hash("s3cret").startswith("$2b$04$"))

    def test_malformed_hash_is_a_mismatch(self) -> None:
        for bad in ("", "not-a-hash", "$2b$04$short", "s3cret"):
            self.assertFalse(self.hasher.verify("s3cret", bad))

    def test_decode_hash_raises_on_malformed(self) -> None:
        with self.assertRaises(InvalidHashFormat):
            _decode_hash("plaintext")
        with self.assertRaises(InvalidHashFormat):
            _decode_hash(None)  # type: ignore[arg-type]

    def test_long_passwords_truncated_to_72_bytes(self) -> None:
        hashed = self.hasher.hash("a" * 100)
        self.assertTrue(self.hasher.verify("a" * 72, hashed))

    def test_dummy_verify_never_matches(self) -> None:
        self.assertFalse(self.hasher.dummy_verify("nutricare-dummy"))
        self.assertFalse(self.hasher.dummy_verify("anything"))


class TestTokenIssuer(unittest.TestCase):
    """issue() signs sub/username/iat/exp; decode() enforces signature and expiry."""

    def setUp(self) -> None:
        self.issuer = TokenIssuer(SECRET, algorithm="HS256", expire_minutes=60)

    def test_round_trip_claims(self) -> None:
        account = _account()
        claims = self.issuer.decode(self.issuer.issue(account))
        self.assertEqual(claims.subject_id, account.id)
        self.assertEqual(claims.username, "alice")
        self.assertEqual(claims.expires_at - claims.issued_at, timedelta(hours=1))

    def test_token_has_three_segments(self) -> None:
        token = self.issuer.issue(_account())
        self.assertEqual(len(token.split(".")), 3)
        header = _segment(token, 0)
        payload = _segment(token, 1)
        self.assertEqual(header["alg"], "HS256")
        self.assertEqual(set(payload), {"sub", "username", "iat", "exp"})
        self.assertEqual(payload["exp"] - payload["iat"], 3600)

    def test_expired_token_rejected(self) -> None:
        issued = datetime.now(UTC) - timedelta(hours=1, seconds=5)
        token = self.issuer.issue(_account(), now=issued)
        with self.assertRaises(InvalidToken):
            self.issuer.decode(token)

    def test_token_just_inside_window_accepted(self) -> None:
        issued = datetime.now(UTC) - timedelta(minutes=59)
        token = self.issuer.issue(_account(), now=issued)
        self.assertEqual(self.issuer.decode(token).username, "alice")

    def test_tampered_signature_rejected(self) -> None:
        token = self.issuer.issue(_account())
        head, body, signature = token.split(".")
        for i in range(len(signature)):
            # Change the high bits so the final character still alters the decoded bytes.
            replacement = "g" if B64URL_ALPHABET.index(signature[i]) < 32 else "A"
            tampered = signature[:i] + replacement + signature[i + 1 :]
            with self.subTest(position=i):
                with self.assertRaises(InvalidToken):
                    self.issuer.decode(f"{head}.{body}.{tampered}")

    def test_tampered_claims_rejected(self) -> None:
        token = self.issuer.issue(_account())
        head, _, signature = token.split(".")
        forged = base64.urlsafe_b64encode(
            json.dumps({"sub": "other", "username": "mallory", "iat": 0, "exp": 9999999999}).encode()
        ).rstrip(b"=").decode()
        with self.assertRaises(InvalidToken):
            self.issuer.decode(f"{head}.{forged}.{signature}")

    def test_other_secret_rejected(self) -> None:
        token = TokenIssuer("another-secret-0123456789abcdef01").issue(_account())
        with self.assertRaises(InvalidToken):
            self.issuer.decode(token)

    def test_missing_claims_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "id-1", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidToken):
            self.issuer.decode(token)

    def test_unsigned_token_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "id-1", "username": "alice", "iat": now, "exp": now + timedelta(minutes=5)},
            None,
            algorithm="none",
        )
        with self.assertRaises(InvalidToken):
            self.issuer.decode(token)

    def test_garbage_rejected(self) -> None:
        for token in ("", "abc", "a.b.c", "....."):
            with self.assertRaises(InvalidToken):
                self.issuer.decode(token)

    def test_empty_secret_refused(self) -> None:
        with self.assertRaises(ValueError):
            TokenIssuer("")

    def test_expires_in_seconds(self) -> None:
        self.assertEqual(TokenIssuer(SECRET, expire_minutes=15).expires_in, 900)


class TestBuildersFromSettings(unittest.TestCase):
    """Hasher and issuer take their parameters from Settings."""

    def test_builders_use_settings(self) -> None:
        settings = MagicMock()
        settings.BCRYPT_ROUNDS = 5
        settings.JWT_SECRET = SecretStr(SECRET)
        settings.JWT_ALGORITHM = "HS256"
        settings.JWT_EXPIRE_MINUTES = 30
        self.assertEqual(build_password_hasher(settings).rounds, 5)
        issuer = build_token_issuer(settings)
        self.assertEqual(issuer.expire_minutes, 30)
        self.assertEqual(issuer.algorithm, "HS256")


if __name__ == "__main__":
    unittest.main()
