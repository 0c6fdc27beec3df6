"""Tests for JWT tokens and password hashing."""

import jwt
from datetime import datetime, timedelta

from taskflow.auth.jwt import create_access_token, decode_access_token, get_user_id_from_token
from taskflow.auth.passwords import hash_password, verify_password
from taskflow.config import JWT_ALGORITHM, JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET_KEY


class TestJWT:
    def test_round_trip_subject(self):
        token = create_access_token("user-1")
        payload = decode_access_token(token)

        assert payload["sub"] == "user-1"
        assert payload["iss"] == JWT_ISSUER
        assert payload["aud"] == JWT_AUDIENCE
        assert get_user_id_from_token(token) == "user-1"

    def test_expires_after_seven_days(self):
        payload = decode_access_token(create_access_token("user-1"))
        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

    def test_expired_token_is_rejected(self):
        past = datetime.utcnow() - timedelta(days=8)
        token = jwt.encode(
            {"sub": "user-1", "iat": past, "exp": past + timedelta(days=1), "iss": JWT_ISSUER, "aud": JWT_AUDIENCE},
            JWT_SECRET_KEY,
            algorithm=JWT_ALGORITHM,
        )
        assert decode_access_token(token) is None

    def test_wrong_audience_is_rejected(self):
        token = jwt.encode(
            {"sub": "user-1", "exp": datetime.utcnow() + timedelta(hours=1), "iss": JWT_ISSUER, "aud": "other"},
            JWT_SECRET_KEY,
            algorithm=JWT_ALGORITHM,
        )
        assert decode_access_token(token) is None

    def test_wrong_secret_is_rejected(self):
        token = jwt.encode(
            {"sub": "user-1", "exp": datetime.utcnow() + timedelta(hours=1), "iss": JWT_ISSUER, "aud": JWT_AUDIENCE},
            "not-the-secret",
            algorithm=JWT_ALGORITHM,
        )
        assert get_user_id_from_token(token) is None

    def test_garbage_token(self):
        assert decode_access_token("not.a.jwt") is None


class TestPasswords:
    def test_hash_format(self):
        stored = hash_password("secret1", iterations=1000)
        scheme, iterations, salt, digest = stored.split("$")

        assert scheme == "pbkdf2_sha256"
        assert iterations == "1000"
        assert len(salt) == 32
        assert "secret1" not in stored

    def test_verify(self):
        stored = hash_password("secret1", iterations=1000)
        assert verify_password("secret1", stored) is True
        assert verify_password("secret2", stored) is False

    def test_salted(self):
        assert hash_password("secret1", iterations=1000) != hash_password("secret1", iterations=1000)

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("secret1", "plaintext") is False
        assert verify_password("secret1", "md5$1$aa$bb") is False
        assert verify_password("secret1", None) is False
