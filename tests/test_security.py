# /tests/test_security.py

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from app.core.security import verify_session_token


def _keypair():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8, serialization.NoEncryption()
    )
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    return private_pem, public_pem.decode()


@pytest.fixture(scope="module")
def keys():
    """The identity provider's signing key and the public half this service is configured with."""
    return _keypair()


def _token(private_pem, **claims):
    payload = {"sub": "user_abc", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)}
    payload.update(claims)
    return jwt.encode(payload, private_pem, algorithm="RS256")


def test_valid_token_yields_subject(keys):
    private_pem, public_pem = keys
    assert verify_session_token(_token(private_pem), public_key=public_pem) == "user_abc"


def test_expired_token_is_rejected(keys):
    private_pem, public_pem = keys
    token = _token(private_pem, exp=datetime.now(timezone.utc) - timedelta(minutes=1))

    assert verify_session_token(token, public_key=public_pem) is None


def test_token_signed_by_another_key_is_rejected(keys):
    _, public_pem = keys
    other_private, _ = _keypair()

    assert verify_session_token(_token(other_private), public_key=public_pem) is None


def test_garbage_and_empty_tokens_are_rejected(keys):
    _, public_pem = keys
    assert verify_session_token("not-a-jwt", public_key=public_pem) is None
    assert verify_session_token("", public_key=public_pem) is None
