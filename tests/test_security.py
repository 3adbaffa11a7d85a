"""Password hashing, session token signing and bearer extraction."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.exceptions import (
    InternalError,
    InvalidSignature,
    MalformedToken,
    MissingCredential,
    PasswordMismatch,
    TokenExpired,
    Unauthenticated,
)
from utils.security import (
    TokenSigner,
    clamp_session_ttl,
    generate_refresh_token,
    get_bearer_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret-with-plenty-of-bytes"


@pytest.fixture
def signer():
    return TokenSigner(SECRET)


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def test_hash_is_not_plaintext_and_is_salted():
    first = hash_password("secret123")
    second = hash_password("secret123")
    assert "secret123" not in first
    assert first != second


def test_verify_accepts_the_right_password():
    assert verify_password(hash_password("secret123"), "secret123") is True


def test_verify_rejects_a_wrong_password():
    digest = hash_password("secret123")
    with pytest.raises(PasswordMismatch):
        verify_password(digest, "secret124")


def test_corrupt_digest_is_an_internal_error():
    with pytest.raises(InternalError):
        verify_password("not-a-hash", "secret123")


# ---------------------------------------------------------------------------
# Session tokens
# ---------------------------------------------------------------------------

def test_issue_then_verify_returns_subject(signer):
    user_id = uuid.uuid4()
    token = signer.issue(user_id, timedelta(minutes=5))
    assert signer.verify(token) == str(user_id)


def test_claims_carry_issuer_and_lifetime(signer):
    token = signer.issue(uuid.uuid4(), timedelta(minutes=10))
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], issuer="chirpy")
    assert claims["exp"] - claims["iat"] == 600


def test_ttl_must_be_positive(signer):
    with pytest.raises(ValueError):
        signer.issue(uuid.uuid4(), timedelta(0))


def test_expired_token_is_rejected(signer):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {
            "iss": "chirpy",
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(hours=1)).timestamp()),
            "sub": str(uuid.uuid4()),
        },
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(TokenExpired):
        signer.verify(token)


def test_wrong_secret_is_rejected(signer):
    token = TokenSigner("another-secret-with-plenty-of-bytes").issue(uuid.uuid4())
    with pytest.raises(InvalidSignature):
        signer.verify(token)


@pytest.mark.parametrize("position", [5, -5])
def test_tampering_one_byte_invalidates(signer, position):
    token = signer.issue(uuid.uuid4())
    chars = list(token)
    chars[position] = "A" if chars[position] != "A" else "B"
    with pytest.raises(Unauthenticated):
        signer.verify("".join(chars))


def test_garbage_is_malformed(signer):
    with pytest.raises(MalformedToken):
        signer.verify("not.a.jwt")


def test_non_uuid_subject_is_malformed(signer):
    token = signer.issue("someone")
    with pytest.raises(MalformedToken):
        signer.verify(token)


def test_foreign_issuer_is_rejected(signer):
    token = TokenSigner(SECRET, issuer="elsewhere").issue(uuid.uuid4())
    with pytest.raises(MalformedToken):
        signer.verify(token)


@pytest.mark.parametrize(
    "requested, expected",
    [
        (None, 3600),
        (0, 3600),
        (-10, 3600),
        (3600, 3600),
        (7200, 3600),
        (60, 60),
        (3599, 3599),
        (10**15, 3600),
        (-10**15, 3600),
        (10**30, 3600),
    ],
)
def test_session_ttl_clamping(requested, expected):
    assert clamp_session_ttl(requested) == timedelta(seconds=expected)


# ---------------------------------------------------------------------------
# Bearer credentials and refresh tokens
# ---------------------------------------------------------------------------

def test_bearer_token_is_extracted():
    assert get_bearer_token({"Authorization": "Bearer abc.def"}) == "abc.def"


@pytest.mark.parametrize("headers", [{}, {"Authorization": ""}, {"Authorization": "Bearer "}, {"Authorization": "Basic Zm9v"}])
def test_missing_bearer_token(headers):
    with pytest.raises(MissingCredential):
        get_bearer_token(headers)


def test_refresh_tokens_are_64_hex_chars():
    token = generate_refresh_token()
    assert len(token) == 64
    int(token, 16)
    assert token != generate_refresh_token()
