from datetime import timedelta
from uuid import uuid4

import pytest

from saas_auth.domain.entities import TokenType


def test_issue_and_verify_access_token(tokens, clock):
    user_id = uuid4()

    issued = tokens.issue(user_id, TokenType.access)
    result = tokens.verify(issued.token, TokenType.access)

    assert result.is_ok()
    assert result.value.user_id == user_id
    assert result.value.type == TokenType.access
    assert issued.expires_at == clock.now + timedelta(minutes=30)


def test_auth_token_pair_lifetimes(tokens, clock):
    pair = tokens.issue_auth_tokens(uuid4())

    assert pair.access.expires_at == clock.now + timedelta(minutes=30)
    assert pair.refresh.expires_at == clock.now + timedelta(days=30)
    assert pair.access.token != pair.refresh.token


@pytest.mark.parametrize(
    "issued_as,verified_as",
    [
        (TokenType.refresh, TokenType.access),
        (TokenType.access, TokenType.refresh),
        (TokenType.verify_email, TokenType.reset_password),
    ],
)
def test_wrong_type_is_rejected(tokens, issued_as, verified_as):
    issued = tokens.issue(uuid4(), issued_as)

    result = tokens.verify(issued.token, verified_as)

    assert result.is_err()
    assert result.error.code == "TOKEN_TYPE_MISMATCH"


def test_token_valid_until_just_before_expiry(tokens, clock):
    issued = tokens.issue(uuid4(), TokenType.reset_password)

    clock.advance(minutes=9, seconds=59)

    assert tokens.verify(issued.token, TokenType.reset_password).is_ok()


def test_token_rejected_at_expiry(tokens, clock):
    issued = tokens.issue(uuid4(), TokenType.reset_password)

    clock.advance(minutes=10)
    result = tokens.verify(issued.token, TokenType.reset_password)

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"


def test_bad_signature_is_unauthorized(tokens):
    from saas_auth.app.services.token_service import TokenService

    other = TokenService(secret="another-secret", lifetimes=tokens.lifetimes, now=tokens._now)
    issued = other.issue(uuid4(), TokenType.access)

    result = tokens.verify(issued.token, TokenType.access)

    assert result.is_err()
    assert result.error.code == "UNAUTHORIZED"


@pytest.mark.parametrize("token", ["not-a-jwt", "", "a.b.c"])
def test_malformed_token_is_invalid(tokens, token):
    result = tokens.verify(token, TokenType.access)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
