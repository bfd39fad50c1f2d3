import pytest

from saas_auth.app.use_cases.auth import LoginUseCase
from saas_auth.domain.entities import AuditEvent, TokenType
from tests.fixtures.factories import make_user


@pytest.mark.asyncio
async def test_successful_login(mock_uow, verifier, tokens, passwords):
    user = make_user(passwords, is_active=False)
    mock_uow.users.get_by_email.return_value = user

    result = await LoginUseCase(mock_uow, verifier, tokens).execute(
        "Alice@Example.com", "Password123"
    )

    assert result.is_ok()
    response = result.value
    assert response.user.email == "alice@example.com"
    assert user.is_active is True
    mock_uow.users.get_by_email.assert_awaited_once_with("alice@example.com")
    mock_uow.commit.assert_awaited_once()

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert isinstance(audit, AuditEvent)
    assert audit.action == "login"

    access = tokens.verify(response.tokens.access.token, TokenType.access)
    assert access.is_ok()
    assert access.value.user_id == user.id


@pytest.mark.asyncio
async def test_unknown_email(mock_uow, verifier, tokens):
    mock_uow.users.get_by_email.return_value = None

    result = await LoginUseCase(mock_uow, verifier, tokens).execute(
        "ghost@example.com", "Password123"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_wrong_password(mock_uow, verifier, tokens, passwords):
    mock_uow.users.get_by_email.return_value = make_user(passwords)

    result = await LoginUseCase(mock_uow, verifier, tokens).execute(
        "alice@example.com", "WrongPass999"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_unverified_email_mails_new_code(mock_uow, verifier, tokens, passwords, mailer):
    mock_uow.users.get_by_email.return_value = make_user(passwords, is_email_verified=False)

    result = await LoginUseCase(mock_uow, verifier, tokens).execute(
        "alice@example.com", "Password123"
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_NOT_VERIFIED"
    assert len(mailer.sent) == 1
    assert mailer.sent[0][0] == "alice@example.com"
    assert mailer.sent[0][1] == "Code Verification"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_unverified_with_wrong_password_sends_nothing(
    mock_uow, verifier, tokens, passwords, mailer
):
    mock_uow.users.get_by_email.return_value = make_user(passwords, is_email_verified=False)

    result = await LoginUseCase(mock_uow, verifier, tokens).execute(
        "alice@example.com", "WrongPass999"
    )

    assert result.error.code == "INVALID_CREDENTIALS"
    assert mailer.sent == []


@pytest.mark.asyncio
async def test_suspended_user(mock_uow, verifier, tokens, passwords):
    mock_uow.users.get_by_email.return_value = make_user(passwords, is_suspended=True)

    result = await LoginUseCase(mock_uow, verifier, tokens).execute(
        "alice@example.com", "Password123"
    )

    assert result.is_err()
    assert result.error.code == "USER_SUSPENDED"


@pytest.mark.asyncio
async def test_federated_account_cannot_use_password(mock_uow, verifier, tokens, passwords):
    mock_uow.users.get_by_email.return_value = make_user(passwords, google_id="google-123")

    result = await LoginUseCase(mock_uow, verifier, tokens).execute(
        "alice@example.com", "Password123"
    )

    assert result.is_err()
    assert result.error.code == "AUTHORIZATION_FAILED"
