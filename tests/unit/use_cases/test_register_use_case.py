import pytest
from sqlalchemy.exc import IntegrityError

from saas_auth.app.use_cases.auth import RegisterUseCase
from saas_auth.domain.entities import CodePurpose, User, UserRole


@pytest.fixture
def use_case(mock_uow, passwords, totp, mailer, templates):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.get_by_username.return_value = None
    return RegisterUseCase(mock_uow, passwords, totp, mailer, templates)


@pytest.mark.asyncio
async def test_successful_registration(use_case, mock_uow, passwords, totp, mailer):
    result = await use_case.execute("New.User@Example.com", "New User", "Password123")

    assert result.is_ok()
    profile = result.value
    assert profile.email == "new.user@example.com"
    assert profile.username == "newuser"
    assert profile.role == UserRole.individual.value
    assert profile.is_email_verified is False

    created: User = mock_uow.users.create.call_args[0][0]
    assert created.password_hash != "Password123"
    assert passwords.verify("Password123", created.password_hash)
    mock_uow.commit.assert_awaited_once()

    # Verification code mailed, valid for email verification only
    to, subject, body = mailer.sent[0]
    assert to == "new.user@example.com"
    code = mailer.last_code(to)
    assert totp.verify(code, created.totp_secret, CodePurpose.email_verification)


@pytest.mark.asyncio
async def test_existing_email(use_case, mock_uow, mailer):
    mock_uow.users.get_by_email.return_value = User(
        email="taken@example.com", username="taken", totp_secret="X"
    )

    result = await use_case.execute("taken@example.com", "Taken", "Password123")

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_awaited()
    assert mailer.sent == []


@pytest.mark.parametrize("password", ["short1", "allletters", "1234567890"])
@pytest.mark.asyncio
async def test_password_policy(use_case, mock_uow, password):
    result = await use_case.execute("x@example.com", "X", password)

    assert result.is_err()
    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_username_collision_at_insert_is_retried(use_case, mock_uow):
    attempts = []

    async def create(user):
        attempts.append(user.username)
        if len(attempts) == 1:
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        return user

    mock_uow.users.create.side_effect = create

    result = await use_case.execute("bob@example.com", "Bob", "Password123")

    assert result.is_ok()
    assert len(attempts) == 2
    mock_uow.rollback.assert_awaited()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_gives_up_after_repeated_conflicts(use_case, mock_uow, mailer):
    mock_uow.users.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("UNIQUE constraint failed")
    )

    result = await use_case.execute("bob@example.com", "Bob", "Password123")

    assert result.is_err()
    assert result.error.code == "REGISTRATION_CONFLICT"
    assert mock_uow.users.create.await_count == 3
    assert mailer.sent == []
