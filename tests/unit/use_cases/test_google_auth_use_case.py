import pytest
from sqlalchemy.exc import IntegrityError

from saas_auth.app.services.oauth_provider import OAuthIdentity
from saas_auth.app.use_cases.auth import GoogleAuthUseCase
from tests.fixtures.factories import make_user
from tests.fixtures.oauth import FakeOAuthProvider

IDENTITY = OAuthIdentity(
    provider_id="google-123",
    email="gina@example.com",
    name="Gina",
    verified=True,
    picture="http://img.test/gina.png",
)


@pytest.fixture
def oauth():
    return FakeOAuthProvider({"good-code": IDENTITY})


@pytest.fixture
def use_case(mock_uow, oauth, verifier, tokens, totp):
    mock_uow.users.get_by_username.return_value = None
    return GoogleAuthUseCase(mock_uow, oauth, verifier, tokens, totp)


@pytest.mark.asyncio
async def test_missing_code(use_case):
    result = await use_case.execute("")

    assert result.error.code == "CODE_REQUIRED"


@pytest.mark.asyncio
async def test_exchange_failure(use_case):
    result = await use_case.execute("bad-code")

    assert result.error.code == "OAUTH_EXCHANGE_FAILED"


@pytest.mark.asyncio
async def test_first_sign_in_creates_federated_user(use_case, mock_uow):
    mock_uow.users.get_by_email.return_value = None

    result = await use_case.execute("good-code")

    assert result.is_ok()
    created = mock_uow.users.create.call_args[0][0]
    assert created.google_id == "google-123"
    assert created.password_hash is None
    assert created.is_email_verified is True
    assert created.avatar_url == "http://img.test/gina.png"
    assert result.value.user.username == "gina"


@pytest.mark.asyncio
async def test_unverified_provider_email_is_refused(use_case, mock_uow, oauth, mailer):
    oauth.identities["unverified"] = OAuthIdentity(
        provider_id="google-9", email="uv@example.com", name="UV", verified=False
    )
    mock_uow.users.get_by_email.return_value = None

    result = await use_case.execute("unverified")

    assert result.error.code == "EMAIL_NOT_VERIFIED"
    # Account is kept so a later verification can succeed
    mock_uow.users.create.assert_awaited_once()
    assert mailer.sent[0][0] == "uv@example.com"


@pytest.mark.asyncio
async def test_returning_federated_user(use_case, mock_uow):
    mock_uow.users.get_by_email.return_value = make_user(
        email="gina@example.com", google_id="google-123"
    )

    result = await use_case.execute("good-code")

    assert result.is_ok()
    mock_uow.users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_password_account_is_not_linked(use_case, mock_uow, passwords):
    user = make_user(passwords, email="gina@example.com")
    mock_uow.users.get_by_email.return_value = user

    result = await use_case.execute("good-code")

    assert result.error.code == "AUTHORIZATION_FAILED"
    assert user.google_id is None


@pytest.mark.asyncio
async def test_returning_user_with_changed_google_email(use_case, mock_uow, oauth):
    oauth.identities["renamed"] = OAuthIdentity(
        provider_id="google-123", email="gina.new@example.com", name="Gina", verified=True
    )
    stored = make_user(email="gina@example.com", google_id="google-123")
    mock_uow.users.get_by_google_id.return_value = stored

    result = await use_case.execute("renamed")

    assert result.is_ok()
    assert result.value.user.id == str(stored.id)
    mock_uow.users.get_by_google_id.assert_awaited_once_with("google-123")
    mock_uow.users.get_by_email.assert_not_awaited()
    mock_uow.users.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_concurrent_first_sign_in_conflict(use_case, mock_uow):
    mock_uow.users.get_by_email.return_value = None
    mock_uow.users.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("UNIQUE constraint failed: users.google_id")
    )

    result = await use_case.execute("good-code")

    assert result.error.code == "REGISTRATION_CONFLICT"
    mock_uow.rollback.assert_awaited_once()
    mock_uow.commit.assert_not_awaited()
