import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from saas_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from saas_auth.app.services.oauth_provider import OAuthIdentity
from saas_auth.context import ServiceContext
from saas_auth.depends import get_unit_of_work
from tests.fixtures.mail import RecordingMailDispatcher
from tests.fixtures.oauth import FakeOAuthProvider


class IntegrationConfig(ApplicationConfig):
    ENVIRONMENT = "test"
    DB_URI = "sqlite+aiosqlite:///./test.db"
    BCRYPT_ROUNDS = 4
    SMTP_HOST = ""


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(IntegrationConfig.DB_URI)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingMailDispatcher()


@pytest.fixture
def oauth():
    return FakeOAuthProvider(
        {
            "google-code": OAuthIdentity(
                provider_id="google-123",
                email="gina@example.com",
                name="Gina",
                verified=True,
            )
        }
    )


@pytest.fixture
def services(engine, mailer, oauth):
    return ServiceContext.build(IntegrationConfig, engine=engine, mailer=mailer, oauth=oauth)


@pytest_asyncio.fixture
async def client(db_session, services):
    from saas_auth.api.app import create_app

    app = create_app(IntegrationConfig, services=services)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
