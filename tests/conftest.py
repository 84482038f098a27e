import base64
from collections.abc import Generator

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import shield_api.models  # noqa: F401
from shield_api.core.config import get_settings
from shield_api.core.security import get_private_key
from shield_api.db.session import get_db
from shield_api.main import app
from shield_api.models.account import Account
from shield_api.models.base import Base
from shield_api.models.enums import AccountState
from shield_api.services.geo import _open_reader
from shield_api.services.passwords import hash_password

DEFAULT_PASSWORD = "StrongPassw0rd!"


def _clear_caches() -> None:
    get_settings.cache_clear()
    get_private_key.cache_clear()
    _open_reader.cache_clear()


def b64(value: str | bytes) -> str:
    raw = value.encode("utf-8") if isinstance(value, str) else value
    return base64.b64encode(raw).decode("ascii")


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(autouse=True)
def shield_env(monkeypatch: pytest.MonkeyPatch, tmp_path, rsa_key) -> Generator[None, None, None]:
    key_path = tmp_path / "private-key.pem"
    key_path.write_bytes(
        rsa_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    monkeypatch.setenv("SDK_PRIVATE_KEY_PATH", str(key_path))
    monkeypatch.setenv("SDK_GEOIP_DATABASE_PATH", str(tmp_path / "missing.mmdb"))
    monkeypatch.setenv("SDK_PASSWORD_HASH_ROUNDS", "4")
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture
def session_factory() -> Generator[sessionmaker, None, None]:
    sqlite_engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=sqlite_engine)
    yield sessionmaker(
        bind=sqlite_engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        class_=Session,
    )
    Base.metadata.drop_all(bind=sqlite_engine)
    sqlite_engine.dispose()


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def create_account(session_factory):
    """写入一个账号并返回其 uid。"""

    def _create(
        name: str | None = "traveler",
        email: str | None = "traveler@example.com",
        password: str | None = DEFAULT_PASSWORD,
        state: AccountState = AccountState.ACTIVE,
        mobile: str | None = None,
    ) -> int:
        with session_factory() as session:
            account = Account(
                name=name,
                email=email,
                mobile=mobile,
                password=hash_password(password) if password is not None else None,
                state=int(state),
            )
            session.add(account)
            session.commit()
            return account.uid

    return _create


@pytest.fixture
def api_client(session_factory) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
