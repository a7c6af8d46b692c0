import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import models  # noqa: F401
from app.db.base_class import Base
from app.db.session import get_db
from app.main import app
from tests.helpers import auth


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def register(client):
    def _register(name="Dra. Ana Souza", email="ana@med1.com.br", password="segredo123", **extra):
        r = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password, **extra},
        )
        assert r.status_code == 201, r.text
        body = r.json()
        return body["user"], auth(body["token"])

    return _register


@pytest.fixture()
def doctor(register):
    return register()


@pytest.fixture()
def other_doctor(register):
    return register(name="Dr. Bruno Lima", email="bruno@med1.com.br")
