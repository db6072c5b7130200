import os

# Keep the app's own engine off the developer database
os.environ.setdefault("DATABASE_URL_LOCAL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app

API = "/api/v1"


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_question(client):
    def _make(text="Do you feel tired?", question_type="true-false", options=None, category="symptoms"):
        if options is None:
            options = [
                {"text": "True", "score": {"A": 5, "B": 2}},
                {"text": "False", "score": {"A": 0, "B": 0}},
            ]
        resp = client.post(
            f"{API}/questions",
            json={"text": text, "type": question_type, "options": options, "category": category},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make
