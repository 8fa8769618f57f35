"""
Shared fixtures.

The app is imported with an in-memory database; HTTP tests swap the data
service for FakeDataService through app.dependency_overrides.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import config
from app.deps import get_data_service
from app.services.session import encode_record
from db import Base
from main import app


class FakeDataService:
    """Stand-in for DataService; `error` makes every call raise it."""

    def __init__(self, users=None, campaigns=None, error=None):
        self.users = users if users is not None else []
        self.campaigns = campaigns if campaigns is not None else []
        self.error = error
        self.updates = []
        self.status_updates = []
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def get_users(self):
        self._check("get_users")
        return self.users

    def get_campaigns(self):
        self._check("get_campaigns")
        return self.campaigns

    def get_user_campaigns(self, user_id):
        self._check("get_user_campaigns")
        return [c for c in self.campaigns if c.get("influencerId") == user_id]

    def authenticate_user(self, user_id, password):
        self._check("authenticate_user")
        for u in self.users:
            if u.get("id") == user_id and u.get("password") == password:
                return {k: v for k, v in u.items() if k != "password"}
        return None

    def update_campaign_status(self, campaign_id, influencer_id, new_status,
                               submitted_url=None, url_type=None, feedback=None):
        self._check("update_campaign_status")
        self.status_updates.append({
            "campaignId": campaign_id,
            "influencerId": influencer_id,
            "newStatus": new_status,
            "submittedUrl": submitted_url,
            "urlType": url_type,
            "feedback": feedback,
        })
        for c in self.campaigns:
            if c.get("id") == campaign_id and c.get("influencerId") == influencer_id:
                c["status"] = new_status
                return c
        return None

    def create_update(self, campaign_id, influencer_id, influencer_name, update_type, message):
        self._check("create_update")
        update = {
            "id": str(len(self.updates) + 1),
            "campaignId": campaign_id,
            "influencerId": influencer_id,
            "influencerName": influencer_name,
            "type": update_type,
            "message": message,
        }
        self.updates.insert(0, update)
        return update

    def get_updates(self, limit=10):
        self._check("get_updates")
        return self.updates[:limit]


@pytest.fixture
def fake_data_service():
    service = FakeDataService()
    app.dependency_overrides[get_data_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_data_service, None)


@pytest.fixture
def client(fake_data_service):
    # raise_server_exceptions=False: let the global error view answer
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def sign_in(client):
    """Store a user record in the auth cookie, as a previous login would."""

    def _sign_in(user):
        client.cookies.set(config.AUTH_COOKIE_NAME, encode_record(user))

    return _sign_in


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
