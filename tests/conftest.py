import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from config.database import get_database
from main import create_app


class FakeChatDatabase:
    """In-memory stand-in for ChatDatabase."""

    def __init__(self, usernames=()):
        self.users = [{'username': username} for username in usernames]
        self.messages = []
        self.fail = False
        self.closed = False

    def close(self):
        self.closed = True

    async def count_users(self, username):
        if self.fail:
            raise PyMongoError("lookup failed")
        return len([user for user in self.users if user['username'] == username])

    async def insert_message(self, message):
        if self.fail:
            raise PyMongoError("insert failed")
        self.messages.append(dict(message))

    async def find_messages(self):
        if self.fail:
            raise PyMongoError("query failed")
        return sorted(self.messages, key=lambda message: message['sent_at'])


@pytest.fixture
def fake_db():
    return FakeChatDatabase(usernames=["alice", "bob"])


@pytest.fixture
def client(fake_db):
    app = create_app()
    app.dependency_overrides[get_database] = lambda: fake_db
    # Not entered as a context manager, so the lifespan never dials MongoDB
    return TestClient(app)
