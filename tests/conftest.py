"""Shared fixtures. The environment is set before flatshare is imported."""

import os
import tempfile

_data_dir = tempfile.mkdtemp()
os.environ["FLATSHARE_DATA_DIR"] = _data_dir
os.environ["FLATSHARE_DATABASE_URL"] = f"sqlite:///{os.path.join(_data_dir, 'test.db')}"
os.environ["FLATSHARE_JWT_SECRET"] = "test-secret-with-at-least-32-bytes!!"
os.environ["FLATSHARE_BCRYPT_ROUNDS"] = "4"
os.environ["FLATSHARE_LOCALE"] = "es"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from flatshare.database import engine  # noqa: E402
from flatshare.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


def register(client, email: str, name: str = "Tester", password: str = "secret123") -> dict:
    """Register a user; returns {"id", "email", "headers"}."""
    r = client.post("/auth/register", json={"email": email, "password": password, "name": name})
    assert r.status_code == 201, r.text
    data = r.json()
    return {
        "id": data["user"]["id"],
        "email": data["user"]["email"],
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }


@pytest.fixture
def owner(client):
    return register(client, "owner@example.com", "Owner")


@pytest.fixture
def member(client):
    return register(client, "member@example.com", "Member")


@pytest.fixture
def outsider(client):
    return register(client, "outsider@example.com", "Outsider")


def create_group(client, user: dict, name: str = "Flat1") -> dict:
    r = client.post("/groups", json={"name": name}, headers=user["headers"])
    assert r.status_code == 201, r.text
    return r.json()


def join_group(client, group_id: str, owner: dict, user: dict) -> None:
    """Owner invites user, user accepts."""
    r = client.post(
        "/groups/invitations",
        json={"groupId": group_id, "inviteeEmail": user["email"]},
        headers=owner["headers"],
    )
    assert r.status_code == 201, r.text
    r = client.post(f"/groups/invitations/{r.json()['id']}/accept", headers=user["headers"])
    assert r.status_code == 200, r.text


@pytest.fixture
def flat(client, owner, member):
    """A group owned by ``owner`` with ``member`` joined."""
    group = create_group(client, owner)
    join_group(client, group["id"], owner, member)
    return group
