import os
import shutil
from pathlib import Path

import pytest
from passlib.hash import pbkdf2_sha256

FAMILY_PASSWORD = "H3lloF4mily!"

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ACCESS_PASSWORD_HASH", pbkdf2_sha256.hash(FAMILY_PASSWORD))
os.environ["STORE_BACKEND"] = "json"

from familytree.models.person_model import Marriage, ParentChild, Person, RecordSet  # noqa: E402

SAMPLE_DATA = Path(__file__).resolve().parent.parent / "data" / "sample.json"


def person(pid, generation=0, **fields):
    return Person(id=pid, generation=generation, **fields)


def marriage(a, b, mid=None):
    return Marriage(id=mid or f"m-{a}-{b}", partner_a=a, partner_b=b)


def link(parent, child, lid=None):
    return ParentChild(id=lid or f"pc-{parent}-{child}", parent_id=parent, child_id=child)


@pytest.fixture
def make():
    """Record constructors: make.person / make.marriage / make.link / make.records."""

    class Make:
        pass

    m = Make()
    m.person = person
    m.marriage = marriage
    m.link = link
    m.records = lambda people=(), marriages=(), parent_child=(): RecordSet(
        people=list(people), marriages=list(marriages), parent_child=list(parent_child)
    )
    return m


@pytest.fixture
def collapse_family(make):
    """A+B -> C; C married to D; C+D -> E."""
    return make.records(
        people=[
            make.person("A", 0, first_name="A", gender="M"),
            make.person("B", 0, first_name="B", gender="F"),
            make.person("C", 1, first_name="C", gender="M"),
            make.person("D", 1, first_name="D", gender="F"),
            make.person("E", 2, first_name="E"),
        ],
        marriages=[make.marriage("A", "B"), make.marriage("C", "D")],
        parent_child=[
            make.link("A", "C"),
            make.link("B", "C"),
            make.link("C", "E"),
            make.link("D", "E"),
        ],
    )


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "family.json"
    shutil.copy(SAMPLE_DATA, path)
    return path


@pytest.fixture
def client(data_file, monkeypatch):
    from fastapi.testclient import TestClient
    from familytree.core.config import settings
    from familytree.main import app

    monkeypatch.setattr(settings, "STORE_BACKEND", "json")
    monkeypatch.setattr(settings, "DATA_FILE", str(data_file))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    res = client.post("/api/v1/auth/login", json={"password": FAMILY_PASSWORD})
    assert res.status_code == 200
    return {"Authorization": f"Bearer {res.json()['access_token']}"}
