"""
Shared fixtures: an in-memory MongoDB (mongomock), a scripted LLM,
a recording media store and a TestClient wired to all three.
"""
import os
import sys

# Keep tests away from real keys and databases
os.environ.setdefault("GROQ_API_KEY", "")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:1")

import mongomock
import pytest
from fastapi.testclient import TestClient

from careerconnect.db import mongodb
from careerconnect.main import app
from careerconnect.services.code_runner import CodeRunner, get_code_runner
from careerconnect.services.groq_client import GroqClient, get_groq_client
from careerconnect.services.media_storage import MediaStorage, MediaUploadError, get_media_storage


class FakeLLM(GroqClient):
    """GroqClient that answers from a queue instead of calling the API."""

    def __init__(self, api_key="test-key"):
        super().__init__(api_key=api_key)
        self.replies = []
        self.error = None
        self.calls = []

    def complete(self, messages, model=None, json_mode=False):
        self.calls.append({"messages": messages, "model": model or self.model, "json_mode": json_mode})
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""


class FakeStorage(MediaStorage):
    """MediaStorage that records uploads instead of sending them to Cloudinary."""

    def __init__(self):
        super().__init__()
        self.uploads = []
        self.fail = False

    def _upload(self, file, **options):
        if self.fail:
            raise MediaUploadError("upload rejected")
        self.uploads.append(options)
        return f"https://res.cloudinary.com/demo/{options['folder']}/{len(self.uploads)}"


@pytest.fixture
def db(monkeypatch):
    client = mongomock.MongoClient()
    database = client["careerconnect_test"]
    monkeypatch.setattr(mongodb, "_client", client)
    monkeypatch.setattr(mongodb, "_db", database)
    mongodb.init_mongo_indexes()
    return database


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def runner(tmp_path):
    return CodeRunner(temp_dir=str(tmp_path / "runs"), timeout=10, python_command=sys.executable)


@pytest.fixture
def client(db, llm, storage, runner):
    app.dependency_overrides[get_groq_client] = lambda: llm
    app.dependency_overrides[get_media_storage] = lambda: storage
    app.dependency_overrides[get_code_runner] = lambda: runner
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_student(client):
    def _make(username="alice", email=None, **fields):
        payload = {
            "name": fields.pop("name", username.title()),
            "email": email or f"{username}@example.com",
            "phone": "9876543210",
            "department": fields.pop("department", "CSE"),
            "username": username,
            "password": fields.pop("password", "secret123"),
            **fields,
        }
        response = client.post("/register", json=payload)
        assert response.status_code == 201, response.text
        return payload
    return _make
