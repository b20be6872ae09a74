import os
import tempfile

# Point the service at a throwaway database before any settings are loaded
os.environ.setdefault("DB_PATH", os.path.join(tempfile.mkdtemp(), "test.db"))

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from resume_quiz.database import MEMORY_URL, create_db_engine, get_session, init_db
from resume_quiz.main import app
from resume_quiz.models import Question


@pytest.fixture
def engine():
    engine = create_db_engine(MEMORY_URL)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session):
    def override_session():
        return session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_question(n: int, correct: int = 0, difficulty: str = "easy") -> Question:
    return Question(
        question=f"Question {n}: which option is right?",
        options=[f"Option {n}-{i}" for i in range(4)],
        correct_answer=correct,
        difficulty=difficulty,
        explanation=f"Option {n}-{correct} is right.",
    )


@pytest.fixture
def questions() -> list[Question]:
    """15 questions, 8 easy and 7 medium, with rotating correct answers."""
    return [
        make_question(i, correct=i % 4, difficulty="easy" if i < 8 else "medium")
        for i in range(15)
    ]


@pytest.fixture
def mock_http(monkeypatch):
    """Route every httpx.AsyncClient created by a module through a handler."""
    real_client = httpx.AsyncClient

    def install(module, handler):
        def factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)
        monkeypatch.setattr(module.httpx, "AsyncClient", factory)

    return install
