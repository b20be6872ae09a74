from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from resume_quiz.database import MEMORY_URL, create_db_engine, init_db, sqlite_url
from resume_quiz.models import ScoreRecord


def test_sqlite_url_creates_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "scores.db"
    assert sqlite_url(str(path)) == f"sqlite:///{path}"
    assert path.parent.is_dir()


def test_bare_file_name_needs_no_directory():
    assert sqlite_url("scores.db") == "sqlite:///scores.db"


def test_init_db_creates_score_table(tmp_path):
    engine = create_db_engine(sqlite_url(str(tmp_path / "scores.db")))
    init_db(engine)

    inspector = inspect(engine)
    assert "score" in inspector.get_table_names()
    columns = {c["name"] for c in inspector.get_columns("score")}
    assert {"email", "name", "picture", "identity_id", "score", "last_updated"} <= columns
    engine.dispose()


def test_memory_engine_shares_one_database():
    engine = create_db_engine(MEMORY_URL)
    assert isinstance(engine.pool, StaticPool)
    init_db(engine)

    with Session(engine) as first:
        first.add(ScoreRecord(email="a@x.com", score=10))
        first.commit()
    with Session(engine) as second:
        assert second.get(ScoreRecord, "a@x.com").score == 10
    engine.dispose()
