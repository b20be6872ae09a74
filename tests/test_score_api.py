from datetime import datetime, timezone

from sqlmodel import Session, select

from resume_quiz.models import ScoreRecord


def submit(client, score, email="a@x.com", **fields):
    payload = {
        "name": fields.get("name", "Ada"),
        "email": email,
        "picture": fields.get("picture", "https://example.com/ada.png"),
        "identityId": fields.get("identityId", "sub-1"),
        "score": score,
    }
    return client.post("/api/score", json=payload)


def test_missing_email_is_rejected(client):
    response = client.post("/api/score", json={"name": "Ada", "score": 50})
    assert response.status_code == 400
    assert response.json() == {"detail": "Email required"}


def test_empty_email_is_rejected(client):
    response = submit(client, 50, email="")
    assert response.status_code == 400


def test_first_submission_creates_record(client, session):
    response = submit(client, 40)
    assert response.status_code == 200
    assert response.json() == {"success": True, "new": True}

    record = session.get(ScoreRecord, "a@x.com")
    assert record.score == 40
    assert record.name == "Ada"
    assert record.identity_id == "sub-1"


def test_best_score_scenario(client, session):
    assert submit(client, 40).json() == {"success": True, "new": True}
    assert submit(client, 70).json() == {"success": True, "updated": True}
    assert submit(client, 55).json() == {"success": True, "updated": False}

    session.expire_all()
    assert session.get(ScoreRecord, "a@x.com").score == 70


def test_equal_score_is_not_an_update(client):
    submit(client, 60)
    assert submit(client, 60).json() == {"success": True, "updated": False}


def test_higher_score_updates_all_fields(client, session):
    submit(client, 40)
    submit(client, 90, name="Ada L.", picture="https://example.com/new.png", identityId="sub-2")

    session.expire_all()
    record = session.get(ScoreRecord, "a@x.com")
    assert record.score == 90
    assert record.name == "Ada L."
    assert record.picture == "https://example.com/new.png"
    assert record.identity_id == "sub-2"


def test_lower_score_leaves_record_untouched(client, session):
    stamp = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    session.add(ScoreRecord(
        email="a@x.com", name="Ada", picture="p1", identity_id="sub-1",
        score=80, last_updated=stamp,
    ))
    session.commit()

    submit(client, 30, name="Someone Else", picture="p2")

    session.expire_all()
    record = session.get(ScoreRecord, "a@x.com")
    assert record.score == 80
    assert record.name == "Ada"
    assert record.picture == "p1"
    assert record.last_updated == stamp


def test_stored_score_is_monotonic(client, session):
    best = 0
    for score in [10, 50, 20, 50, 75, 0, 74, 100, 99]:
        submit(client, score)
        best = max(best, score)
        session.expire_all()
        assert session.get(ScoreRecord, "a@x.com").score == best


def test_one_record_per_email(client, session):
    submit(client, 10, email="a@x.com")
    submit(client, 20, email="a@x.com")
    submit(client, 30, email="b@x.com")

    records = session.exec(select(ScoreRecord)).all()
    assert sorted(r.email for r in records) == ["a@x.com", "b@x.com"]


def test_higher_score_refreshes_timestamp(client, session):
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    session.add(ScoreRecord(email="a@x.com", score=10, last_updated=stamp))
    session.commit()

    submit(client, 20)

    session.expire_all()
    assert session.get(ScoreRecord, "a@x.com").last_updated > stamp


def seed_elsewhere(engine, score):
    """Commit a record through another session, as a concurrent request would."""
    with Session(engine) as other:
        other.add(ScoreRecord(email="a@x.com", name="Ada", score=score))
        other.commit()


def test_insert_race_falls_back_to_update(client, session, engine, monkeypatch):
    seed_elsewhere(engine, 40)
    # The lookup misses, so the insert collides with the committed row
    monkeypatch.setattr(session, "get", lambda *args, **kwargs: None)

    response = submit(client, 70)
    assert response.status_code == 200
    assert response.json() == {"success": True, "updated": True}

    with Session(engine) as fresh:
        assert fresh.get(ScoreRecord, "a@x.com").score == 70


def test_insert_race_keeps_higher_score(client, session, engine, monkeypatch):
    seed_elsewhere(engine, 90)
    monkeypatch.setattr(session, "get", lambda *args, **kwargs: None)

    assert submit(client, 70).json() == {"success": True, "updated": False}

    with Session(engine) as fresh:
        assert fresh.get(ScoreRecord, "a@x.com").score == 90
