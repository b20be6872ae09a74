import logging
from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from resume_quiz.database import get_session
from resume_quiz.models import ScoreRecord, ScoreRecordRead
from resume_quiz.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[ScoreRecordRead])
def get_leaderboard(session: Session = Depends(get_session)):
    """Get the top scores sorted by score desc, tie-break by earliest update."""
    records = session.exec(
        select(ScoreRecord)
        .order_by(ScoreRecord.score.desc(), ScoreRecord.last_updated.asc())
        .limit(settings.leaderboard_size)
    ).all()

    logger.debug("Leaderboard read returned %d records", len(records))
    return [ScoreRecordRead.from_record(r) for r in records]
