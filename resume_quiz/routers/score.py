import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
from resume_quiz.database import get_session
from resume_quiz.models import ScoreRecord, ScoreSubmit, ScoreResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/score", tags=["score"])


@router.post("", response_model=ScoreResponse, response_model_exclude_none=True)
def submit_score(data: ScoreSubmit, session: Session = Depends(get_session)):
    """Record a score, keeping only the best one per email."""
    if not data.email:
        raise HTTPException(status_code=400, detail="Email required")

    existing = session.get(ScoreRecord, data.email)
    if not existing:
        session.add(ScoreRecord(
            email=data.email,
            name=data.name,
            picture=data.picture,
            identity_id=data.identityId,
            score=data.score,
        ))
        try:
            session.commit()
            logger.info("New score %d for %s", data.score, data.email)
            return ScoreResponse(success=True, new=True)
        except IntegrityError:
            # Lost an insert race for the same email; fall through to the update
            session.rollback()

    # Single conditional write so a lower score can never overwrite a higher one
    result = session.execute(
        update(ScoreRecord)
        .where(ScoreRecord.email == data.email, ScoreRecord.score < data.score)
        .values(
            score=data.score,
            name=data.name,
            picture=data.picture,
            identity_id=data.identityId,
            last_updated=datetime.now(timezone.utc),
        )
    )
    session.commit()

    updated = result.rowcount == 1
    if updated:
        logger.info("Updated best score for %s to %d", data.email, data.score)
    else:
        logger.info("Ignored score %d for %s (not above best)", data.score, data.email)
    return ScoreResponse(success=True, updated=updated)
