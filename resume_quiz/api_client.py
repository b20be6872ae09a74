import logging
from typing import Optional
import httpx
from resume_quiz.config import get_settings
from resume_quiz.models import Identity
from resume_quiz.scoring import display_score

settings = get_settings()
logger = logging.getLogger(__name__)


async def submit_score(identity: Identity, score: float) -> Optional[dict]:
    """POST a finished quiz score. Failures are logged and ignored."""
    payload = {
        "name": identity.name,
        "email": identity.email,
        "picture": identity.picture,
        "identityId": identity.sub,
        "score": display_score(score),
    }
    try:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
            response = await client.post(f"{settings.service_url}/api/score", json=payload)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Score submission for %s failed: %s", identity.email, e)
        return None


async def fetch_leaderboard() -> list[dict]:
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        response = await client.get(f"{settings.service_url}/api/leaderboard")
        response.raise_for_status()
        return response.json()
