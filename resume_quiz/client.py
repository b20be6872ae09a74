import logging
from typing import Optional

from resume_quiz import api_client, llm_client
from resume_quiz.extraction import ExtractionError, extract_resume_text
from resume_quiz.identity import IdentityError, decode_identity_token
from resume_quiz.llm_client import GenerationError
from resume_quiz.models import Identity
from resume_quiz.report import DEFAULT_REPORT_PATH, write_report
from resume_quiz.scoring import display_score, score_color, score_message
from resume_quiz.session import QuizSession, QuizState

logger = logging.getLogger(__name__)


class QuizClient:
    """Top-level controller for one user's quiz workflow.

    Login, upload, generation and reference lookup never raise: on failure
    they leave state as it was and set `error` to a message meant for the
    user. Quiz actions (answer, navigation, submit) raise QuizStateError when
    the quiz is not in a state that allows them.
    """

    def __init__(self):
        self.user: Optional[Identity] = None
        self.resume_text = ""
        self.session = QuizSession()
        self.is_loading = False
        self.error = ""
        self.score_submitted = False

    @property
    def state(self) -> QuizState:
        return self.session.state

    def login(self, token: str) -> bool:
        try:
            self.user = decode_identity_token(token)
        except IdentityError as e:
            logger.warning("Login failed: %s", e)
            self.error = "Login Failed"
            return False
        self.error = ""
        self.reset()
        return True

    def upload_resume(self, data: bytes) -> bool:
        self.error = ""
        try:
            self.resume_text = extract_resume_text(data)
        except ExtractionError as e:
            self.error = str(e)
            self.resume_text = ""
            return False
        return True

    async def generate(self) -> bool:
        if not self.resume_text.strip():
            self.error = "Please upload a resume first"
            return False

        self.is_loading = True
        self.error = ""
        try:
            questions = await llm_client.generate_questions(self.resume_text)
        except GenerationError as e:
            self.error = str(e)
            return False
        finally:
            self.is_loading = False

        self.session.load(questions)
        self.score_submitted = False
        return True

    def select_answer(self, option: int):
        self.session.select_answer(option)

    def next(self):
        self.session.next()

    def previous(self):
        self.session.previous()

    def go_to(self, index: int):
        self.session.go_to(index)

    async def submit(self) -> float:
        """Finish the quiz and report the score to the leaderboard once."""
        score = self.session.submit()
        if self.user and not self.score_submitted:
            self.score_submitted = True
            result = await api_client.submit_score(self.user, score)
            if result and (result.get("new") or result.get("updated")):
                logger.info("New high score for %s: %d%%", self.user.email, display_score(score))
        return score

    @property
    def result_summary(self) -> dict:
        score = self.session.score
        return {
            "score": display_score(score),
            "correct": self.session.correct_count,
            "total": len(self.session.questions),
            "message": score_message(score),
            "color": score_color(score),
        }

    def reset(self):
        self.session.reset()
        self.score_submitted = False

    def download_report(self, path: str = DEFAULT_REPORT_PATH) -> str:
        return write_report(
            path,
            questions=self.session.questions,
            answers=self.session.answers,
            score=self.session.score,
            name=self.user.name if self.user else None,
        )

    async def reference(self, index: Optional[int] = None) -> Optional[str]:
        question = (
            self.session.questions[index] if index is not None
            else self.session.current_question
        )
        if question is None:
            return None
        try:
            return await llm_client.fetch_reference(question)
        except GenerationError as e:
            self.error = str(e)
            return None

    async def leaderboard(self) -> list[dict]:
        return await api_client.fetch_leaderboard()
