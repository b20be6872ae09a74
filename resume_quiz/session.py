from enum import Enum
from typing import Optional
from resume_quiz.models import Question
from resume_quiz.scoring import calculate_score


class QuizState(str, Enum):
    NO_QUESTIONS = "no_questions"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class QuizStateError(RuntimeError):
    """Raised when an action is not allowed in the current quiz state."""


class QuizSession:
    """Local state of one quiz: questions, pointer, answers and result."""

    def __init__(self):
        self.questions: list[Question] = []
        self.current_index = 0
        self.answers: dict[int, int] = {}
        self.score = 0.0
        self.correct_count = 0
        self.show_results = False

    @property
    def state(self) -> QuizState:
        if not self.questions:
            return QuizState.NO_QUESTIONS
        if self.show_results:
            return QuizState.COMPLETED
        return QuizState.IN_PROGRESS

    @property
    def current_question(self) -> Optional[Question]:
        if not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def can_submit(self) -> bool:
        return (
            self.state == QuizState.IN_PROGRESS
            and self.answered_count == len(self.questions)
        )

    def load(self, questions: list[Question]):
        """Replace the question set and start over."""
        self.reset()
        self.questions = list(questions)

    def _require_in_progress(self):
        if self.state != QuizState.IN_PROGRESS:
            raise QuizStateError(f"Quiz is {self.state.value}")

    def select_answer(self, option: int):
        """Record (or overwrite) the answer for the current question."""
        self._require_in_progress()
        if not 0 <= option < len(self.current_question.options):
            raise QuizStateError(f"Option {option} out of range")
        self.answers[self.current_index] = option

    def go_to(self, index: int):
        self._require_in_progress()
        self.current_index = max(0, min(index, len(self.questions) - 1))

    def next(self):
        self.go_to(self.current_index + 1)

    def previous(self):
        self.go_to(self.current_index - 1)

    def submit(self) -> float:
        if not self.can_submit:
            raise QuizStateError(
                f"Answer all questions first ({self.answered_count}/{len(self.questions)})"
            )
        self.correct_count, self.score = calculate_score(self.questions, self.answers)
        self.show_results = True
        return self.score

    def reset(self):
        self.questions = []
        self.current_index = 0
        self.answers = {}
        self.score = 0.0
        self.correct_count = 0
        self.show_results = False
