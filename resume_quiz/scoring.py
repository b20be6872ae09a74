import math
from resume_quiz.models import Question

# Message bands, checked top down (percentage threshold, message)
SCORE_MESSAGES = [
    (90, "Excellent! Outstanding performance!"),
    (80, "Great job! You have strong knowledge in this area."),
    (70, "Good work! You have solid understanding."),
    (60, "Fair performance. Keep learning and improving."),
    (50, "Below average. Consider reviewing the topics."),
]
FALLBACK_MESSAGE = "Needs improvement. Focus on learning the fundamentals."

# Colour bands are coarser than the message bands
SCORE_COLORS = [
    (80, "green"),
    (60, "yellow"),
]
FALLBACK_COLOR = "red"


def count_correct(questions: list[Question], answers: dict[int, int]) -> int:
    return sum(
        1 for i, q in enumerate(questions)
        if answers.get(i) == q.correct_answer
    )


def calculate_score(
    questions: list[Question], answers: dict[int, int]
) -> tuple[int, float]:
    """
    Score a completed quiz.
    Returns (correct_count, percentage).
    """
    if not questions:
        return 0, 0.0
    correct = count_correct(questions, answers)
    return correct, 100 * correct / len(questions)


def display_score(score: float) -> int:
    """Round half up, so 12.5 shows as 13."""
    return int(math.floor(score + 0.5))


def score_message(score: float) -> str:
    for threshold, message in SCORE_MESSAGES:
        if score >= threshold:
            return message
    return FALLBACK_MESSAGE


def score_color(score: float) -> str:
    for threshold, color in SCORE_COLORS:
        if score >= threshold:
            return color
    return FALLBACK_COLOR
