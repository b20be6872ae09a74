import pytest

from resume_quiz.scoring import (
    calculate_score,
    display_score,
    score_color,
    score_message,
)


def answers_with_correct(questions, n_correct):
    """Answer the first n_correct questions right and the rest wrong."""
    return {
        i: q.correct_answer if i < n_correct else (q.correct_answer + 1) % 4
        for i, q in enumerate(questions)
    }


def test_score_is_percentage_of_matches(questions):
    correct, score = calculate_score(questions, answers_with_correct(questions, 11))
    assert correct == 11
    assert score == pytest.approx(73.333, abs=0.001)
    assert display_score(score) == 73


def test_nine_of_fifteen(questions):
    correct, score = calculate_score(questions, answers_with_correct(questions, 9))
    assert correct == 9
    assert display_score(score) == 60
    assert score_color(score) == "yellow"
    assert score_message(score) == "Fair performance. Keep learning and improving."


def test_empty_quiz_scores_zero():
    assert calculate_score([], {}) == (0, 0.0)


def test_display_rounds_half_up():
    assert display_score(12.5) == 13
    assert display_score(66.6667) == 67
    assert display_score(0) == 0


@pytest.mark.parametrize("score,message", [
    (100, "Excellent! Outstanding performance!"),
    (90, "Excellent! Outstanding performance!"),
    (89.9, "Great job! You have strong knowledge in this area."),
    (80, "Great job! You have strong knowledge in this area."),
    (70, "Good work! You have solid understanding."),
    (60, "Fair performance. Keep learning and improving."),
    (50, "Below average. Consider reviewing the topics."),
    (49.9, "Needs improvement. Focus on learning the fundamentals."),
    (0, "Needs improvement. Focus on learning the fundamentals."),
])
def test_message_bands(score, message):
    assert score_message(score) == message


@pytest.mark.parametrize("score,color", [
    (100, "green"),
    (80, "green"),
    (79.9, "yellow"),
    (60, "yellow"),
    (59.9, "red"),
    (0, "red"),
])
def test_color_bands(score, color):
    assert score_color(score) == color


def test_message_and_color_bands_differ():
    # 70 is its own message band but shares the yellow colour band with 60
    assert score_message(70) != score_message(60)
    assert score_color(70) == score_color(60)
