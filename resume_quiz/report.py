import io
from datetime import date
from typing import Optional
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas
from resume_quiz.models import Question
from resume_quiz.scoring import count_correct, display_score

ACCENT = colors.HexColor("#f59e42")
TEXT = colors.HexColor("#222222")
MUTED = colors.HexColor("#888888")
CARD = colors.Color(247 / 255, 247 / 255, 247 / 255)
CORRECT = colors.HexColor("#388e3c")
WRONG = colors.HexColor("#d32f2f")

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN_TOP = 60
MARGIN_BOTTOM = 60
# Card plus the divider drawn 15pt below it
MAX_CARD_HEIGHT = PAGE_HEIGHT - MARGIN_TOP - MARGIN_BOTTOM - 15
MAX_OPTION_LINES = 3

DEFAULT_REPORT_PATH = "quiz-report.pdf"


class NumberedCanvas(canvas.Canvas):
    """Canvas that stamps "Page i of N" once the page count is known."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_page_number(page_count)
            super().showPage()
        super().save()

    def _draw_page_number(self, page_count: int):
        self.setFont("Helvetica", 10)
        self.setFillColor(MUTED)
        self.drawRightString(
            PAGE_WIDTH - 40, 22, f"Page {self._pageNumber} of {page_count}"
        )


def _y(top: float) -> float:
    """Convert a distance from the top edge to a reportlab y coordinate."""
    return PAGE_HEIGHT - top


def _draw_cover(pdf: canvas.Canvas, name: str, report_date: date, score: float, correct: int, total: int):
    center = PAGE_WIDTH / 2
    pdf.setFont("Helvetica-Bold", 28)
    pdf.setFillColor(ACCENT)
    pdf.drawCentredString(center, _y(120), "Resume Interview Quiz Report")

    pdf.setFont("Helvetica-Bold", 16)
    pdf.setFillColor(TEXT)
    pdf.drawCentredString(center, _y(180), f"Name: {name}")
    pdf.drawCentredString(center, _y(210), f"Date: {report_date.strftime('%d/%m/%Y')}")

    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawCentredString(center, _y(240), f"Score: {display_score(score)}%")
    pdf.drawCentredString(center, _y(260), f"Correct Answers: {correct} / {total}")

    pdf.setFont("Helvetica", 12)
    pdf.setFillColor(MUTED)
    pdf.drawCentredString(center, _y(300), "Powered by Resume Interview Quiz")
    pdf.showPage()


def option_fill(index: int, correct_answer: int, answer: Optional[int]) -> Optional[colors.Color]:
    """Green for the right option, red for a wrong pick, None otherwise."""
    if index == correct_answer:
        return CORRECT
    if index == answer:
        return WRONG
    return None


def _clip(lines: list[str], keep: int) -> list[str]:
    if len(lines) <= keep:
        return lines
    return lines[:keep - 1] + [lines[keep - 1] + " ..."]


def _card_height(prompt: list, options: list, explanation: list) -> float:
    return (
        30 + 17 * len(prompt)
        + sum(16 * len(lines) + 6 for lines in options)
        + 10 + 13 * len(explanation) + 10
    )


def _question_layout(index: int, question: Question) -> dict:
    text_width = PAGE_WIDTH - 160
    prompt_lines = simpleSplit(question.question, "Helvetica-Bold", 14, text_width)
    option_lines = [
        simpleSplit(f"{chr(65 + i)}. {opt}", "Helvetica-Bold", 13, text_width)
        for i, opt in enumerate(question.options)
    ]
    explanation_lines = simpleSplit(
        f"Explanation: {question.explanation}", "Helvetica-Oblique", 12, PAGE_WIDTH - 120
    )

    # A card never spans pages: shorten options, then explanation, then prompt
    height = _card_height(prompt_lines, option_lines, explanation_lines)
    if height > MAX_CARD_HEIGHT:
        option_lines = [_clip(lines, MAX_OPTION_LINES) for lines in option_lines]
        height = _card_height(prompt_lines, option_lines, explanation_lines)
    if height > MAX_CARD_HEIGHT:
        spare = (MAX_CARD_HEIGHT - height) // 13 + len(explanation_lines)
        explanation_lines = _clip(explanation_lines, max(int(spare), 1))
        height = _card_height(prompt_lines, option_lines, explanation_lines)
    if height > MAX_CARD_HEIGHT:
        spare = (MAX_CARD_HEIGHT - height) // 17 + len(prompt_lines)
        prompt_lines = _clip(prompt_lines, max(int(spare), 1))
        height = _card_height(prompt_lines, option_lines, explanation_lines)

    return {
        "label": f"Q{index + 1}:",
        "prompt": prompt_lines,
        "options": option_lines,
        "explanation": explanation_lines,
        "height": height,
    }


def _draw_question(pdf: canvas.Canvas, top: float, layout: dict, question: Question, answer: Optional[int]) -> float:
    """Draw one question card starting at `top`; returns the top of the next card."""
    pdf.setFillColor(CARD)
    pdf.roundRect(40, _y(top + layout["height"]), PAGE_WIDTH - 80, layout["height"], 16, stroke=0, fill=1)

    pdf.setFont("Helvetica-Bold", 18)
    pdf.setFillColor(ACCENT)
    pdf.drawString(55, _y(top + 30), layout["label"])

    pdf.setFont("Helvetica-Bold", 14)
    pdf.setFillColor(TEXT)
    line_top = top + 30
    for line in layout["prompt"]:
        pdf.drawString(110, _y(line_top), line)
        line_top += 17

    opt_top = line_top + 8
    for i, lines in enumerate(layout["options"]):
        row_height = 16 * len(lines) + 6
        highlight = option_fill(i, question.correct_answer, answer)
        if highlight is not None:
            pdf.setFillColor(highlight)
            pdf.roundRect(60, _y(opt_top + row_height - 13), PAGE_WIDTH - 140, row_height, 8, stroke=0, fill=1)
            pdf.setFont("Helvetica-Bold", 13)
            pdf.setFillColor(colors.white)
        else:
            pdf.setFont("Helvetica", 13)
            pdf.setFillColor(TEXT)

        text_top = opt_top
        for line in lines:
            pdf.drawString(70, _y(text_top), line)
            text_top += 16
        opt_top += row_height

    pdf.setFont("Helvetica-Oblique", 12)
    pdf.setFillColor(MUTED)
    line_top = opt_top + 10
    for line in layout["explanation"]:
        pdf.drawString(70, _y(line_top), line)
        line_top += 13

    divider = top + layout["height"] + 15
    pdf.setStrokeColor(ACCENT)
    pdf.setLineWidth(1.2)
    pdf.line(60, _y(divider), PAGE_WIDTH - 60, _y(divider))
    return divider + 30


def build_report(
    questions: list[Question],
    answers: dict[int, int],
    score: float,
    name: Optional[str] = None,
    report_date: Optional[date] = None,
) -> bytes:
    """Render the quiz report PDF: a cover page followed by one card per question."""
    buffer = io.BytesIO()
    pdf = NumberedCanvas(buffer, pagesize=A4)
    pdf.setTitle("Resume Interview Quiz Report")

    _draw_cover(
        pdf,
        name or "Anonymous",
        report_date or date.today(),
        score,
        count_correct(questions, answers),
        len(questions),
    )

    top = MARGIN_TOP
    for i, question in enumerate(questions):
        layout = _question_layout(i, question)
        if top > MARGIN_TOP and top + layout["height"] > PAGE_HEIGHT - MARGIN_BOTTOM:
            pdf.showPage()
            top = MARGIN_TOP
        top = _draw_question(pdf, top, layout, question, answers.get(i))

    if questions:
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def write_report(path: str = DEFAULT_REPORT_PATH, **kwargs) -> str:
    with open(path, "wb") as f:
        f.write(build_report(**kwargs))
    return path
