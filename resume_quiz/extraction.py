"""Resume text extraction.

Text is pulled out of an uploaded PDF with pypdf. When that yields too little
(scanned or oddly encoded files), a byte-level heuristic scrapes whatever
readable runs it can find. The result is then enriched with labelled
technical sections so the question generator focuses on technical content.
"""
import io
import logging
import os
import re

import yaml
from pypdf import PdfReader

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50
MAX_TEXT_LENGTH = 3000

UNREADABLE_MESSAGE = "Unable to extract readable text from this PDF. Please try a different PDF file."
READ_FAILED_MESSAGE = "Failed to read the PDF file. Please try a different PDF file."
NOT_PDF_MESSAGE = "Please upload a PDF file. Only PDF files are supported."

# Load section keyword table from YAML
_sections_file = os.path.join(os.path.dirname(__file__), "sections.yaml")
with open(_sections_file, "r") as f:
    SECTIONS: dict = yaml.safe_load(f)["sections"]

_LETTER = re.compile(r"[a-zA-Z]")
_DISALLOWED = re.compile(r"[^\w\s.,!?-]", re.ASCII)


class ExtractionError(ValueError):
    """Raised when no usable text can be recovered from an upload."""


class NotPdfError(ExtractionError):
    pass


def is_pdf(data: bytes) -> bool:
    return data.lstrip()[:5] == b"%PDF-"


def clean_text(text: str) -> str:
    text = re.sub(r"\s+", " ", text)
    text = _DISALLOWED.sub(" ", text)
    return text.strip()[:MAX_TEXT_LENGTH]


def extract_with_pypdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages = []
    for page in reader.pages:
        text = page.extract_text()
        if text:
            pages.append(text)
    return "\n".join(pages)


def extract_heuristic(data: bytes) -> str:
    """Scrape readable text straight from the raw bytes.

    Three independent candidates are built and the longest one wins:
    parenthesised string literals, printable blocks between control
    characters, and plain alphabetic words.
    """
    raw = data.decode("utf-8", errors="replace")

    in_parens = " ".join(
        s for s in re.findall(r"\(([^)]+)\)", raw)
        if len(s) > 3 and _LETTER.search(s)
    )

    blocks = []
    for block in re.split(r"[\x00-\x1f\x7f-\x9f]", raw):
        if len(block) > 10 and _LETTER.search(block):
            block = _DISALLOWED.sub(" ", block).strip()
            if len(block) > 5:
                blocks.append(block)
    text_blocks = " ".join(blocks)

    words = " ".join(w for w in re.findall(r"[a-zA-Z]+", raw) if len(w) > 2)

    return max([in_parens, text_blocks, words], key=len)


def _find_entries(text: str, section: dict) -> list[str]:
    strip = re.compile(section["strip"], re.IGNORECASE)
    entries = []
    for pattern in section["patterns"]:
        for match in re.finditer(pattern, text, re.IGNORECASE):
            entry = strip.sub("", match.group(0), count=1)
            if "split" in section:
                entries.extend(
                    s.strip() for s in re.split(section["split"], entry)
                    if len(s.strip()) > 1
                )
            else:
                entries.append(entry)

    if "technical" in section:
        technical = re.compile(section["technical"], re.IGNORECASE)
        entries = [e for e in entries if technical.search(e)]
    return entries


def structure_resume_text(text: str) -> str:
    """Append labelled technical sections found in the text."""
    structured = text
    for name, section in SECTIONS.items():
        entries = _find_entries(text, section)
        if entries:
            logger.debug("Found %d %s entries", len(entries), name)
            structured += f"\n\n{section['label']}: {section['joiner'].join(entries)}"
    return structured


def extract_resume_text(data: bytes) -> str:
    """Return structured resume text for a PDF upload.

    Raises NotPdfError for non-PDF uploads and ExtractionError when fewer
    than MIN_TEXT_LENGTH characters of readable text are recovered.
    """
    if not is_pdf(data):
        raise NotPdfError(NOT_PDF_MESSAGE)

    text = ""
    read_failed = False
    try:
        text = clean_text(extract_with_pypdf(data))
    except Exception as e:
        logger.warning("pypdf could not read upload: %s", e)
        read_failed = True

    if len(text) <= MIN_TEXT_LENGTH:
        logger.info("Falling back to heuristic extraction (%d chars from pypdf)", len(text))
        text = clean_text(extract_heuristic(data))

    if len(text) <= MIN_TEXT_LENGTH:
        raise ExtractionError(READ_FAILED_MESSAGE if read_failed else UNREADABLE_MESSAGE)

    return structure_resume_text(text)
