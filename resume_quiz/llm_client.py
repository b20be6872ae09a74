import json
import logging
import re
import httpx
from pydantic import ValidationError
from resume_quiz.config import get_settings
from resume_quiz.models import Question

settings = get_settings()
logger = logging.getLogger(__name__)

RESUME_CHARS = 2500

QUESTIONS_PROMPT_TEMPLATE = """Analyze this structured resume content and generate 15 TECHNICAL multiple choice interview questions with difficulty levels from EASY to MEDIUM, tailored to the candidate's technical background: "{resume}"

Generate ONLY TECHNICAL questions focusing on:
1. Programming languages and frameworks named in their skills
2. The technologies, algorithms and technical challenges in their projects
3. Databases, APIs, cloud services, version control and testing tools they have used
4. Software architecture, design patterns, algorithms and data structures related to their experience
5. Technical knowledge from their certifications

DIFFICULTY DISTRIBUTION:
- 8 EASY questions: basic concepts, fundamentals, syntax, common patterns
- 7 MEDIUM questions: intermediate concepts, practical applications, problem-solving scenarios

Do not ask about soft skills, teamwork, company culture, non-technical achievements, general education or personal background.

Format the response as a JSON array with this exact structure:
[
  {{
    "question": "Technical question about a specific technology or concept",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 0,
    "difficulty": "easy",
    "explanation": "Technical explanation referencing their resume"
  }}
]

Requirements:
- Exactly 15 questions in total
- All 4 options must be technically plausible, only one correct
- correctAnswer is the index (0-3) of the correct option
- difficulty is "easy" or "medium"
- Return only valid JSON without any additional text"""

REFERENCE_PROMPT_TEMPLATE = """Explain and summarize the following technical topic for an interview candidate. Provide a concise, clear, and practical explanation with examples if possible.

Topic: {topic}"""


class GenerationError(RuntimeError):
    """Raised when the language model call or its output is unusable."""


def _extract_json_array(text: str) -> list:
    """Parse the first JSON array literal found in the model output."""
    match = re.search(r"\[[\s\S]*\]", text)
    if not match:
        raise ValueError(f"No JSON array in LLM response: {text[:200]}...")
    data = json.loads(match.group(0))
    if not isinstance(data, list):
        raise ValueError("Top-level structure must be a JSON array")
    return data


def parse_questions(text: str) -> list[Question]:
    return [Question.model_validate(item) for item in _extract_json_array(text)]


async def _generate_content(prompt: str) -> str:
    """Send a single prompt to Gemini and return the concatenated text parts."""
    if not settings.gemini_api_key:
        raise GenerationError("API key not configured. Please check your environment variables.")

    url = f"{settings.gemini_base_url}/models/{settings.gemini_model}:generateContent"
    async with httpx.AsyncClient(timeout=settings.llm_timeout) as client:
        response = await client.post(
            url,
            headers={"x-goog-api-key": settings.gemini_api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": 0.7,
                    "maxOutputTokens": 8192,
                },
            },
        )
        response.raise_for_status()
        result = response.json()

    try:
        parts = result["candidates"][0]["content"]["parts"]
        return "".join(p["text"] for p in parts)
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Unexpected LLM response shape: {str(result)[:200]}") from e


async def generate_questions(resume_text: str) -> list[Question]:
    """Ask the model for 15 MCQs about the resume. One attempt, no retries."""
    prompt = QUESTIONS_PROMPT_TEMPLATE.format(resume=resume_text[:RESUME_CHARS])
    try:
        raw_text = await _generate_content(prompt)
        questions = parse_questions(raw_text)
    except GenerationError:
        raise
    except (httpx.HTTPError, ValueError, ValidationError) as e:
        logger.error("Question generation failed: %s", e)
        raise GenerationError("Failed to generate questions. Please try again.") from e

    logger.info("Generated %d questions", len(questions))
    return questions


async def fetch_reference(question: Question) -> str:
    """Get a short study note on the topic of a question."""
    prompt = REFERENCE_PROMPT_TEMPLATE.format(topic=question.question)
    try:
        return await _generate_content(prompt)
    except GenerationError:
        raise
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Reference lookup failed: %s", e)
        raise GenerationError("Failed to fetch reference. Please try again later.") from e
