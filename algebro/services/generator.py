"""
Lesson generator - Gemini-backed lesson, topic and example generation.

Key features:
- Structured JSON output via response schemas from prompts/*.yaml
- Pydantic validation of every response before it reaches the UI
- Human-readable failures; an invalid API key is reported separately so the
  app can ask for a new one
"""

import logging
import os
from typing import Any, Optional

from google import genai
from google.genai import types as genai_types

from algebro.config import API_KEY_ENV, DEFAULT_TEMPERATURE, FAST_MODEL, LESSON_MODEL
from algebro.schemas import Lesson, RealWorldExample, Subject
from algebro.utils import (
    extract_json_from_response,
    format_prompt,
    get_available_prompts,
    load_prompt,
)


logger = logging.getLogger(__name__)

INVALID_KEY_MARKERS = ("API key not valid", "API_KEY_INVALID")


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

class GenerationError(Exception):
    """A generation request failed; the message is safe to show to students."""


class InvalidCredentialError(GenerationError):
    """The service rejected the API key."""


class MissingCredentialError(InvalidCredentialError):
    """No API key has been entered yet."""


def is_invalid_key_error(error: BaseException) -> bool:
    message = str(error)
    return any(marker in message for marker in INVALID_KEY_MARKERS)


# -----------------------------------------------------------------------------
# Gemini API Client
# -----------------------------------------------------------------------------

class GeminiClient:
    """Wrapper for the Gemini API returning parsed JSON."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = LESSON_MODEL,
        fast_model: str = FAST_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        client: Any = None,
    ):
        self.api_key = api_key or os.environ.get(API_KEY_ENV)
        if client is None:
            if not self.api_key:
                raise MissingCredentialError(
                    "API key not found in storage. Please set it on the start screen."
                )
            client = genai.Client(api_key=self.api_key)

        self.client = client
        self.model_name = model
        self.fast_model_name = fast_model
        self.temperature = temperature

    def model_for(self, tier: str) -> str:
        """Map a prompt's model tier ("lesson" or "fast") to a model name."""
        return self.fast_model_name if tier == "fast" else self.model_name

    def generate_json(
        self,
        contents: Any,
        response_schema: dict,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> dict:
        """Generate a JSON object constrained by `response_schema`."""
        try:
            response = self.client.models.generate_content(
                model=model or self.model_name,
                contents=contents,
                config=genai_types.GenerateContentConfig(
                    temperature=self.temperature if temperature is None else temperature,
                    response_mime_type="application/json",
                    response_schema=response_schema,
                ),
            )
        except Exception as e:
            if is_invalid_key_error(e):
                raise InvalidCredentialError(
                    "Your API key is not valid. Please check it and try again."
                ) from e
            raise

        text = response.text
        if text is None:
            if response.candidates and len(response.candidates) > 0:
                candidate = response.candidates[0]
                if candidate.content and candidate.content.parts:
                    text = candidate.content.parts[0].text
        return extract_json_from_response(text or "")

    def run_prompt(self, name: str, extra_parts: Optional[list] = None, **values) -> dict:
        """Load a prompt template, fill it in, and generate its JSON response."""
        available = get_available_prompts()
        if name not in available:
            raise ValueError(f"Unknown prompt '{name}'. Available: {', '.join(available)}")

        prompt_config = load_prompt(name)
        meta = prompt_config.get("meta", {})
        prompt = format_prompt(prompt_config["user_template"], **values)
        contents = [prompt, *extra_parts] if extra_parts else prompt
        return self.generate_json(
            contents,
            response_schema=prompt_config["response_schema"],
            model=self.model_for(meta.get("model", "lesson")),
            temperature=meta.get("temperature"),
        )


# -----------------------------------------------------------------------------
# Generation
# -----------------------------------------------------------------------------

def _subject_name(subject) -> str:
    return subject.value if isinstance(subject, Subject) else str(subject)


def _clean_topics(data: dict) -> list[str]:
    topics = data.get("topics")
    if not isinstance(topics, list):
        raise ValueError("Response has no 'topics' array")
    return [str(t).strip() for t in topics if str(t).strip()]


def generate_lesson(topic: str, subject, client: GeminiClient) -> Lesson:
    """
    Generate a full lesson (introduction, concept, quiz, practice problems).

    Raises:
        InvalidCredentialError: The API key was rejected
        GenerationError: Anything else went wrong
    """
    try:
        data = client.run_prompt("generate_lesson", topic=topic, subject=_subject_name(subject))
        lesson = Lesson.model_validate(data)
        logger.info(
            f"Generated lesson '{lesson.topic}': {len(lesson.quiz.questions)} questions, "
            f"{len(lesson.practice_problems.problems)} problems"
        )
        return lesson
    except InvalidCredentialError:
        raise
    except Exception as e:
        logger.error(f"Error generating lesson: {e}")
        raise GenerationError(
            "Failed to generate lesson. The topic might be too broad or the service "
            "is currently unavailable. Please try again."
        ) from e


def extract_topics_from_file(
    data: bytes,
    mime_type: str,
    subject,
    client: GeminiClient,
) -> list[str]:
    """Ask the model to list lesson topics found in an uploaded syllabus."""
    try:
        file_part = genai_types.Part.from_bytes(data=data, mime_type=mime_type)
        response = client.run_prompt(
            "extract_topics",
            extra_parts=[file_part],
            subject=_subject_name(subject),
        )
        return _clean_topics(response)
    except InvalidCredentialError:
        raise
    except Exception as e:
        logger.error(f"Error extracting topics: {e}")
        raise GenerationError(
            "Failed to extract topics from the file. Please ensure it's a valid "
            "curriculum document."
        ) from e


def get_khan_academy_topics(subject, client: GeminiClient) -> list[str]:
    """List key 7th-grade topics for `subject` from the Khan Academy curriculum."""
    try:
        response = client.run_prompt("khan_topics", subject=_subject_name(subject))
        return _clean_topics(response)
    except InvalidCredentialError:
        raise
    except Exception as e:
        logger.error(f"Error fetching Khan Academy topics: {e}")
        raise GenerationError(
            "Failed to fetch Khan Academy topics. Please try again later."
        ) from e


def generate_more_examples(
    topic: str,
    subject,
    existing_examples: list[RealWorldExample],
    client: GeminiClient,
) -> list[RealWorldExample]:
    """Generate new real-world examples distinct from the ones already shown."""
    existing = "\n".join(f"- {e.example}" for e in existing_examples) or "- (none yet)"
    try:
        response = client.run_prompt(
            "more_examples",
            topic=topic,
            subject=_subject_name(subject),
            existing_examples=existing,
        )
        examples = response.get("examples")
        if not isinstance(examples, list):
            raise ValueError("Response has no 'examples' array")
        return [RealWorldExample.model_validate(e) for e in examples]
    except InvalidCredentialError:
        raise
    except Exception as e:
        logger.error(f"Error generating more examples: {e}")
        raise GenerationError("Failed to generate more examples. Please try again.") from e
