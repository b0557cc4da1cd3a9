"""
Alge-Bro Services - Calls out to the Gemini API.

This module provides:
- GeminiClient: JSON-constrained generation
- generate_lesson / generate_more_examples: Lesson content
- extract_topics_from_file / get_khan_academy_topics: Topic suggestions
"""

from .generator import (
    GeminiClient,
    GenerationError,
    InvalidCredentialError,
    MissingCredentialError,
    is_invalid_key_error,
    generate_lesson,
    extract_topics_from_file,
    get_khan_academy_topics,
    generate_more_examples,
)

__all__ = [
    "GeminiClient",
    "GenerationError",
    "InvalidCredentialError",
    "MissingCredentialError",
    "is_invalid_key_error",
    "generate_lesson",
    "extract_topics_from_file",
    "get_khan_academy_topics",
    "generate_more_examples",
]
