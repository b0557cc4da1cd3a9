"""Alge-Bro utilities."""

from .prompt_loader import load_prompt, format_prompt, get_available_prompts, template_fields
from .llm_json import extract_json_from_response

__all__ = [
    "load_prompt",
    "format_prompt",
    "get_available_prompts",
    "template_fields",
    "extract_json_from_response",
]
