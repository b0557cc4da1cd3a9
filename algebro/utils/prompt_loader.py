"""
Prompt templates for Alge-Bro's Gemini requests.

Each prompts/<name>.yaml holds:
- meta: version, model tier ("lesson" or "fast"), temperature
- user_template: prompt text with {placeholders}
- response_schema: Gemini schema the JSON response must follow
"""

from pathlib import Path
from string import Formatter
from typing import Any
import yaml


PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

REQUIRED_KEYS = ("user_template", "response_schema")


def load_prompt(name: str, prompts_dir: Path | None = None) -> dict[str, Any]:
    """
    Load and check a prompt template by name.

    Args:
        name: Template name without .yaml (e.g., "generate_lesson")
        prompts_dir: Directory to read from (default: algebro/prompts)

    Raises:
        FileNotFoundError: No such template
        ValueError: The template is missing user_template or response_schema
    """
    file_path = (prompts_dir or PROMPTS_DIR) / f"{name}.yaml"
    if not file_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    missing = [key for key in REQUIRED_KEYS if key not in config]
    if missing:
        raise ValueError(f"Prompt '{name}' is missing {', '.join(missing)}")
    config.setdefault("meta", {})
    return config


def template_fields(template: str) -> set[str]:
    """Names of the {placeholders} used in a template."""
    return {field for _, field, _, _ in Formatter().parse(template) if field}


def format_prompt(template: str, **kwargs) -> str:
    """
    Fill in a template.

    Raises:
        ValueError: A placeholder has no value
    """
    missing = template_fields(template) - kwargs.keys()
    if missing:
        raise ValueError(f"No value for prompt placeholder(s): {', '.join(sorted(missing))}")
    return template.format(**kwargs)


def get_available_prompts(prompts_dir: Path | None = None) -> list[str]:
    """Template names (without .yaml), sorted."""
    dir_path = prompts_dir or PROMPTS_DIR
    if not dir_path.exists():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))
