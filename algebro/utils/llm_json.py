"""Pull a JSON object out of an LLM response."""

import json
import re


CODE_BLOCK_PATTERN = re.compile(r'```(?:json)?\s*([\s\S]*?)```')


def extract_json_from_response(text: str) -> dict:
    """
    Extract JSON from LLM response, handling markdown code blocks.

    Even with a JSON response type the model occasionally wraps its answer in
    a ```json fence or trails it with prose.

    Raises:
        ValueError: If no JSON object can be parsed
    """
    if not text:
        raise ValueError("Empty response from API")

    for match in CODE_BLOCK_PATTERN.findall(text):
        try:
            return json.loads(match.strip())
        except json.JSONDecodeError:
            continue

    text = text.strip()
    if text.startswith('{'):
        depth = 0
        in_string = False
        escaped = False
        for i, char in enumerate(text):
            if in_string:
                if escaped:
                    escaped = False
                elif char == '\\':
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(text[:i + 1])
                    except json.JSONDecodeError:
                        break

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not extract JSON from response: {e}\n\nResponse:\n{text[:500]}...")
