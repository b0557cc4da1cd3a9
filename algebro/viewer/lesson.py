"""
Lesson renderer - HTML for the "Lesson" tab.

Features:
- Introduction paragraph
- Core concept card
- Real-world example list (grows when the student asks for more)
"""

import html

from algebro.schemas import CoreConcept, Lesson, RealWorldExample


def get_lesson_css() -> str:
    """Get CSS styles for lesson display."""
    return """
    <style>
    .lesson-intro {
        font-size: 1.1em;
        line-height: 1.7;
        margin-bottom: 1.2em;
    }
    .concept-card {
        background: #f5f7fa;
        border-radius: 12px;
        padding: 1.2em 1.5em;
        margin: 1em 0;
    }
    .concept-title {
        font-weight: 700;
        font-size: 1.2em;
        margin-bottom: 0.5em;
    }
    .concept-explanation {
        line-height: 1.6;
    }
    .examples-header {
        font-weight: 700;
        margin: 1.2em 0 0.5em 0;
    }
    .example-item {
        background: #eef4ff;
        border-left: 4px solid #4f7cff;
        border-radius: 0 8px 8px 0;
        padding: 0.7em 1em;
        margin-bottom: 0.8em;
    }
    .example-title {
        font-weight: 600;
    }
    .example-explanation {
        font-size: 0.95em;
        color: #444;
    }
    </style>
    """


def render_introduction(lesson: Lesson) -> str:
    return f'<div class="lesson-intro">{html.escape(lesson.introduction)}</div>'


def render_core_concept(concept: CoreConcept) -> str:
    return (
        '<div class="concept-card">'
        f'<div class="concept-title">{html.escape(concept.title)}</div>'
        f'<div class="concept-explanation">{html.escape(concept.explanation)}</div>'
        '</div>'
    )


def render_real_world_example(example: RealWorldExample) -> str:
    return (
        '<div class="example-item">'
        f'<div class="example-title">{html.escape(example.example)}</div>'
        f'<div class="example-explanation">{html.escape(example.explanation)}</div>'
        '</div>'
    )


def render_real_world_examples(examples: list[RealWorldExample]) -> str:
    """Render the example list, or nothing if there are none."""
    if not examples:
        return ""
    parts = ['<div class="examples-header">Real-World Examples</div>']
    parts.extend(render_real_world_example(e) for e in examples)
    return ''.join(parts)


def render_lesson(lesson: Lesson) -> str:
    """
    Render the full lesson tab.

    Args:
        lesson: Lesson content

    Returns:
        HTML string (without CSS; see get_lesson_css)
    """
    return ''.join([
        render_introduction(lesson),
        render_core_concept(lesson.core_concept),
        render_real_world_examples(lesson.core_concept.real_world_examples),
    ])
