from __future__ import annotations
from typing import Optional, Tuple

from chatelix.schemas.chat import StreamRequest, TaskAnalysis

# Checked in order; the first category with a matching keyword wins.
TASK_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("code", ("code", "programming", "debug", "function", "algorithm")),
    ("creative", ("creative", "story", "poem", "marketing", "blog")),
    ("reasoning", ("analyze", "compare", "logic", "reasoning", "think")),
    ("vision", ("image", "photo", "visual", "picture")),
    ("translation", ("translate", "translation", "language")),
    ("math", ("math", "calculate", "equation", "formula")),
)

GENERAL = "general"

FALLBACK_MODEL_BY_TASK = {
    "code": "meta-llama/codellama-34b-instruct",
    "creative": "mistralai/mistral-large",
    "reasoning": "openai/o1-preview",
    "vision": "openai/gpt-4o",
    "translation": "anthropic/claude-3.5-sonnet",
    "math": "openai/o1-preview",
    GENERAL: "anthropic/claude-3.5-sonnet",
}


def _has_any(text: str, words: Tuple[str, ...]) -> bool:
    return any(w in text for w in words)


def classify_task(prompt: str) -> str:
    text = prompt.lower()
    for task, keywords in TASK_KEYWORDS:
        if _has_any(text, keywords):
            return task
    return GENERAL


def analyze_prompt(prompt: str, budget: str = "balanced", speed: str = "balanced") -> TaskAnalysis:
    """Guess task type, complexity and expected answer length from the prompt.

    Plain keyword heuristics; budget and speed are caller preferences and
    are passed through unchanged.
    """
    text = prompt.lower()

    if len(text) > 500 or _has_any(text, ("complex", "detailed", "comprehensive")):
        complexity = "high"
    elif len(text) > 100 or _has_any(text, ("analyze", "explain")):
        complexity = "medium"
    else:
        complexity = "low"

    if _has_any(text, ("detailed", "comprehensive", "complete")):
        length = "long"
    elif _has_any(text, ("brief", "short", "quick")):
        length = "short"
    else:
        length = "medium"

    return TaskAnalysis(
        type=classify_task(prompt),
        complexity=complexity,
        length=length,
        budget=budget,
        speed=speed,
    )


def fallback_model_for_text(text: Optional[str], default_model: str) -> str:
    if not text or not text.strip():
        return default_model
    return FALLBACK_MODEL_BY_TASK[classify_task(text)]


def recommended_fallback_model(request: StreamRequest, default_model: str) -> str:
    """Model to retry with after the requested one failed."""
    return fallback_model_for_text(request.prompt or request.last_user_content(), default_model)
