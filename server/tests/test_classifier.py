import pytest

from chatelix.recommendation.classifier import (
    FALLBACK_MODEL_BY_TASK,
    analyze_prompt,
    classify_task,
    fallback_model_for_text,
    recommended_fallback_model,
)
from chatelix.schemas.chat import StreamRequest


@pytest.mark.parametrize(
    "prompt, expected",
    [
        ("Can you debug this function?", "code"),
        ("write a poem about the sea", "creative"),
        ("Compare REST and GraphQL", "reasoning"),
        ("Describe this PHOTO", "vision"),
        ("Translate this sentence into French", "translation"),
        ("Solve this equation for x", "math"),
        ("Hello there", "general"),
        ("", "general"),
    ],
)
def test_classify_task(prompt, expected):
    assert classify_task(prompt) == expected


@pytest.mark.parametrize(
    "prompt, expected",
    [
        # earlier categories win when several keyword sets match
        ("Write a story about a programming language", "code"),
        ("Compare these two poems", "creative"),
        ("Analyze this image", "reasoning"),
        ("Translate the math formula", "translation"),
    ],
)
def test_classify_task_first_match_wins(prompt, expected):
    assert classify_task(prompt) == expected


def test_analyze_prompt_defaults():
    analysis = analyze_prompt("Hi")
    assert analysis.type == "general"
    assert analysis.complexity == "low"
    assert analysis.length == "medium"
    assert analysis.budget == "balanced"
    assert analysis.speed == "balanced"


@pytest.mark.parametrize(
    "prompt, complexity, length",
    [
        ("x" * 501, "high", "medium"),
        ("Give me a detailed plan", "high", "long"),
        ("Please explain closures", "medium", "medium"),
        ("y" * 101, "medium", "medium"),
        ("A brief answer please", "low", "short"),
        ("Write the complete list", "low", "long"),
    ],
)
def test_analyze_prompt_complexity_and_length(prompt, complexity, length):
    analysis = analyze_prompt(prompt)
    assert analysis.complexity == complexity
    assert analysis.length == length


def test_analyze_prompt_passes_preferences_through():
    analysis = analyze_prompt("calculate this", budget="economy", speed="fast")
    assert (analysis.type, analysis.budget, analysis.speed) == ("math", "economy", "fast")


def test_every_task_has_a_fallback_model():
    for task in ("code", "creative", "reasoning", "vision", "translation", "math", "general"):
        assert FALLBACK_MODEL_BY_TASK[task]


def test_fallback_uses_last_user_message():
    request = StreamRequest(
        model="gpt-4o",
        messages=[
            {"role": "user", "content": "Debug my function"},
            {"role": "assistant", "content": "Sure"},
            {"role": "user", "content": "Now write a poem about it"},
        ],
    )
    assert recommended_fallback_model(request, "default") == "mistralai/mistral-large"


def test_explicit_prompt_overrides_messages():
    request = StreamRequest(
        model="gpt-4o",
        messages=[{"role": "user", "content": "write a poem"}],
        prompt="solve the equation",
    )
    assert recommended_fallback_model(request, "default") == "openai/o1-preview"


def test_fallback_without_text_is_default():
    request = StreamRequest(model="gpt-4o", messages=[{"role": "system", "content": "be nice"}])
    assert recommended_fallback_model(request, "default-model") == "default-model"
    assert fallback_model_for_text("   ", "default-model") == "default-model"
