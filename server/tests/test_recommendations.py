import pytest

from chatelix.providers.catalog import CATALOG, all_models, find_model, models_by_category, models_by_vendor
from chatelix.recommendation.scoring import (
    calculate_score,
    estimate_cost,
    expected_speed,
    get_recommendations,
    top_model_for_task,
)
from chatelix.schemas.chat import TaskAnalysis


def test_catalog_is_read_only():
    assert len(all_models()) == 12
    with pytest.raises(TypeError):
        CATALOG["new/model"] = CATALOG["openai/gpt-4o"]
    with pytest.raises(Exception):
        CATALOG["openai/gpt-4o"].name = "renamed"


def test_catalog_lookup_and_grouping():
    assert find_model("mistralai/mistral-large").category == "Creative"
    assert find_model("unknown/model") is None
    assert set(models_by_vendor()) == {"OpenAI", "Anthropic", "Google", "Meta", "DeepSeek", "Mistral"}
    assert [m.id for m in models_by_category()["Fast"]] == [
        "openai/gpt-4o-mini",
        "anthropic/claude-3-haiku",
        "google/gemini-flash-1.5",
    ]


def test_score_bonuses():
    code = TaskAnalysis(type="code", complexity="medium")
    assert calculate_score(find_model("anthropic/claude-3.5-sonnet"), code) == 80
    assert calculate_score(find_model("openai/gpt-4o"), code) == 50

    cheap_and_fast = TaskAnalysis(type="general", complexity="low", budget="economy", speed="fast")
    # 50 + fast/mini 20 + economy 15 + low/mini 10
    assert calculate_score(find_model("openai/gpt-4o-mini"), cheap_and_fast) == 95


def test_score_is_clamped():
    analysis = TaskAnalysis(type="reasoning", complexity="high", budget="premium")
    # 50 + 35 + 10 + 15 would be 110
    assert calculate_score(find_model("openai/o1-preview"), analysis) == 100


def test_recommendations_sorted_and_stable():
    recs = get_recommendations(TaskAnalysis(type="code", complexity="low"), max_results=3)
    assert [r.model.id for r in recs] == [
        "anthropic/claude-3.5-sonnet",
        "anthropic/claude-3-haiku",
        "openai/gpt-4o-mini",
    ]
    assert [r.score for r in recs] == [80, 80, 60]
    assert recs[0].reason == "Excellent for code • Large context"
    assert recs[0].match_explanation == "Claude excels at programming and debugging"
    assert "Code" in recs[0].tags


def test_reason_and_explanation_fallbacks():
    rec = get_recommendations(TaskAnalysis(type="general", complexity="medium"), max_results=12)
    llama = next(r for r in rec if r.model.id == "meta-llama/llama-3.1-70b-instruct")
    assert llama.reason == "Versatile model"
    assert llama.match_explanation == "Llama 3.1 70B is a solid choice for this task"


@pytest.mark.parametrize("length, tokens", [("short", 100), ("medium", 500), ("long", 2000)])
def test_estimate_cost(length, tokens):
    model = find_model("openai/gpt-4o")
    assert estimate_cost(model, TaskAnalysis(length=length)) == pytest.approx(0.02 * tokens)


def test_expected_speed():
    assert expected_speed(find_model("anthropic/claude-3-haiku")) == "fast"
    assert expected_speed(find_model("openai/gpt-4o-mini")) == "fast"
    # plain substring check: "gemini" contains "mini"
    assert expected_speed(find_model("google/gemini-pro-1.5")) == "fast"
    assert expected_speed(find_model("openai/gpt-4o")) == "slow"


def test_top_model_for_task():
    assert top_model_for_task(TaskAnalysis(type="math"), "fallback") == "openai/o1-preview"
    assert top_model_for_task(TaskAnalysis(type="vision", complexity="high"), "fallback") == "openai/gpt-4o"
