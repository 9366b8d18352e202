from __future__ import annotations
from typing import List

from chatelix.providers.catalog import all_models
from chatelix.schemas.chat import ModelDescriptor, ModelRecommendation, TaskAnalysis

ESTIMATED_TOKENS = {"short": 100, "medium": 500, "long": 2000}


def calculate_score(model: ModelDescriptor, analysis: TaskAnalysis) -> int:
    mid = model.id
    score = 50

    # Task type
    if analysis.type == "code" and "claude" in mid:
        score += 30
    if analysis.type == "creative" and "gpt-4" in mid:
        score += 25
    if analysis.type == "reasoning" and ("claude" in mid or "o1" in mid):
        score += 35
    if analysis.type == "vision" and "gpt-4" in mid:
        score += 30
    if analysis.type == "math" and "o1" in mid:
        score += 40

    # Speed preference
    if analysis.speed == "fast" and "mini" in mid:
        score += 20
    if analysis.speed == "quality" and "claude-3-5-sonnet" in mid:
        score += 25

    # Budget preference
    if analysis.budget == "economy" and model.pricing.prompt < 0.001:
        score += 15
    if analysis.budget == "premium" and model.pricing.prompt > 0.01:
        score += 10

    # Complexity
    if analysis.complexity == "high" and "mini" not in mid:
        score += 15
    if analysis.complexity == "low" and "mini" in mid:
        score += 10

    return min(100, max(0, score))


def _reason(model: ModelDescriptor, analysis: TaskAnalysis) -> str:
    reasons = []
    if analysis.type == "code" and "claude" in model.id:
        reasons.append("Excellent for code")
    if analysis.type == "creative" and "gpt" in model.id:
        reasons.append("Very creative")
    if analysis.speed == "fast" and "mini" in model.id:
        reasons.append("Fast response")
    if analysis.budget == "economy" and model.pricing.prompt < 0.001:
        reasons.append("Economical")
    if model.context_length > 100_000:
        reasons.append("Large context")
    return " • ".join(reasons) or "Versatile model"


def _tags(model: ModelDescriptor, analysis: TaskAnalysis) -> List[str]:
    tags = []
    if "mini" in model.id or model.pricing.prompt < 0.001:
        tags.append("Economical")
    if "gpt-5" in model.id or "claude-3-5" in model.id:
        tags.append("Premium")
    if "mini" in model.id:
        tags.append("Fast")
    if analysis.type == "code":
        tags.append("Code")
    if analysis.type == "creative":
        tags.append("Creative")
    if model.context_length > 100_000:
        tags.append("Large context")
    return tags


def estimate_cost(model: ModelDescriptor, analysis: TaskAnalysis) -> float:
    tokens = ESTIMATED_TOKENS.get(analysis.length, ESTIMATED_TOKENS["medium"])
    return model.pricing.prompt * tokens + model.pricing.completion * tokens


def expected_speed(model: ModelDescriptor) -> str:
    if "mini" in model.id or "haiku" in model.id:
        return "fast"
    if "gpt-5" in model.id or "claude-3-5-sonnet" in model.id:
        return "medium"
    return "slow"


def _match_explanation(model: ModelDescriptor, analysis: TaskAnalysis) -> str:
    explanations = []
    if analysis.type == "code" and "claude" in model.id:
        explanations.append("Claude excels at programming and debugging")
    if analysis.complexity == "high" and "mini" not in model.id:
        explanations.append("Powerful model suited to complex tasks")
    if analysis.speed == "fast" and "mini" in model.id:
        explanations.append("Optimised for quick responses")
    return ". ".join(explanations) or f"{model.name} is a solid choice for this task"


def get_recommendations(analysis: TaskAnalysis, max_results: int = 3) -> List[ModelRecommendation]:
    recommendations = [
        ModelRecommendation(
            model=model,
            score=calculate_score(model, analysis),
            reason=_reason(model, analysis),
            tags=_tags(model, analysis),
            estimated_cost=estimate_cost(model, analysis),
            expected_speed=expected_speed(model),
            match_explanation=_match_explanation(model, analysis),
        )
        for model in all_models()
    ]
    # sorted() is stable: ties keep catalog order
    recommendations.sort(key=lambda r: r.score, reverse=True)
    return recommendations[:max_results]


def top_model_for_task(analysis: TaskAnalysis, default_model: str) -> str:
    best = get_recommendations(analysis, 1)
    return best[0].model.id if best else default_model
