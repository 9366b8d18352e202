from fastapi import APIRouter

from chatelix.config import get_settings
from chatelix.recommendation.classifier import analyze_prompt, fallback_model_for_text
from chatelix.recommendation.scoring import get_recommendations, top_model_for_task
from chatelix.schemas.chat import RecommendationRequest, RecommendationResponse

router = APIRouter()


@router.post("/recommendations", response_model=RecommendationResponse)
async def recommend_models(body: RecommendationRequest) -> RecommendationResponse:
    """Score catalog models against the prompt's detected task."""
    analysis = analyze_prompt(body.prompt, budget=body.budget, speed=body.speed)
    default_model = get_settings().default_model
    return RecommendationResponse(
        analysis=analysis,
        recommendations=get_recommendations(analysis, body.max_results),
        fallback_model=fallback_model_for_text(body.prompt, default_model),
        best_model=top_model_for_task(analysis, default_model),
    )
