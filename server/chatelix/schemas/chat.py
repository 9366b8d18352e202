from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: str = Field(..., pattern=r"^(user|assistant|system)$")
    content: str


class StreamRequest(BaseModel):
    model: str = Field(..., min_length=1)
    messages: List[ChatMessage]
    temperature: Optional[float] = None
    maxTokens: Optional[int] = Field(default=None, ge=1, alias="max_tokens")
    # Prompt as typed by the user; only used to pick a fallback model
    prompt: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    def last_user_content(self) -> Optional[str]:
        last_user = next((m for m in reversed(self.messages) if m.role == "user"), None)
        return last_user.content if last_user else None


class GenerationResult(BaseModel):
    text: str
    model: str
    raw_response: Optional[Any] = None


class ProbeRequest(BaseModel):
    model: str = Field(..., min_length=1)


class Pricing(BaseModel):
    prompt: float
    completion: float

    model_config = ConfigDict(frozen=True)


class ModelDescriptor(BaseModel):
    id: str
    name: str
    provider: str
    category: str
    pricing: Pricing
    context_length: int = 128000
    description: str = ""

    model_config = ConfigDict(frozen=True)


class TaskAnalysis(BaseModel):
    type: str = "general"
    complexity: str = "low"
    length: str = "medium"
    budget: str = "balanced"
    speed: str = "balanced"


class ModelRecommendation(BaseModel):
    model: ModelDescriptor
    score: int
    reason: str
    tags: List[str]
    estimated_cost: float
    expected_speed: str
    match_explanation: str


class RecommendationRequest(BaseModel):
    prompt: str
    max_results: int = Field(default=3, ge=1, le=20)
    budget: str = Field(default="balanced", pattern=r"^(economy|balanced|premium)$")
    speed: str = Field(default="balanced", pattern=r"^(fast|balanced|quality)$")


class RecommendationResponse(BaseModel):
    analysis: TaskAnalysis
    recommendations: List[ModelRecommendation]
    fallback_model: str
    best_model: str


class BindingInfo(BaseModel):
    model: str
    provider: str
    endpoint: str


class CatalogResponse(BaseModel):
    providers: Dict[str, List[ModelDescriptor]]
    categories: Dict[str, List[ModelDescriptor]]
