"""Static catalog of the popular gateway models offered in the model picker.

Built once at import time into a read-only mapping keyed by model id.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from chatelix.schemas.chat import ModelDescriptor, Pricing


def _entry(id: str, name: str, provider: str, category: str, prompt: float, completion: float,
           context_length: int, description: str) -> ModelDescriptor:
    return ModelDescriptor(
        id=id,
        name=name,
        provider=provider,
        category=category,
        pricing=Pricing(prompt=prompt, completion=completion),
        context_length=context_length,
        description=description,
    )


_POPULAR_MODELS: Tuple[ModelDescriptor, ...] = (
    # OpenAI
    _entry("openai/gpt-4o", "GPT-4o", "OpenAI", "General", 0.005, 0.015, 128_000,
           "OpenAI's most capable multimodal model"),
    _entry("openai/gpt-4o-mini", "GPT-4o Mini", "OpenAI", "Fast", 0.00015, 0.0006, 128_000,
           "Fast, low-cost version of GPT-4o"),
    _entry("openai/o1-preview", "o1-preview", "OpenAI", "Reasoning", 0.015, 0.06, 128_000,
           "OpenAI's advanced reasoning model"),
    # Anthropic
    _entry("anthropic/claude-3.5-sonnet", "Claude 3.5 Sonnet", "Anthropic", "General", 0.003, 0.015, 200_000,
           "Balanced Anthropic model, strong at writing"),
    _entry("anthropic/claude-3-haiku", "Claude 3 Haiku", "Anthropic", "Fast", 0.00025, 0.00125, 200_000,
           "Fast, low-cost Claude"),
    # Google
    _entry("google/gemini-pro-1.5", "Gemini Pro 1.5", "Google", "General", 0.00125, 0.005, 2_000_000,
           "Google model with an ultra-long context window"),
    _entry("google/gemini-flash-1.5", "Gemini Flash 1.5", "Google", "Fast", 0.000075, 0.0003, 1_000_000,
           "Fast Gemini with a large context window"),
    # Meta
    _entry("meta-llama/llama-3.1-405b-instruct", "Llama 3.1 405B", "Meta", "General", 0.00275, 0.00275, 32_768,
           "Meta's largest open-weights model"),
    _entry("meta-llama/llama-3.1-70b-instruct", "Llama 3.1 70B", "Meta", "Performance", 0.00052, 0.00052, 32_768,
           "Capable open-weights model from Meta"),
    # Code specialists
    _entry("meta-llama/codellama-34b-instruct", "Code Llama 34B", "Meta", "Code", 0.00052, 0.00052, 32_768,
           "Specialised for code generation"),
    _entry("deepseek/deepseek-coder", "DeepSeek Coder", "DeepSeek", "Code", 0.0014, 0.0028, 16_384,
           "Programming expert model"),
    # Creative
    _entry("mistralai/mistral-large", "Mistral Large", "Mistral", "Creative", 0.002, 0.006, 32_768,
           "French model that excels at creative writing"),
)

CATALOG: Mapping[str, ModelDescriptor] = MappingProxyType({m.id: m for m in _POPULAR_MODELS})


def all_models() -> List[ModelDescriptor]:
    return list(CATALOG.values())


def find_model(model_id: str) -> Optional[ModelDescriptor]:
    return CATALOG.get(model_id)


def _group(attr: str) -> Dict[str, List[ModelDescriptor]]:
    groups: Dict[str, List[ModelDescriptor]] = {}
    for m in CATALOG.values():
        groups.setdefault(getattr(m, attr), []).append(m)
    return groups


def models_by_category() -> Dict[str, List[ModelDescriptor]]:
    return _group("category")


def models_by_vendor() -> Dict[str, List[ModelDescriptor]]:
    return _group("provider")
