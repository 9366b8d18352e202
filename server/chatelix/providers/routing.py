from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Provider(str, Enum):
    AGGREGATOR = "aggregator"  # OpenRouter-style gateway, also the catch-all
    PRIMARY = "primary"  # OpenAI
    SECONDARY = "secondary"  # Anthropic
    TERTIARY = "tertiary"  # Google Gemini
    QUATERNARY = "quaternary"  # DeepSeek


ENDPOINTS = {
    Provider.AGGREGATOR: "aggregator-chat-stream",
    Provider.PRIMARY: "primary-chat-stream",
    Provider.SECONDARY: "secondary-chat-stream",
    Provider.TERTIARY: "tertiary-chat-stream",
    Provider.QUATERNARY: "quaternary-chat-stream",
}

# Evaluated top to bottom, first match wins. Order matters: "gpt-5-mini"
# contains "gpt" too, but must reach the aggregator.
PROVIDER_RULES: Tuple[Tuple[Tuple[str, ...], Provider], ...] = (
    (("gpt-5", "o3-", "o4-"), Provider.AGGREGATOR),
    (("gpt", "o1"), Provider.PRIMARY),
    (("claude",), Provider.SECONDARY),
    (("gemini",), Provider.TERTIARY),
    (("deepseek",), Provider.QUATERNARY),
)

DEFAULT_PROVIDER = Provider.AGGREGATOR


@dataclass(frozen=True)
class ProviderBinding:
    provider: Provider
    endpoint: str


def detect_provider(model: str) -> Provider:
    for needles, provider in PROVIDER_RULES:
        if any(needle in model for needle in needles):
            return provider
    # Unrecognised ids (400+ gateway models) go through the aggregator
    return DEFAULT_PROVIDER


def resolve_binding(model: str) -> ProviderBinding:
    provider = detect_provider(model)
    return ProviderBinding(provider=provider, endpoint=ENDPOINTS[provider])
