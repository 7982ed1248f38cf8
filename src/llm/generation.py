"""Text generation across LLM providers, dispatched on the model name prefix."""

import logging

from google.genai import types as genai_types

from src.config import LLM_MODELS, LLM_MAX_TOKENS
from src.llm.clients import init_ai_clients

logger = logging.getLogger(__name__)

PROVIDER_PREFIXES = {
    "gemini": "Gemini",
    "gpt": "OpenAI",
    "claude": "Anthropic",
}


def provider_for_model(model: str) -> str:
    """Provider name for a model id, e.g. 'gpt-4o' -> 'OpenAI'."""
    for prefix, provider in PROVIDER_PREFIXES.items():
        if model.startswith(prefix):
            return provider
    raise ValueError(f"Unknown model: {model}")


def generate_with_llm(prompt: str, model: str, json_output: bool = False) -> str:
    """Generate text using the specified LLM model.

    With json_output the provider is asked for a bare JSON object where it
    supports that (Gemini, OpenAI); Anthropic relies on the prompt.
    """
    gemini_ai, openai_ai, anthropic_ai = init_ai_clients()
    provider = provider_for_model(model)
    logger.info("Generating with %s (%d prompt chars)", model, len(prompt))

    if provider == "Gemini":
        if not gemini_ai:
            raise ValueError("Gemini API key not configured")
        config = genai_types.GenerateContentConfig(response_mime_type="application/json") if json_output else None
        response = gemini_ai.models.generate_content(model=model, contents=prompt, config=config)
        return response.text

    if provider == "OpenAI":
        if not openai_ai:
            raise ValueError("OpenAI API key not configured")
        extra = {"response_format": {"type": "json_object"}} if json_output else {}
        response = openai_ai.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            **extra,
        )
        return response.choices[0].message.content

    if not anthropic_ai:
        raise ValueError("Anthropic API key not configured")
    response = anthropic_ai.messages.create(
        model=model,
        max_tokens=LLM_MAX_TOKENS,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.content[0].text


def get_available_models() -> list:
    """Models whose provider has an API key configured."""
    clients = dict(zip(("Gemini", "OpenAI", "Anthropic"), init_ai_clients()))
    return [model for provider, models in LLM_MODELS.items() if clients.get(provider) for model in models]
