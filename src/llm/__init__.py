# LLM layer - AI client initialization and text generation

from src.llm.clients import init_ai_clients

from src.llm.generation import (
    provider_for_model,
    generate_with_llm,
    get_available_models,
)

__all__ = [
    # Clients
    "init_ai_clients",
    # Generation
    "provider_for_model",
    "generate_with_llm",
    "get_available_models",
]
