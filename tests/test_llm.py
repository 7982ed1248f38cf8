"""
Unit tests for LLM provider dispatch.
"""
from unittest.mock import MagicMock, patch

import pytest

from src.llm import provider_for_model, generate_with_llm, get_available_models


class TestProviderForModel:

    @pytest.mark.parametrize("model, provider", [
        ("gemini-2.5-flash", "Gemini"),
        ("gpt-4o-mini", "OpenAI"),
        ("claude-sonnet-4-20250514", "Anthropic"),
    ])
    def test_known_prefixes(self, model, provider):
        assert provider_for_model(model) == provider

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="Unknown model"):
            provider_for_model("llama-3")


class TestGenerateWithLlm:

    def test_missing_key(self):
        with patch("src.llm.generation.init_ai_clients", return_value=(None, None, None)):
            with pytest.raises(ValueError, match="Gemini API key not configured"):
                generate_with_llm("prompt", "gemini-2.5-flash")

    def test_openai_json_mode(self):
        openai_client = MagicMock()
        openai_client.chat.completions.create.return_value.choices = [
            MagicMock(message=MagicMock(content='{"name": "Expo"}'))
        ]
        with patch("src.llm.generation.init_ai_clients", return_value=(None, openai_client, None)):
            text = generate_with_llm("prompt", "gpt-4o", json_output=True)

        assert text == '{"name": "Expo"}'
        kwargs = openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}

    def test_anthropic(self):
        anthropic_client = MagicMock()
        anthropic_client.messages.create.return_value.content = [MagicMock(text="hello")]
        with patch("src.llm.generation.init_ai_clients", return_value=(None, None, anthropic_client)):
            assert generate_with_llm("prompt", "claude-sonnet-4-20250514") == "hello"


class TestAvailableModels:

    def test_only_configured_providers(self):
        with patch("src.llm.generation.init_ai_clients", return_value=(None, MagicMock(), None)):
            assert get_available_models() == ["gpt-4o", "gpt-4o-mini"]
