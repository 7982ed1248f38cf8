"""AI client initialization for Gemini, OpenAI, and Anthropic."""

import streamlit as st
from google import genai
from openai import OpenAI
import anthropic

from src.config import get_secret


@st.cache_resource
def init_ai_clients():
    """Initialize AI clients with API keys from env or secrets.

    Each client is optional; a provider without a key is None.
    """
    gemini_key = get_secret("GEMINI_API_KEY")
    gemini_client = genai.Client(api_key=gemini_key) if gemini_key else None

    openai_key = get_secret("OPENAI_API_KEY")
    openai_client = OpenAI(api_key=openai_key) if openai_key else None

    anthropic_key = get_secret("ANTHROPIC_API_KEY")
    anthropic_client = anthropic.Anthropic(api_key=anthropic_key) if anthropic_key else None

    return gemini_client, openai_client, anthropic_client
