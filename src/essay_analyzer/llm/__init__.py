"""Language-model provider clients."""

from .gemini_client import GeminiEssayClient
from .openai_client import OpenAIEssayClient

__all__ = ["GeminiEssayClient", "OpenAIEssayClient"]
