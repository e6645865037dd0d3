from .gemini_client import FALLBACK_RESPONSE, GeminiClient, extract_text

__all__ = ["FALLBACK_RESPONSE", "GeminiClient", "extract_text"]
