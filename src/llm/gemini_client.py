"""
Gemini generateContent client.

One synchronous POST per call, no retries. The API key travels as the ``key``
query parameter and is kept out of log lines.
"""

import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Optional

from errors import ConfigurationError, GeminiAPIError
from utils.logger import logger

FALLBACK_RESPONSE = "I apologize, but I could not generate a response. Please try again."


def extract_text(data: Any) -> str:
    """Pull ``candidates[0].content.parts[0].text`` or return the fallback."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return FALLBACK_RESPONSE
    return text if text else FALLBACK_RESPONSE


class GeminiClient:
    """Thin client for the Gemini REST endpoint."""

    def __init__(self, api_key: str, api_url: str, timeout: Optional[float] = None):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not found in environment variables")
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key,
            api_url=settings.gemini_api_url,
            timeout=settings.gemini_timeout_seconds,
        )

    def _request_body(self, prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    def generate(self, prompt: str) -> str:
        """
        Send the prompt and return the generated text.

        Raises:
            GeminiAPIError: endpoint answered with a non-success status
        """
        logger.info(f"Calling Gemini: {self.api_url}")
        url = f"{self.api_url}?{urllib.parse.urlencode({'key': self.api_key})}"
        req = urllib.request.Request(
            url,
            data=json.dumps(self._request_body(prompt)).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                data = json.loads(response.read().decode())
        except urllib.error.HTTPError as e:
            error_text = e.read().decode(errors="replace")
            logger.error(f"Gemini API error: {error_text}")
            logger.error(f"API URL used: {self.api_url}")
            raise GeminiAPIError(e.code, error_text) from e

        answer = extract_text(data)
        if answer == FALLBACK_RESPONSE:
            logger.warning("Gemini response had no candidate text, using fallback")
        return answer
