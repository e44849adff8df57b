"""Gemini adapter for text generation.

Holds the process-wide client; services call ``generate_text`` and never talk
to the ``google-genai`` SDK directly.
"""

from typing import Optional
import logging

from google import genai

logger = logging.getLogger("foodplanner.gemini")

_client: Optional[genai.Client] = None
_model_name: Optional[str] = None


def configure(api_key: str, model_name: str = "gemini-2.5-flash") -> bool:
    """Create the client; an empty key leaves AI features disabled."""
    global _client, _model_name
    if not api_key:
        logger.warning("GEMINI_API_KEY not set; AI features are disabled")
        _client = None
        _model_name = None
        return False
    _client = genai.Client(api_key=api_key)
    _model_name = model_name
    logger.info("Gemini configured (model: %s)", model_name)
    return True


def is_configured() -> bool:
    return _client is not None


def generate_text(prompt: str) -> str:
    """Send ``prompt`` to the configured model and return the response text."""
    if not is_configured():
        raise RuntimeError("Gemini is not configured")
    response = _client.models.generate_content(model=_model_name, contents=prompt)
    return response.text or ""


def close():
    global _client, _model_name
    _client = None
    _model_name = None
