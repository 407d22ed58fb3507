# core/llm.py
"""
Shared helpers for the Gemini-backed advisors
"""
import json
import logging
import re
from typing import Any, Dict, Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from core.config import get_settings
from core.exceptions import AdvisorError

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    "hi": "Hindi",
    "bn": "Bengali",
    "en": "English",
}

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")

def language_name(code: Optional[str]) -> str:
    """Prompt language for a language code, Hindi when unknown"""
    return LANGUAGE_NAMES.get((code or "").lower(), "Hindi")

def build_chat_model(model: str, temperature: float = 0.3) -> Optional[ChatGoogleGenerativeAI]:
    """Create a Gemini chat model, or None when no API key is configured"""
    api_key = get_settings().gemini_api_key
    if not api_key:
        logger.warning("No GEMINI_API_KEY found - AI advice is unavailable")
        return None

    return ChatGoogleGenerativeAI(
        model=model,
        temperature=temperature,
        google_api_key=api_key
    )

def extract_json_object(response_text: str) -> Optional[Dict[str, Any]]:
    """
    Pull the first JSON object out of a model response.

    Markdown code fences are stripped first. Returns None when the text holds
    no object at all; raises AdvisorError when it holds one that is not valid JSON.
    """
    cleaned_text = response_text.strip()
    if cleaned_text.startswith('```json'):
        cleaned_text = cleaned_text[7:]
    elif cleaned_text.startswith('```'):
        cleaned_text = cleaned_text[3:]
    if cleaned_text.endswith('```'):
        cleaned_text = cleaned_text[:-3]

    match = _JSON_BLOCK.search(cleaned_text)
    if not match:
        return None

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI response as JSON: {e}")
        logger.debug(f"Response text: {response_text[:500]}...")
        raise AdvisorError("AI response was not valid JSON") from e
