import base64
import logging
from typing import Optional
from datetime import datetime, timezone

from google import genai
from google.genai import types

from ..settings import settings

logger = logging.getLogger("precision_baker.ai")


class AIServiceError(Exception):
    """Gemini call failed or returned nothing usable."""


class AIUnavailableError(AIServiceError):
    """AI is disabled (mock mode) or no API key is configured."""


# Recipe text trips the default filters now and then; only block high-risk content.
SAFETY_SETTINGS = [
    types.SafetySetting(category=category, threshold="BLOCK_ONLY_HIGH")
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]


def normalize_model_id(model_string: str) -> str:
    """
    Sanitizes a model string to be SDK-compatible.

    Examples:
    - 'model="gemini-1.5-pro-latest"' -> 'gemini-1.5-pro-latest'
    - '"gemini-1.5-flash"' -> 'gemini-1.5-flash'
    """
    if not model_string:
        return model_string

    s = model_string.strip()
    if s.lower().startswith("model="):
        s = s[6:]
    return s.strip("\"'").strip()


def decode_image(image: str) -> tuple[bytes, str]:
    """Split a base64 image (optionally a data: URL) into (bytes, mime type)."""
    mime_type = "image/png" if "image/png" in image else "image/jpeg"
    data = image.split("base64,", 1)[1] if "base64," in image else image
    try:
        return base64.b64decode(data, validate=True), mime_type
    except ValueError as e:
        raise AIServiceError(f"Invalid base64 image data: {e}")


class AIClient:
    _instance = None

    def __init__(self):
        self.api_key = settings.gemini_api_key
        self.mode = settings.ai_mode  # "mock" or "gemini"
        self._client: Optional[genai.Client] = None
        self.last_error: Optional[str] = None
        self.last_error_at: Optional[datetime] = None

        if self.mode == "gemini" and self.api_key:
            self._client = genai.Client(api_key=self.api_key)

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def is_available(self) -> bool:
        return self.mode == "gemini" and self._client is not None

    def _record_error(self, e: Exception):
        self.last_error = f"{e.__class__.__name__}: {str(e)}"
        self.last_error_at = datetime.now(timezone.utc)

    def _generate(self, contents, model: str) -> str:
        if not self.is_available():
            raise AIUnavailableError(f"AI is not available (mode={self.mode})")

        model_id = normalize_model_id(model)
        try:
            response = self._client.models.generate_content(
                model=model_id,
                contents=contents,
                config=types.GenerateContentConfig(safety_settings=SAFETY_SETTINGS),
            )
        except Exception as e:
            self._record_error(e)
            logger.error(f"Gemini generation failed (model={model_id}): {e}")
            raise AIServiceError(str(e)) from e

        if not response.text:
            logger.warning("Gemini returned empty response")
            raise AIServiceError("Empty response from AI service")
        return response.text

    def generate_text(self, prompt: str, model: Optional[str] = None) -> str:
        """Plain-text completion. Raises AIServiceError on any failure."""
        return self._generate(prompt, model or settings.gemini_text_model)

    def generate_from_image(self, prompt: str, image: str, model: Optional[str] = None) -> str:
        """Prompt the vision model with a base64 image."""
        data, mime_type = decode_image(image)
        contents = [prompt, types.Part.from_bytes(data=data, mime_type=mime_type)]
        return self._generate(contents, model or settings.gemini_vision_model)


# Singleton instance access
ai_client = AIClient.get_instance()
