"""
Purpose:
- Composite the user's photo into a scene with one Gemini image call.
- Single attempt, no retry, no timeout: SDK/transport errors reach the caller unchanged.

Notes:
- Requires: settings.gemini_api_key (API_KEY / GEMINI_API_KEY in .env or env).
- The scene prompt goes into the instruction verbatim; it is model input, not code.
"""

from __future__ import annotations
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from ..core.settings import settings
from ..services.data_uri import payload_bytes, to_data_uri

logger = logging.getLogger(__name__)

INPUT_MIME_TYPE = "image/jpeg"
DEFAULT_OUTPUT_MIME_TYPE = "image/png"

INSTRUCTION_TEMPLATE = """
Transform this image.
Put the person from the input image into the following scene: "{scene}".

Instructions:
1. Preserve the person's facial features and likeness (identity) as much as possible.
2. Adjust the person's clothing and lighting to match the scene perfectly.
3. The style should be photorealistic.
4. Ensure high quality composition.
"""

class GenerationError(Exception):
    """Base class for failures that leave generation without an image."""

class GenerationConfigError(GenerationError):
    """Raised before any network call when the credential is missing."""

class NoImageProducedError(GenerationError):
    """The service answered but no candidate part carried image data."""

def build_instruction(scene_prompt: str) -> str:
    return INSTRUCTION_TEMPLATE.format(scene=scene_prompt)

def _first_inline_image(response: Any) -> Optional[str]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in (getattr(content, "parts", None) or []):
        blob = getattr(part, "inline_data", None)
        if blob is not None and blob.data:
            return to_data_uri(blob.data, blob.mime_type or DEFAULT_OUTPUT_MIME_TYPE)
    return None

class ImageGenerationClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 client: Optional[genai.Client] = None):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_image_model
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, image: str, scene_prompt: str) -> str:
        """
        Return the generated image as a data URI.
        `image` is a data URI or bare base64 payload of the user's photo.
        """
        if not self.api_key:
            raise GenerationConfigError("API Key is missing.")

        image_part = types.Part(
            inline_data=types.Blob(
                mime_type=INPUT_MIME_TYPE,
                data=payload_bytes(image),
            )
        )

        try:
            response = self._get_client().models.generate_content(
                model=self.model,
                contents=[
                    types.Content(
                        role="user",
                        parts=[types.Part(text=build_instruction(scene_prompt)), image_part],
                    )
                ],
            )
        except Exception:
            logger.exception("Gemini generate_content failed (model=%s)", self.model)
            raise

        result = _first_inline_image(response)
        if result is None:
            raise NoImageProducedError("No image generated.")
        return result

_CLIENT_SINGLETON: Optional[ImageGenerationClient] = None

def get_generation_client() -> ImageGenerationClient:
    """
    Return a cached client built from settings (FastAPI dependency).
    """
    global _CLIENT_SINGLETON
    if _CLIENT_SINGLETON is None:
        _CLIENT_SINGLETON = ImageGenerationClient()
    return _CLIENT_SINGLETON
