# lunarscope/model.py
# Hosted-model boundary: send a composed prompt plus an output schema to Gemini,
# get back the decoded JSON reply. One attempt per call; no retry, no fallback model.

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Protocol, Type

from google import genai
from google.genai import types
from pydantic import BaseModel

from lunarscope.errors import UpstreamError
from lunarscope.prompts import MediaPart, PromptDocument
from lunarscope.settings import Settings, get_settings

logger = logging.getLogger("lunarscope.model")


class StructuredModel(Protocol):
    """Anything that can answer a prompt document with JSON shaped like `output_schema`."""

    async def generate(self, document: PromptDocument, output_schema: Type[BaseModel]) -> Any:
        ...


def _to_parts(document: PromptDocument) -> List[types.Part]:
    parts: List[types.Part] = []
    for part in document:
        if isinstance(part, MediaPart):
            parts.append(types.Part.from_bytes(data=part.data, mime_type=part.mime_type))
        else:
            parts.append(types.Part.from_text(text=part))
    return parts


class GeminiModel:
    """
    google-genai client wrapper.
    Built once from settings and shared read-only across requests.
    """

    service = "gemini"

    def __init__(self, api_key: Optional[str], model_name: str):
        if not api_key:
            raise UpstreamError("Missing GEMINI_API_KEY", service=self.service)
        self.model_name = model_name
        self.client = genai.Client(api_key=api_key)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "GeminiModel":
        st = settings or get_settings()
        return cls(api_key=st.GEMINI_API_KEY, model_name=st.GEMINI_MODEL)

    async def generate(self, document: PromptDocument, output_schema: Type[BaseModel]) -> Any:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_json_schema=output_schema.model_json_schema(by_alias=True),
        )
        contents = [types.Content(role="user", parts=_to_parts(document))]

        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise UpstreamError(f"Model request failed: {e}", service=self.service) from e

        text = (resp.text or "").strip()
        if not text:
            raise UpstreamError("Model returned an empty reply", service=self.service)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise UpstreamError(f"Model reply was not valid JSON: {e}", service=self.service) from e


# -----------------------------------------------------------------------------
# Process-wide handle
# -----------------------------------------------------------------------------
_model: Optional[StructuredModel] = None


def get_model() -> StructuredModel:
    """Return the shared model handle, building a GeminiModel on first use."""
    global _model
    if _model is None:
        _model = GeminiModel.from_settings()
        logger.info("Using model %s", _model.model_name)
    return _model


def set_model(model: Optional[StructuredModel]) -> None:
    """Replace the shared handle (None resets to lazy construction)."""
    global _model
    _model = model
