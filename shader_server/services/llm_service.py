"""LLM Service - Gemini API access for shader pair generation."""

import asyncio
import json
import logging
import time
from typing import Optional

import httpx
from google.genai import errors as genai_errors

from shader_server.config import LLMSettings, resolve_model
from shader_server.errors import (
    MissingCredentialError,
    ResponseShapeError,
    UpstreamHTTPError,
    UpstreamTransportError,
)
from shader_server.prompts.system_prompt import build_shader_prompt
from shader_server.services.shader_service import ResponseNormalizer, ShaderPair

logger = logging.getLogger(__name__)


def extract_candidate_text(response) -> str:
    """Return the generated text of the first candidate.

    Text parts are joined in order and thought parts are skipped. Raises
    ResponseShapeError when there is no candidate or it carries no text.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise ResponseShapeError("Gemini response contained no candidates")

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    text = "".join(
        part.text
        for part in parts
        if getattr(part, "text", None) and not getattr(part, "thought", False)
    )
    if not text:
        raise ResponseShapeError("Failed to extract text from Gemini response")
    return text


class ShaderGenerator:
    """Asks Gemini for a shader pair and normalizes whatever comes back."""

    def __init__(
        self,
        settings: LLMSettings,
        normalizer: Optional[ResponseNormalizer] = None,
        client=None,
    ):
        self.settings = settings
        self.normalizer = normalizer or ResponseNormalizer()
        self._client = client

    def _get_client(self):
        """Get or create the genai.Client (connection reuse)."""
        if self._client is None:
            from google import genai
            from google.genai import types

            self._client = genai.Client(
                api_key=self.settings.api_key,
                http_options=types.HttpOptions(
                    timeout=int(self.settings.timeout_seconds * 1000)
                ),
            )
            logger.info("Gemini client initialized")
        return self._client

    async def complete(self, prompt: str, model: Optional[str] = None) -> str:
        """Run one generateContent call and return the candidate text."""
        if not self.settings.api_key.strip():
            raise MissingCredentialError(
                "GOOGLE_API_KEY is not set. Configure a Gemini API key to generate shaders."
            )

        model_id = resolve_model(model) if model else self.settings.model_id
        client = self._get_client()

        try:
            response = await client.aio.models.generate_content(
                model=model_id,
                contents=build_shader_prompt(prompt),
                config=self.settings.generation.as_request(),
            )
        except genai_errors.APIError as e:
            body = json.dumps(e.details) if e.details is not None else e.message
            raise UpstreamHTTPError(e.code, body) from e
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            raise UpstreamTransportError(
                f"HTTP request to Gemini API failed: {e!r}. "
                "Make sure your API key is valid and has proper permissions."
            ) from e

        return extract_candidate_text(response)

    async def generate(
        self, prompt: str, model: Optional[str] = None
    ) -> tuple[ShaderPair, dict]:
        """Generate a shader pair from a text description.

        Returns (pair, metadata). Raises a ShaderGenerationError subclass
        only when the Gemini exchange itself fails.
        """
        t0 = time.perf_counter()
        text = await self.complete(prompt, model)
        elapsed = time.perf_counter() - t0

        pair = self.normalizer.normalize(text)
        metadata = {
            "model": resolve_model(model) if model else self.settings.model_id,
            "llm_time_s": round(elapsed, 3),
            "tier": pair.tier.value,
        }
        logger.info(
            f"Generated shader pair via {metadata['tier']} tier "
            f"({metadata['model']}, {metadata['llm_time_s']}s)"
        )
        return pair, metadata
