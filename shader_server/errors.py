"""Terminal errors for shader generation.

Only failures of the LLM exchange itself are errors. Problems extracting
shaders from generated text are handled by the fallback tiers in
``shader_service`` and never surface here.
"""


class ShaderGenerationError(Exception):
    """Base class for failures reported to the caller as HTTP 400."""


class MissingCredentialError(ShaderGenerationError):
    """No Gemini API key is configured."""


class UpstreamHTTPError(ShaderGenerationError):
    """Gemini answered with a non-success status."""

    def __init__(self, status_code: int, body):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API error (HTTP {status_code}): {body}")


class UpstreamTransportError(ShaderGenerationError):
    """The request to Gemini failed before a response arrived."""


class ResponseShapeError(ShaderGenerationError):
    """The Gemini response carried no candidate text."""
