"""Shader Service - turns free-form LLM output into a vertex/fragment pair.

The LLM is asked for ``{"vertexShader": ..., "fragmentShader": ...}`` but
regularly answers with prose, markdown fences, a single shader or nothing
usable at all. Normalization runs three tiers in a fixed order and stops at
the first one that yields a result:

1. JSON tier: decode the widest ``{...}`` span and read the shader keys.
2. Regex tier: look for "vertex shader" / "fragment shader" headings
   followed by fenced code blocks.
3. Default tier: fill whatever is still missing from ``DefaultShaders``.

Normalization never raises. Problems in the first tiers are returned as
values and only decide which tier runs next.
"""

import enum
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from shader_server.services.default_shaders import DefaultShaders

logger = logging.getLogger(__name__)

VERTEX_KEY = "vertexShader"
FRAGMENT_KEY = "fragmentShader"

# "glsl" may share a line with code; any other tag must end its line
_FENCE_TAG = r"(?:glsl\b|[a-z0-9_+-]+[ \t]*(?=\r?\n))?"

_LEADING_FENCE = re.compile(rf"\A```{_FENCE_TAG}\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```\Z")

_VERTEX_SECTION = re.compile(
    rf"vertex shader:?[\s\S]*?```{_FENCE_TAG}\s*([\s\S]*?)```", re.IGNORECASE
)
_FRAGMENT_SECTION = re.compile(
    rf"fragment shader:?[\s\S]*?```{_FENCE_TAG}\s*([\s\S]*?)```", re.IGNORECASE
)


class ShaderTier(str, enum.Enum):
    JSON = "json"
    REGEX = "regex"
    DEFAULT = "default"


class ShaderShape(enum.Enum):
    BOTH = "both"
    VERTEX_ONLY = "vertex_only"
    FRAGMENT_ONLY = "fragment_only"
    NEITHER = "neither"


@dataclass(frozen=True)
class ShaderPair:
    vertex: str
    fragment: str
    tier: ShaderTier = field(default=ShaderTier.JSON, compare=False)


@dataclass(frozen=True)
class DecodeResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ShaderCandidate:
    """Decoded JSON payload reduced to the shader fields that are usable."""

    shape: ShaderShape
    vertex: Optional[str] = None
    fragment: Optional[str] = None


@dataclass(frozen=True)
class ParseResult:
    pair: Optional[ShaderPair] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.pair is not None


# ── Tier building blocks ─────────────────────────────────────────


def clean_shader_code(code: str) -> str:
    """Strip markdown code fences and surrounding whitespace.

    Stripping repeats until nothing changes, so the result is always a
    fixed point: ``clean_shader_code(clean_shader_code(s)) == clean_shader_code(s)``.
    """
    cleaned = code.strip()
    while True:
        stripped = _LEADING_FENCE.sub("", cleaned, count=1)
        stripped = _TRAILING_FENCE.sub("", stripped, count=1).strip()
        if stripped == cleaned:
            return cleaned
        cleaned = stripped


def locate_json_block(text: str) -> Optional[str]:
    """Return the span from the first ``{`` to the last ``}``, or None.

    This is deliberately the widest span, not a balanced match. Prose with
    stray braces can yield a span that fails to decode; the regex tier
    covers that case.
    """
    start = text.find("{")
    if start == -1:
        return None
    end = text.rfind("}")
    if end < start:
        return None
    return text[start : end + 1]


def decode_json_block(span: str) -> DecodeResult:
    try:
        return DecodeResult(ok=True, value=json.loads(span))
    except (ValueError, RecursionError) as e:
        return DecodeResult(ok=False, error=f"parse error: {e}")


def _usable_shader(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = clean_shader_code(value)
    return cleaned or None


def classify_candidate(obj: Any) -> ShaderCandidate:
    """Decide once which shader fields of a decoded payload are usable.

    A field is usable when it is a string that is non-empty after fence
    cleaning.
    """
    if not isinstance(obj, dict):
        return ShaderCandidate(ShaderShape.NEITHER)

    vertex = _usable_shader(obj.get(VERTEX_KEY))
    fragment = _usable_shader(obj.get(FRAGMENT_KEY))

    if vertex is not None and fragment is not None:
        return ShaderCandidate(ShaderShape.BOTH, vertex, fragment)
    if vertex is not None:
        return ShaderCandidate(ShaderShape.VERTEX_ONLY, vertex=vertex)
    if fragment is not None:
        return ShaderCandidate(ShaderShape.FRAGMENT_ONLY, fragment=fragment)
    return ShaderCandidate(ShaderShape.NEITHER)


def parse_shader_json(span: str, defaults: DefaultShaders) -> ParseResult:
    """Decode a JSON span and project it onto a shader pair.

    Missing halves are filled from ``defaults``. Returns a failed result
    for undecodable spans ("parse error") and for payloads without any
    usable shader field ("shape error").
    """
    decoded = decode_json_block(span)
    if not decoded.ok:
        return ParseResult(error=decoded.error)

    candidate = classify_candidate(decoded.value)
    if candidate.shape is ShaderShape.BOTH:
        pair = ShaderPair(candidate.vertex, candidate.fragment)
    elif candidate.shape is ShaderShape.VERTEX_ONLY:
        pair = ShaderPair(candidate.vertex, defaults.fragment)
    elif candidate.shape is ShaderShape.FRAGMENT_ONLY:
        pair = ShaderPair(defaults.vertex, candidate.fragment)
    else:
        return ParseResult(error="shape error: no usable shader fields")
    return ParseResult(pair=pair)


def _search_section(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if match is None:
        return None
    return clean_shader_code(match.group(1)) or None


def extract_shaders_with_regex(text: str, defaults: DefaultShaders) -> ShaderPair:
    """Pull fenced blocks that follow "vertex shader" / "fragment shader".

    Both searches are independent; whichever is not found falls back to
    the default shader.
    """
    vertex = _search_section(_VERTEX_SECTION, text)
    fragment = _search_section(_FRAGMENT_SECTION, text)
    if vertex is None:
        logger.debug("No vertex shader section found, using default")
    if fragment is None:
        logger.debug("No fragment shader section found, using default")
    tier = ShaderTier.DEFAULT if vertex is None and fragment is None else ShaderTier.REGEX
    return ShaderPair(
        vertex if vertex is not None else defaults.vertex,
        fragment if fragment is not None else defaults.fragment,
        tier=tier,
    )


# ── Entry point ──────────────────────────────────────────────────


class ResponseNormalizer:
    """Runs the JSON, regex and default tiers over generated text."""

    def __init__(self, defaults: Optional[DefaultShaders] = None):
        self.defaults = defaults or DefaultShaders()

    def normalize(self, text: str) -> ShaderPair:
        span = locate_json_block(text)
        if span is None:
            logger.debug("No JSON object in response, trying regex extraction")
        else:
            result = parse_shader_json(span, self.defaults)
            if result.ok:
                return result.pair
            logger.debug(f"JSON tier failed ({result.error}), trying regex extraction")

        return extract_shaders_with_regex(text, self.defaults)


_default_normalizer = ResponseNormalizer()


def normalize(text: str) -> ShaderPair:
    """Normalize generated text with the built-in default shaders."""
    return _default_normalizer.normalize(text)


def format_shader_code(pair: ShaderPair) -> str:
    """Both shaders in one listing, each under a comment header."""
    return (
        f"// Vertex Shader\n{pair.vertex}\n\n"
        f"// Fragment Shader\n{pair.fragment}"
    )
