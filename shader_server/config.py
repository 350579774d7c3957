"""Configuration for the Text-to-Shader server."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

# LLM API Key
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "") or os.getenv("GEMINI_API_KEY", "")

# LLM Models
GEMINI_MODELS = {
    "flash": "gemini-2.5-flash",
    "pro": "gemini-2.5-pro",
}

DEFAULT_MODEL = os.getenv("GEMINI_MODEL", "flash")

# Generation settings (passed through to generateContent)
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
GENERATION_TOP_K = int(os.getenv("GENERATION_TOP_K", "40"))
GENERATION_TOP_P = float(os.getenv("GENERATION_TOP_P", "0.95"))
GENERATION_MAX_OUTPUT_TOKENS = int(os.getenv("GENERATION_MAX_OUTPUT_TOKENS", "1024"))

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Server
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 1024

    def as_request(self) -> dict:
        """Generation config in the shape google-genai accepts."""
        return {
            "temperature": self.temperature,
            "top_k": self.top_k,
            "top_p": self.top_p,
            "max_output_tokens": self.max_output_tokens,
        }


@dataclass(frozen=True)
class LLMSettings:
    api_key: str = ""
    model: str = "flash"
    timeout_seconds: float = 30.0
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    @property
    def model_id(self) -> str:
        return resolve_model(self.model)


def resolve_model(model: str) -> str:
    """Map a short alias ("flash", "pro") to a Gemini model id."""
    return GEMINI_MODELS.get(model, model)


def get_llm_settings() -> LLMSettings:
    """Snapshot the environment-derived LLM settings."""
    return LLMSettings(
        api_key=GOOGLE_API_KEY,
        model=DEFAULT_MODEL,
        timeout_seconds=HTTP_TIMEOUT_SECONDS,
        generation=GenerationConfig(
            temperature=GENERATION_TEMPERATURE,
            top_k=GENERATION_TOP_K,
            top_p=GENERATION_TOP_P,
            max_output_tokens=GENERATION_MAX_OUTPUT_TOKENS,
        ),
    )
