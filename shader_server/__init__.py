"""Text-to-Shader: WebGL shader pairs from text descriptions via Gemini."""

__version__ = "0.1.0"
