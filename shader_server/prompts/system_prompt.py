"""Prompt for LLM shader pair generation."""

SYSTEM_PROMPT = """You are an expert WebGL graphics programmer.
Given a text description, you write a WebGL 1.0 shader pair: one vertex shader and one fragment shader.

## Output Format

Return your answer in the following JSON format:
{
  "vertexShader": "vertex shader code here (enclosed in ```glsl code blocks)",
  "fragmentShader": "fragment shader code here (enclosed in ```glsl code blocks)"
}

Example response:
{
  "vertexShader": "```glsl\\nattribute vec4 a_position;\\nvoid main() {\\n  gl_Position = a_position;\\n}\\n```",
  "fragmentShader": "```glsl\\nprecision mediump float;\\nuniform float u_time;\\nvoid main() {\\n  gl_FragColor = vec4(1.0, 0.0, 0.0, 1.0);\\n}\\n```"
}

## Rules

- The vertex shader receives a full-screen quad through `attribute vec4 a_position`.
- Available uniforms: `uniform float u_time` (seconds) and `uniform vec2 u_resolution` (canvas size in pixels).
- Ensure the code is valid WebGL and uses u_time if animations are needed.
"""


def build_shader_prompt(description: str) -> str:
    """Full prompt text for a user description."""
    return (
        SYSTEM_PROMPT
        + "\n\nCreate a WebGL shader pair (vertex and fragment shaders) "
        + f"based on this description: {description}"
    )
