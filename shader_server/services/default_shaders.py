"""Fallback shaders used wherever the LLM output leaves a gap."""

from dataclasses import dataclass

DEFAULT_VERTEX_SHADER = """attribute vec4 a_position;
void main() {
  gl_Position = a_position;
}
"""

DEFAULT_FRAGMENT_SHADER = """precision mediump float;
uniform float u_time;
uniform vec2 u_resolution;

void main() {
  vec2 uv = gl_FragCoord.xy / u_resolution;
  gl_FragColor = vec4(uv.x, uv.y, sin(u_time) * 0.5 + 0.5, 1.0);
}
"""


@dataclass(frozen=True)
class DefaultShaders:
    vertex: str = DEFAULT_VERTEX_SHADER
    fragment: str = DEFAULT_FRAGMENT_SHADER
