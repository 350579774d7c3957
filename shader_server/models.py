"""Pydantic models for the Text-to-Shader API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shader_server.services.shader_service import ShaderPair, format_shader_code


class GenerateShaderRequest(BaseModel):
    prompt: str = Field(..., description="Text description of the shader effect")
    model: Optional[str] = Field(
        None, description="Gemini model alias (flash, pro) or full model id"
    )

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class GenerateShaderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    vertex_shader: str = Field(..., alias="vertexShader")
    fragment_shader: str = Field(..., alias="fragmentShader")
    shader_code: str = Field(..., alias="shaderCode")

    @classmethod
    def from_pair(cls, pair: ShaderPair) -> "GenerateShaderResponse":
        return cls(
            vertex_shader=pair.vertex,
            fragment_shader=pair.fragment,
            shader_code=format_shader_code(pair),
        )


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = ""
    providers: dict = {}
