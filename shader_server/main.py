"""Text-to-Shader FastAPI server."""

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import shader_server
from shader_server import config
from shader_server.errors import ShaderGenerationError
from shader_server.models import (
    ErrorResponse,
    GenerateShaderRequest,
    GenerateShaderResponse,
    HealthResponse,
)
from shader_server.services.llm_service import ShaderGenerator

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Text-to-Shader",
    description="Generate WebGL vertex/fragment shader pairs from text descriptions",
    version=shader_server.__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_shader_generator() -> ShaderGenerator:
    return ShaderGenerator(config.get_llm_settings())


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


# ── Error Handlers ──────────────────────────────────────────────


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body') or 'body'}: {err['msg']}"
        for err in exc.errors()
    )
    return _error(f"Invalid request: {details}")


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    # Unknown routes and unsupported methods are both "not found"
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not found", status_code=404)
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


# ── REST Endpoints ──────────────────────────────────────────────


@app.get("/api/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        version=shader_server.__version__,
        providers={"gemini": bool(config.GOOGLE_API_KEY)},
    )


@app.post(
    "/api/generate-shader",
    response_model=GenerateShaderResponse,
    responses={400: {"model": ErrorResponse}},
)
async def generate_shader(
    req: GenerateShaderRequest,
    generator: ShaderGenerator = Depends(get_shader_generator),
):
    try:
        pair, _ = await generator.generate(req.prompt, req.model)
    except ShaderGenerationError as e:
        logger.warning(f"Shader generation failed: {e}")
        return _error(str(e))

    return GenerateShaderResponse.from_pair(pair)


# ── Main ────────────────────────────────────────────────────────


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "shader_server.main:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL,
    )
