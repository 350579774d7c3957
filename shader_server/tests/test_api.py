"""Tests for FastAPI endpoints (no LLM calls)."""

import pytest
from fastapi.testclient import TestClient

from shader_server.errors import ResponseShapeError, UpstreamHTTPError
from shader_server.main import app, get_shader_generator
from shader_server.services.shader_service import ShaderPair

client = TestClient(app)


class FakeGenerator:
    def __init__(self, pair=None, error=None):
        self.pair = pair
        self.error = error
        self.prompts = []

    async def generate(self, prompt, model=None):
        self.prompts.append((prompt, model))
        if self.error is not None:
            raise self.error
        return self.pair, {"tier": "json"}


@pytest.fixture
def use_generator():
    def install(generator):
        app.dependency_overrides[get_shader_generator] = lambda: generator
        return generator

    yield install
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    def test_health(self):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert "version" in data
        assert "gemini" in data["providers"]


class TestGenerateShaderEndpoint:
    def test_success(self, use_generator):
        generator = use_generator(FakeGenerator(pair=ShaderPair("VERT", "FRAG")))
        resp = client.post("/api/generate-shader", json={"prompt": "a sunset"})
        assert resp.status_code == 200
        assert resp.json() == {
            "success": True,
            "vertexShader": "VERT",
            "fragmentShader": "FRAG",
            "shaderCode": "// Vertex Shader\nVERT\n\n// Fragment Shader\nFRAG",
        }
        assert generator.prompts == [("a sunset", None)]

    def test_model_passed_through(self, use_generator):
        generator = use_generator(FakeGenerator(pair=ShaderPair("V", "F")))
        client.post("/api/generate-shader", json={"prompt": "waves", "model": "pro"})
        assert generator.prompts == [("waves", "pro")]

    def test_upstream_error(self, use_generator):
        use_generator(FakeGenerator(error=UpstreamHTTPError(500, "internal")))
        resp = client.post("/api/generate-shader", json={"prompt": "a sunset"})
        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "error": "Gemini API error (HTTP 500): internal",
        }

    def test_empty_candidate_text(self, use_generator):
        use_generator(FakeGenerator(error=ResponseShapeError("Failed to extract text from Gemini response")))
        resp = client.post("/api/generate-shader", json={"prompt": "a sunset"})
        assert resp.status_code == 400
        data = resp.json()
        assert data["success"] is False
        assert "Failed to extract text" in data["error"]

    def test_missing_prompt(self, use_generator):
        use_generator(FakeGenerator(pair=ShaderPair("V", "F")))
        resp = client.post("/api/generate-shader", json={})
        assert resp.status_code == 400
        data = resp.json()
        assert data["success"] is False
        assert "prompt" in data["error"]

    def test_blank_prompt(self, use_generator):
        generator = use_generator(FakeGenerator(pair=ShaderPair("V", "F")))
        resp = client.post("/api/generate-shader", json={"prompt": "   "})
        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert generator.prompts == []

    def test_malformed_body(self, use_generator):
        use_generator(FakeGenerator(pair=ShaderPair("V", "F")))
        resp = client.post(
            "/api/generate-shader",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["success"] is False


class TestNotFound:
    def test_unknown_route(self):
        resp = client.get("/api/nothing-here")
        assert resp.status_code == 404
        assert resp.text == "Not found"

    def test_wrong_method(self):
        resp = client.get("/api/generate-shader")
        assert resp.status_code == 404


class TestCors:
    def test_allowed_origin(self):
        resp = client.options(
            "/api/generate-shader",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
