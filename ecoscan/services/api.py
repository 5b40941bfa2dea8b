import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from ecoscan.orchestrator.contracts import ANALYZE_PATH
from ecoscan.orchestrator.errors import (
    ERR_NO_IMAGE, MSG_ANALYZE_FAILED, MSG_NO_IMAGE, UpstreamError,
)
from ecoscan.services.analysis import AnalysisService
from ecoscan.services.config import Config
from ecoscan.services.models import (
    AnalysisPayload, ErrorPayload, HealthResponse, StatusResponse,
)
from ecoscan.services.status_store import StatusStore

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def make_vision(config: Config, status: StatusStore):
    # VISION_ADAPTER: openai | claude | mock  (default: openai)
    if config.vision_adapter == "claude":
        from ecoscan.adapters.vision.claude_vision import ClaudeVision
        return ClaudeVision(status, config)
    if config.vision_adapter == "mock":
        from ecoscan.adapters.vision.mock_vision import MockVision
        return MockVision(status)
    if config.vision_adapter != "openai":
        status.log(f"vision: unknown adapter '{config.vision_adapter}', using openai")
    from ecoscan.adapters.vision.openai_vision import OpenAIVision
    return OpenAIVision(status, config)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorPayload(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def create_app(config: Config | None = None, vision=None, status: StatusStore | None = None) -> FastAPI:
    config = config or Config.from_env()
    status = status or StatusStore()
    vision = vision or make_vision(config, status)
    service = AnalysisService(vision, status)
    status.log(f"vision adapter: {type(vision).__name__}")

    app = FastAPI(title="ecoscan analysis service")
    app.state.config = config
    app.state.status = status
    app.state.service = service

    @app.middleware("http")
    async def cors(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.options(ANALYZE_PATH)
    async def analyze_preflight():
        return Response(status_code=200)

    @app.post(
        ANALYZE_PATH,
        response_model=AnalysisPayload,
        responses={400: {"model": ErrorPayload}, 500: {"model": ErrorPayload}},
    )
    async def analyze_image(request: Request):
        try:
            body = await request.json()
        except ValueError:
            body = None
        image = body.get("image") if isinstance(body, dict) else None
        if not image or not isinstance(image, str):
            status.log(f"ANALYZE rejected [{ERR_NO_IMAGE}]: no image")
            return _error(400, MSG_NO_IMAGE)

        status.log("ANALYZE received")
        try:
            payload = await service.analyze(image)
        except UpstreamError as e:
            status.last_error = str(e)
            status.log(f"ANALYZE upstream failure [{e.code}]: {e}")
            return _error(500, MSG_ANALYZE_FAILED, str(e) or "Upstream provider error")
        except Exception as e:
            status.last_error = str(e)
            status.log(f"ANALYZE error {type(e).__name__}: {e}")
            return _error(500, MSG_ANALYZE_FAILED, str(e) or type(e).__name__)

        return JSONResponse(content=AnalysisPayload.model_validate(payload).model_dump())

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            ok=True,
            vision_adapter=type(service.vision).__name__,
            provider_key_set=config.provider_key_set(),
        )

    @app.get("/status", response_model=StatusResponse)
    async def get_status():
        return StatusResponse(
            requests=status.requests,
            last_object=status.last_object,
            last_error=status.last_error,
            logs=status.logs,
        )

    return app


def main():
    config = Config.from_env()
    host, _, port = config.service_url.split("://", 1)[-1].partition(":")
    uvicorn.run(create_app(config), host=host or "127.0.0.1", port=int(port or 8000))


if __name__ == "__main__":
    main()
