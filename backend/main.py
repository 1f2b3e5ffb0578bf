from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import Settings, get_settings
from backend.errors import AnalyzeError
from backend.routes import analyze, entries, processed
from backend.services.artifacts import ArtifactStore
from backend.services.entry_log import EntryLog
from backend.utils.logger import get_logger, setup_logging
from backend.utils.vision_client import VisionClient

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Menu Companion API",
        version="0.3.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.vision_client = VisionClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.vision_model,
        max_tokens=settings.max_tokens,
        timeout=settings.request_timeout,
    )
    app.state.artifacts = ArtifactStore(settings.uploads_dir, settings.processed_dir)
    app.state.entry_log = EntryLog(settings.entries_path)

    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is empty; /analyze will fail until it is set")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AnalyzeError)
    async def analyze_error_handler(request: Request, exc: AnalyzeError):
        logger.warning("%s %s -> %d %s (%s)", request.method, request.url.path,
                       exc.status_code, type(exc).__name__, exc.detail or exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # 프레임워크 오류(404, 요청 검증 실패)도 {"error": ...} 하나로 맞춘다
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, message)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("%s %s -> 422 invalid request: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=422, content={"error": "Invalid request"})

    app.include_router(analyze.router)
    app.include_router(entries.router)
    app.include_router(processed.router)

    @app.get("/")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
