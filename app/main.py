"""
FastAPI application for the Code Complexity Analyzer.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import logger, settings
from app.models import (
    AIResponse,
    AnalyzeRequest,
    ClientErrorResponse,
    ErrorResponse,
    HeuristicResponse,
)
from core.analyzer import CodeComplexityAnalyzer, ComplexityBackend, HeuristicAnalyzer
from providers.base import ProviderUnavailableError
from providers.gemini_provider import gemini_provider


ANALYZE_PATH = "/api/ai/analyze/complexity"
AI_ANALYZE_PATH = "/api/ai/analyze/complexity/ai"

_heuristic_backend = HeuristicAnalyzer()
_model_backend = CodeComplexityAnalyzer()


def get_heuristic_backend() -> ComplexityBackend:
    return _heuristic_backend


def get_model_backend() -> ComplexityBackend:
    return _model_backend


def _request_id() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S-%f")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Code Complexity Analyzer v%s starting", __version__)
    logger.info("Server: %s:%d", settings.HOST, settings.PORT)
    if gemini_provider.is_available():
        logger.info("AI analysis enabled (model=%s)", gemini_provider.get_model_name())
    else:
        logger.warning("GEMINI_API_KEY not set; %s will fail until provided", AI_ANALYZE_PATH)

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Code Complexity Analyzer",
    description="Estimate time and space complexity of code snippets",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject bad payloads with 400 without echoing the submitted code."""
    errors = exc.errors()
    message = "code is required"
    if any(err.get("type") == "string_too_long" for err in errors):
        message = f"code exceeds {settings.MAX_CODE_LENGTH} characters"
    error_details = [
        {"field": err.get("loc", [])[-1] if err.get("loc") else "unknown", "type": err.get("type")}
        for err in errors[:5]
    ]
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, error_details)
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all that logs without request bodies."""
    logger.error(
        "Unhandled exception on %s %s: %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc)[:200],
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


async def request_size_middleware(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH"):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > settings.MAX_REQUEST_SIZE:
            return JSONResponse(
                status_code=413,
                content={
                    "error": "request_too_large",
                    "message": f"Request body exceeds {settings.MAX_REQUEST_SIZE} bytes",
                },
            )
    return await call_next(request)


app.middleware("http")(request_size_middleware)

cors_origins = settings.cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Code Complexity Analyzer API",
        "version": __version__,
        "ai": "configured" if gemini_provider.is_available() else "unconfigured",
        "model": gemini_provider.get_model_name(),
        "endpoints": {
            ANALYZE_PATH: "POST - Heuristic complexity analysis",
            AI_ANALYZE_PATH: "POST - Gemini complexity analysis",
            "/api/health": "GET - Health check",
        },
    }


@app.get("/api/health")
async def health():
    """Health check."""
    return {"ok": True}


@app.post(
    ANALYZE_PATH,
    response_model=HeuristicResponse,
    responses={400: {"model": ClientErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_code(
    request: AnalyzeRequest,
    backend: ComplexityBackend = Depends(get_heuristic_backend),
):
    """
    Heuristic analysis.

    The verdict is returned as a JSON string under ``result``.
    """
    request_id = _request_id()
    start_time = time.time()
    logger.info("[%s] REQUEST RECEIVED - Code length: %d chars", request_id, len(request.code))

    try:
        result = await backend.analyze(request.code, request.model)
    except Exception as exc:
        logger.error("[%s] Analyze error: %s", request_id, exc)
        return JSONResponse(status_code=500, content={"error": "Failed to analyze the code."})

    elapsed_time = time.time() - start_time
    logger.info(
        "[%s] REQUEST COMPLETED - Time taken: %.3fs - Result: %s, %s",
        request_id,
        elapsed_time,
        result.timeComplexityType.value,
        result.spaceComplexityType.value,
    )
    return HeuristicResponse(result=result.model_dump_json())


@app.post(
    AI_ANALYZE_PATH,
    response_model=AIResponse,
    responses={400: {"model": ClientErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_code_ai(
    request: AnalyzeRequest,
    backend: ComplexityBackend = Depends(get_model_backend),
):
    """
    Model-backed analysis.

    A reply that is not JSON still returns 200 with ``{error, raw}``
    under ``result``; provider failures return 500.
    """
    request_id = _request_id()
    start_time = time.time()
    logger.info("[%s] AI REQUEST RECEIVED - Code length: %d chars", request_id, len(request.code))

    try:
        result = await backend.analyze(request.code, request.model)
    except ProviderUnavailableError as exc:
        logger.error("[%s] AI analyze error: %s", request_id, exc)
        return JSONResponse(status_code=500, content={"error": "Missing GEMINI_API_KEY on the backend."})
    except Exception as exc:
        logger.error("[%s] AI analyze error: %s", request_id, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to analyze with AI.", "message": str(exc)},
        )

    elapsed_time = time.time() - start_time
    logger.info("[%s] AI REQUEST COMPLETED - Time taken: %.3fs", request_id, elapsed_time)
    return AIResponse(result=result)
