from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ui2code import __version__
from ui2code.agent.converter import Converter
from ui2code.config import Settings, get_settings, settings
from ui2code.llm.client import GeminiClient
from ui2code.loader.source_fetcher import SourceFetcher
from ui2code.logger import setup_logger
from ui2code.models import ErrorResponse, HealthResponse, parse_convert_request
from ui2code.utils.exceptions import ConfigurationError, ConverterError, InvalidRequestError

logger = setup_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

METHOD_NOT_ALLOWED = "Method not allowed"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager: startup and shutdown."""
    logger.info("🚀 Starting ui2code analyze service")
    logger.info(f"   Config: model={settings.gemini_model}, fetch_timeout={settings.fetch_timeout}s")
    if not settings.gemini_api_key:
        logger.warning("⚠️ GEMINI_API_KEY is not set; analyze requests will be rejected")
    app.state.http_client = httpx.AsyncClient(follow_redirects=True)
    yield
    logger.info("🛑 Shutting down service")
    await app.state.http_client.aclose()


app = FastAPI(title="ui2code", version=__version__, lifespan=lifespan)


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client created in ``lifespan``."""
    return request.app.state.http_client


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


def build_converter(settings: Settings, client: httpx.AsyncClient) -> Converter:
    gemini = GeminiClient(
        client,
        api_key=settings.gemini_api_key or "",
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.generation_timeout,
    )
    fetcher = SourceFetcher(client, timeout=settings.fetch_timeout)
    return Converter(settings, gemini=gemini, fetcher=fetcher)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.api_route("/api/analyze", methods=["POST", "OPTIONS"])
async def analyze(
    request: Request,
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Convert pasted code, a URL, or a screenshot into HTML, or edit HTML.

    Body: ``{type, code?, url?, imageBase64?, currentCode?, instruction?}``
    with ``type`` one of code, url, image, edit.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200)

    # Checked before the body is read so no mode reaches the network unconfigured
    if not settings.gemini_api_key:
        raise ConfigurationError("API key not configured on server")

    try:
        payload = await request.json()
    except ValueError:
        raise InvalidRequestError("Invalid JSON body")

    convert_request = parse_convert_request(payload)
    converter = build_converter(settings, http_client)

    try:
        result = await converter.convert(convert_request)
    except ConverterError:
        raise
    except Exception as e:
        logger.error(f"🔥 Unexpected Error: {e}", exc_info=True)
        return error_response(500, "Internal server error")

    return JSONResponse(status_code=200, content=result.to_wire())


@app.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        model=settings.gemini_model,
        configured=bool(settings.gemini_api_key),
    )


@app.exception_handler(ConverterError)
async def converter_exception_handler(request: Request, exc: ConverterError):
    """Handle custom application exceptions."""
    if exc.status_code >= 500:
        logger.error(f"🔥 Application Error: {exc.message}")
    else:
        logger.warning(f"⚠️ Rejected request: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Routing errors (unknown path, other verbs) in the same {error} shape."""
    message = METHOD_NOT_ALLOWED if exc.status_code == 405 else str(exc.detail)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


def run() -> None:
    uvicorn.run(
        "ui2code.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
