from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config.settings import Settings, get_settings
from relay.errors import GENERIC_ERROR_MESSAGE, RelayError
from relay.models import ErrorResponse, GenerationResponse
from relay.relay import ChatRelay
from relay.services import GeminiGenerationService, GenerationService


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("willy")

STATUS_MESSAGE = (
    "Servidor Proxy de Willy Dragoncin en funcionamiento. "
    "Usa el endpoint /generate para chatear."
)


def build_service(settings: Settings) -> Optional[GenerationService]:
    if not settings.api_key_configured:
        logger.error("FATAL: the GEMINI_API_KEY environment variable is not set.")
        return None
    return GeminiGenerationService(settings.gemini_api_key, timeout=settings.request_timeout)


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[GenerationService] = None,
) -> FastAPI:
    settings = settings or get_settings()
    if service is None:
        service = build_service(settings)
    relay = ChatRelay(settings, service)

    app = FastAPI(title="Willy Dragoncin Chat Proxy", version="1.0.0")
    app.state.relay = relay

    # Frontend is served from arbitrary origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        body = ErrorResponse(error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @app.post(
        "/generate",
        response_model=GenerationResponse,
        responses={code: {"model": ErrorResponse} for code in (400, 401, 429, 500)},
    )
    async def generate(request: Request) -> GenerationResponse:
        try:
            payload = await request.json()
        except ValueError:
            payload = None

        try:
            return await relay.handle(payload)
        except RelayError:
            raise
        except Exception as e:
            logger.exception("Chat processing failed: %s", e)
            body = ErrorResponse(error=GENERIC_ERROR_MESSAGE)
            return JSONResponse(status_code=500, content=body.model_dump())

    @app.get("/", response_class=PlainTextResponse)
    def status() -> str:
        return STATUS_MESSAGE

    logger.info(
        "Config: env=%s model=%s key_set=%s",
        settings.app_env,
        settings.gemini_model,
        "yes" if settings.api_key_configured else "no",
    )
    return app


app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("Server listening on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
