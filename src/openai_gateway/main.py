"""
OpenAI Gateway Service

A FastAPI service exposing summarization, transcription, question
answering and image text extraction on top of the OpenAI HTTP API:
- Paragraph summaries
- Transcript summaries for uploaded audio files
- Answers for typed or spoken questions
- Text extraction from base64 images
"""

import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource

from .api.routes import router, set_dependencies
from .core.config import GatewayConfig, load_config
from .core.errors import ConfigurationError
from .service import GatewayService

logger = logging.getLogger(__name__)


def _setup_tracing(endpoint: str) -> None:
    resource = Resource.create({"service.name": "openai-gateway"})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)


def create_app(
    config: Optional[GatewayConfig] = None,
    service: Optional[GatewayService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Gateway configuration; loaded from file and environment if None
        service: Prebuilt gateway service; built from ``config`` if None
    """
    config = config or load_config()
    logging.basicConfig(level=config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        if config.otel_endpoint:
            _setup_tracing(config.otel_endpoint)

        gateway_service = service
        if gateway_service is None:
            try:
                config.provider.require_api_key()
                gateway_service = GatewayService.from_config(config.provider)
            except ConfigurationError as e:
                logger.error(f"Configuration error: {e.message}")
                if config.strict_startup:
                    raise
                logger.warning("Starting without a provider; API routes will return 503")

        app.state.service = gateway_service
        set_dependencies(gateway_service)
        logger.info("OpenAI gateway service started")
        yield

        set_dependencies(None)
        if gateway_service:
            await gateway_service.close()
        logger.info("OpenAI gateway service stopped")

    app = FastAPI(
        title="OpenAI Gateway",
        description="Summaries, transcriptions and answers via the OpenAI API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        gateway_service = getattr(app.state, "service", None)
        adapter_status = await gateway_service.adapter.health_check() if gateway_service else {}
        healthy = bool(adapter_status.get("healthy"))
        payload = {
            "status": "healthy" if healthy else "unhealthy",
            "provider": config.provider.name,
            "configured": config.provider.is_configured,
            "connected": bool(adapter_status.get("connected")),
        }
        if not healthy:
            return JSONResponse(status_code=503, content=payload)
        return payload

    FastAPIInstrumentor.instrument_app(app)
    app.include_router(router)
    return app


def run() -> None:
    """Console entry point."""
    import uvicorn

    config = load_config()
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    run()
