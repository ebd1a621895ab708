"""
Tavily Search - FastAPI application (JSON-RPC over HTTP).
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .config import SERVER_NAME, SERVER_VERSION, configure_logging, get_settings
from .dispatcher import Dispatcher, build_dispatcher
from .errors import ConfigurationError
from .mcp.server import invalid_request_handler, router as mcp_router
from .tools import get_all_tools

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the dispatcher if none was injected, list the tools, close on shutdown."""
    if app.state.dispatcher is None:
        # `uvicorn tavilysearch.main:app` does not go through run()
        settings = get_settings()
        configure_logging(settings.log_level)
        app.state.dispatcher = build_dispatcher(settings)

    logger.info("🚀 %s %s starting...", SERVER_NAME, SERVER_VERSION)
    tools = get_all_tools()
    logger.info("✅ Loaded %d tools", len(tools))
    for t in tools:
        logger.info("   - %s", t.name)

    yield

    await app.state.dispatcher.aclose()


def create_app(dispatcher: Optional[Dispatcher] = None) -> FastAPI:
    """
    Build the app. Without a dispatcher one is wired from the environment
    at startup, which fails if TAVILY_API_KEY is missing.
    """
    app = FastAPI(
        lifespan=lifespan,
        title="Tavily Search MCP",
        description="Tavily web search, RAG context and QnA exposed as MCP tools",
        version=SERVER_VERSION
    )
    app.state.dispatcher = dispatcher

    # Include MCP router
    app.include_router(mcp_router)
    app.add_exception_handler(RequestValidationError, invalid_request_handler)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": SERVER_NAME,
            "version": SERVER_VERSION,
            "status": "operational"
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the HTTP surface with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error("%s", e.message)
        raise SystemExit(1) from e

    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
