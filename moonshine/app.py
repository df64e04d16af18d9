"""
Moonshine FastAPI Application

HTTP adapter over the same tool registry the MCP server exposes.
Every tool is callable at ``POST /tools/{name}`` and answers with the
ToolResult envelope.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from moonshine import __version__
from moonshine.config import Config
from moonshine.models.result import ErrorKind
from moonshine.services.engine import MoonshineEngine
from moonshine.tools.dispatcher import ToolDispatcher
from moonshine.tools.registry import TOOLS_BY_NAME
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 422,
    ErrorKind.PERMISSION: 403,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.INTERNAL: 500,
}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    engine_initialized: bool
    read_only: bool
    db_path: str


class ToolInfo(BaseModel):
    """Tool listing entry."""

    name: str
    description: str
    input_schema: dict[str, Any]


def create_app(config: Config | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Configuration (default: loaded from environment)

    Returns:
        FastAPI app whose lifespan opens and closes the engine
    """
    config = config or Config.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown."""
        logger.info("Starting Moonshine HTTP server")
        engine = MoonshineEngine(config)
        await engine.initialize()
        app.state.engine = engine
        app.state.dispatcher = ToolDispatcher(engine)

        yield

        logger.info("Shutting down Moonshine HTTP server")
        app.state.dispatcher = None
        await engine.close()
        logger.info("Cleanup complete")

    app = FastAPI(
        title="Moonshine API",
        description="Knowledge store tools: mashes, edges, keyword and semantic search",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.engine = None
    app.state.dispatcher = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_dispatcher(request: Request) -> ToolDispatcher:
        dispatcher = request.app.state.dispatcher
        if dispatcher is None:
            raise HTTPException(status_code=503, detail="Engine not initialized")
        return dispatcher

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Moonshine API",
            "version": __version__,
            "description": "Knowledge store tools: mashes, edges, keyword and semantic search",
            "docs": "/docs",
            "health": "/health",
            "tools": "/tools",
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint."""
        engine = request.app.state.engine
        return HealthResponse(
            status="healthy" if engine else "initializing",
            engine_initialized=engine is not None,
            read_only=config.storage.read_only,
            db_path=config.storage.db_path,
        )

    @app.get("/tools", response_model=list[ToolInfo])
    async def list_tools(request: Request):
        """List every tool with its argument schema."""
        dispatcher = get_dispatcher(request)
        return [
            ToolInfo(
                name=tool.name, description=tool.description, input_schema=tool.input_schema()
            )
            for tool in dispatcher.list_tools()
        ]

    @app.post("/tools/{name}")
    async def call_tool(name: str, request: Request):
        """
        Call a tool.

        The body is the tool's argument object (may be empty). The response
        is the ToolResult envelope; its error kind decides the status code.
        """
        dispatcher = get_dispatcher(request)
        if name not in TOOLS_BY_NAME:
            raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")

        body = await request.body()
        arguments: Any = {}
        if body:
            try:
                arguments = await request.json()
            except ValueError as e:
                raise HTTPException(status_code=400, detail=f"Invalid JSON body: {e}") from e
        if not isinstance(arguments, dict):
            raise HTTPException(status_code=422, detail="Tool arguments must be a JSON object")

        result = await dispatcher.call(name, arguments)
        status_code = 200 if result.ok else STATUS_BY_KIND[result.error.kind]
        return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))

    return app
