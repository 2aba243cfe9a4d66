"""
FastAPI application entry point for the MCP server generator.
"""

from contextlib import asynccontextmanager
import logging
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mcpgen import __version__
from mcpgen.config import get_settings
from mcpgen.api.health import router as health_router
from mcpgen.api.catalog import router as catalog_router
from mcpgen.api.generate import router as generate_router
from mcpgen.catalog import all_integrations, all_patterns
from mcpgen.middleware.logging import setup_logging_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    # Startup
    settings = get_settings()
    logging.info("🚀 Starting MCP server generator...")
    logging.info(f"📊 Environment: {settings.environment}")
    logging.info(f"🌐 Port: {settings.port}")
    logging.info(f"📦 Catalog: {len(all_patterns())} tool patterns, {len(all_integrations())} integrations")

    if settings.remote_analysis_enabled:
        logging.info(f"🤖 Remote analysis enabled with model {settings.openai_model}")
    else:
        logging.warning("⚠️ OPENAI_API_KEY not set - requests are resolved with keyword analysis only")

    logging.info(f"📁 Output root: {settings.output_root}")
    yield

    # Shutdown
    logging.info("🛑 Shutting down MCP server generator...")


# Create FastAPI application
app = FastAPI(
    title="MCP Server Generator",
    description="Generate MCP server projects from natural-language requirements",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Setup CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup logging middleware
setup_logging_middleware(app, settings)

# Include API routers
app.include_router(health_router, prefix="/api/v1", tags=["health"])
app.include_router(catalog_router, prefix="/api/v1/catalog", tags=["catalog"])
app.include_router(generate_router, prefix="/api/v1", tags=["generate"])


@app.get("/")
async def root() -> Dict[str, Any]:
    """Root endpoint with basic service information."""
    return {
        "service": "mcp-server-generator",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


def run() -> None:
    """Console entry point."""
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "mcpgen.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
