"""VectorForge module — FastAPI service."""

from __future__ import annotations

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.vf.client import VectorForgeClient
from modules.vf.manifest import MANIFEST
from modules.vf.registry import ToolRegistry
from modules.vf.tools import VFTools
from shared.auth import require_service_auth
from shared.config import get_settings
from shared.schemas.common import HealthResponse
from shared.schemas.tools import ModuleManifest, ToolCall, ToolResult

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
)

logger = structlog.get_logger()
app = FastAPI(title="VectorForge Module", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

registry: ToolRegistry | None = None


@app.on_event("startup")
async def startup():
    global registry
    settings = get_settings()
    settings.require_vectorforge()

    registry = ToolRegistry(VFTools(VectorForgeClient(settings)))
    logger.info("vf_module_ready", api_base_url=settings.vf_api_base_url)


@app.get("/manifest", response_model=ModuleManifest)
async def manifest(_=Depends(require_service_auth)):
    """Return the module manifest."""
    return MANIFEST


@app.post("/execute", response_model=ToolResult)
async def execute(call: ToolCall, _=Depends(require_service_auth)):
    """Execute a tool call."""
    if registry is None:
        return ToolResult(tool_name=call.tool_name, success=False, error="Module not ready")
    return await registry.call(call.tool_name, call.arguments)


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", service="vf")


def run() -> None:
    """Serve the module over HTTP."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
