"""HTTP host for the ledger tools.

Exposes the registered tools so an agent runtime can list them, fetch their
function schemas and invoke them by method.
"""

import logging
from typing import Any

import uvicorn
from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.client import LedgerClient
from core.config import get_config
from core.context import Context
from core.mirrornode import MirrornodeService
from tools.plugin_loader import load_plugins
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToggleRequest(BaseModel):
    enabled: bool = True


def create_app(registry: ToolRegistry, client: LedgerClient, context: Context) -> FastAPI:
    """Build the FastAPI app around an already populated registry."""
    app = FastAPI(title="Ledger Agent Tools")

    @app.on_event("shutdown")
    async def shutdown() -> None:
        """Clean up resources."""
        if context.mirrornode_service is not None:
            try:
                await context.mirrornode_service.close()
            except Exception:
                logger.exception("Error during shutdown")

    @app.get("/tools")
    async def list_tools() -> JSONResponse:
        return JSONResponse({"tools": registry.list_tools_with_status()})

    @app.get("/tools/schemas")
    async def get_schemas() -> JSONResponse:
        return JSONResponse({"schemas": registry.get_schemas()})

    @app.post("/tools/{method}")
    async def invoke_tool(
        method: str, arguments: dict[str, Any] | None = Body(default=None)
    ) -> JSONResponse:
        """Validate the JSON body against the tool schema and run it."""
        if registry.get(method) is None:
            message = f"Error: Unknown tool '{method}'"
            return JSONResponse(
                {"raw": {"error": message}, "humanMessage": message}, status_code=404
            )

        logger.info("Invoking tool %s", method)
        result = await registry.execute(method, client, context, arguments or {})
        return JSONResponse(registry.render(method, result))

    @app.post("/tools/{method}/toggle")
    async def toggle_tool(method: str, request: ToggleRequest) -> JSONResponse:
        if not registry.set_tool_enabled(method, request.enabled):
            return JSONResponse({"error": f"Unknown tool: {method}"}, status_code=404)
        state = "enabled" if request.enabled else "disabled"
        return JSONResponse({"status": f"Tool '{method}' {state}."})

    return app


def build_app() -> FastAPI:
    """Create the app from config.yaml and the plugins directory."""
    config = get_config()
    mirrornode = MirrornodeService(
        config.network.get_mirror_node_url(), timeout=config.http.timeout
    )
    context = Context.from_config(config, mirrornode_service=mirrornode)
    client = LedgerClient(
        ledger_id=config.network.ledger_id,
        operator_account_id=config.network.operator_account_id or None,
    )

    registry = ToolRegistry()
    load_plugins(registry, context)

    logger.info(
        "Serving %d tools for %s (mode=%s)",
        len(registry.list_tools()),
        client.ledger_id,
        context.mode.value,
    )
    return create_app(registry, client, context)


def main() -> None:
    """Entry point for `python -m host.server`."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    uvicorn.run(
        build_app(),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
