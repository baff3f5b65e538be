"""
FastMCP Server Setup.

This module creates and configures the MCP server instance.
"""

import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from gke_mcp import __version__
from gke_mcp.config import GKEMCPServerConfig
from gke_mcp.gcp import (
    GCPClients,
    GKEEndpointResolver,
    check_application_default_credentials,
    resolve_default_project,
)
from gke_mcp.kubeconfig import CredentialStore
from gke_mcp.prompts import register_prompts
from gke_mcp.tools import ToolContext, register_tools
from gke_mcp.utils import get_logger

logger = get_logger(__name__)

SERVER_NAME = "GKE MCP Server"
USER_AGENT = f"gke-mcp/{__version__}"


@dataclass
class ServerBundle:
    """Bundle containing server and related components."""

    server: FastMCP
    tool_context: ToolContext
    instructions: Optional[str] = None

    def close(self) -> None:
        """Release the Google API clients."""
        self.tool_context.clients.close()


def build_server(
    config: GKEMCPServerConfig,
    tool_context: ToolContext,
    instructions: Optional[str] = None,
) -> FastMCP:
    """
    Create the FastMCP instance and register tools, prompts and routes.

    Args:
        config: Server configuration
        tool_context: Shared state for tools
        instructions: Server instructions sent to clients on initialize

    Returns:
        Configured FastMCP instance
    """

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[dict]:
        """
        Session lifespan.

        Yields a state dict that's available to all tools via context.
        Google API clients outlive sessions; ServerBundle.close releases them.
        """
        logger.debug(f"{SERVER_NAME} v{__version__} session starting")
        yield {"config": config, "tool_context": tool_context}
        logger.debug(f"{SERVER_NAME} session ended")

    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=instructions,
        lifespan=lifespan,
    )

    register_tools(mcp, tool_context)
    register_prompts(mcp)
    _register_http_routes(mcp, tool_context, instructions)

    return mcp


async def create_server_async(
    config: GKEMCPServerConfig,
    skip_auth_check: bool = False,
) -> ServerBundle:
    """
    Create and configure the MCP server (async version).

    Resolves the default project and runs the Application Default
    Credentials pre-flight check before the server is created, so that
    missing credentials are reported to the client as server instructions.

    Args:
        config: Server configuration
        skip_auth_check: Skip the credentials pre-flight check

    Returns:
        ServerBundle containing the FastMCP instance and tool context
    """
    clients = GCPClients(user_agent=USER_AGENT)
    default_project = resolve_default_project(config.gcp)
    if default_project:
        print(f"Default project: {default_project}", file=sys.stderr)
    else:
        print("No default project; tools will require project_id", file=sys.stderr)

    instructions = None
    if not skip_auth_check:
        instructions = await check_application_default_credentials(
            clients,
            default_project,
            config.gcp.default_location or config.gcp.preflight_location,
        )
        if instructions:
            print(instructions, file=sys.stderr)

    kubeconfig_path = config.kubeconfig.resolve_path()
    logger.info(f"Kubeconfig path: {kubeconfig_path}")

    tool_context = ToolContext(
        config=config,
        clients=clients,
        store=CredentialStore(kubeconfig_path),
        resolver=GKEEndpointResolver(clients),
        default_project_id=default_project,
    )

    mcp = build_server(config, tool_context, instructions)
    return ServerBundle(server=mcp, tool_context=tool_context, instructions=instructions)


def create_server(
    config: GKEMCPServerConfig,
    skip_auth_check: bool = False,
) -> ServerBundle:
    """
    Create and configure the MCP server (sync wrapper).

    Args:
        config: Server configuration
        skip_auth_check: Skip the credentials pre-flight check

    Returns:
        ServerBundle containing the FastMCP instance and tool context
    """
    import asyncio

    return asyncio.run(create_server_async(config, skip_auth_check))


def _register_http_routes(
    mcp: FastMCP,
    tool_context: ToolContext,
    instructions: Optional[str],
) -> None:
    """Register custom HTTP routes for health checks."""

    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        """Liveness probe endpoint."""
        return JSONResponse({
            "status": "healthy",
            "version": __version__,
            "service": "gke-mcp",
        })

    @mcp.custom_route("/ready", methods=["GET"])
    async def ready_check(request: Request) -> JSONResponse:
        """Readiness probe endpoint."""
        checks = {
            "server": True,
            "default_project": bool(tool_context.default_project_id),
            "credentials": instructions is None,
        }
        # Only the server check is required; the rest is informational
        is_ready = checks["server"]
        return JSONResponse(
            {
                "status": "ready" if is_ready else "not_ready",
                "checks": checks,
                "kubeconfig": str(tool_context.store.path),
            },
            status_code=200 if is_ready else 503,
        )
