"""
Command line interface.

``gke-mcp`` runs the MCP server; ``gke-mcp install <tool>`` registers it
with an AI tool.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from gke_mcp import __version__
from gke_mcp.config import load_config
from gke_mcp.install import (
    InstallError,
    install_cursor_extension,
    install_gemini_cli_extension,
)
from gke_mcp.utils import setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gke-mcp",
        description="MCP Server for Google Kubernetes Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start with stdio transport (default)
  gke-mcp

  # Start with HTTP transport
  gke-mcp --transport streamable-http --port 8080

  # Install as a Gemini CLI extension
  gke-mcp install gemini-cli
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gke-mcp {__version__}",
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        help="Configuration directory path (default: ~/.gke-mcp/)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        help="Transport protocol (overrides config)",
    )
    parser.add_argument(
        "--host",
        type=str,
        help="Host to bind to (for HTTP transport, overrides config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (for HTTP transport, overrides config)",
    )
    parser.add_argument(
        "--skip-auth-check",
        action="store_true",
        help="Skip the Application Default Credentials check at startup",
    )

    subparsers = parser.add_subparsers(dest="command")

    install = subparsers.add_parser(
        "install",
        help="Install the GKE MCP Server into an AI tool",
    )
    install_targets = install.add_subparsers(dest="target", required=True)

    gemini = install_targets.add_parser(
        "gemini-cli",
        help="Install as a Gemini CLI extension",
    )
    gemini.add_argument(
        "--developer",
        action="store_true",
        help="Run the server from the current source tree (for development)",
    )

    cursor = install_targets.add_parser(
        "cursor",
        help="Install into Cursor",
    )
    cursor.add_argument(
        "--project-only",
        action="store_true",
        help="Install into the current directory's .cursor instead of ~/.cursor",
    )

    return parser


def run_install(args: argparse.Namespace) -> int:
    """Run an install subcommand."""
    base_dir = Path(os.getcwd())
    exe_path = os.path.abspath(sys.argv[0])

    try:
        if args.target == "gemini-cli":
            target = install_gemini_cli_extension(
                base_dir,
                version=__version__,
                exe_path=exe_path,
                developer=args.developer,
            )
            print(f"Successfully installed GKE MCP server as a gemini-cli extension in {target}.")
        else:
            target = install_cursor_extension(
                base_dir,
                exe_path=exe_path,
                project_only=args.project_only,
            )
            print(f"Successfully installed GKE MCP server into Cursor ({target}).")
    except InstallError as e:
        print(f"Failed to install for {args.target}: {e}", file=sys.stderr)
        return 1

    return 0


def run_server(args: argparse.Namespace) -> int:
    """Load configuration and run the MCP server until interrupted."""
    from gke_mcp.server import create_server

    try:
        config = load_config(args.config_dir)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.transport:
        config.server.transport = args.transport
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    setup_logging(config.server.log_level, config.server.log_file)

    bundle = None
    try:
        bundle = create_server(config, skip_auth_check=args.skip_auth_check)

        print(f"Starting GKE MCP Server v{__version__}", file=sys.stderr)
        print(f"Transport: {config.server.transport}", file=sys.stderr)

        if config.server.transport == "stdio":
            print("Running in stdio mode...", file=sys.stderr)
            bundle.server.run(transport="stdio")
        else:
            print(
                f"Running on http://{config.server.host}:{config.server.port}",
                file=sys.stderr,
            )
            bundle.server.run(
                transport="streamable-http",
                host=config.server.host,
                port=config.server.port,
            )
    except KeyboardInterrupt:
        print("\nShutting down...", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Server error: {e}", file=sys.stderr)
        return 1
    finally:
        if bundle is not None:
            bundle.close()

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.command == "install":
        return run_install(args)
    return run_server(args)


if __name__ == "__main__":
    sys.exit(main())
