"""
Cursor installer.

Adds the server to Cursor's ``mcp.json`` and installs a rule file with
usage instructions.
"""

from pathlib import Path
from typing import Optional

from gke_mcp.install.base import (
    SERVER_NAME,
    InstallError,
    read_context_file,
    read_json_file,
    write_file,
    write_json_file,
)

RULE_HEADER = """---
name: GKE MCP Instructions
description: Provides guidance for using the gke-mcp tool with Cursor.
alwaysApply: true
---

# GKE MCP Tool Instructions

This rule provides context for using the gke-mcp tool within Cursor.

"""


def cursor_dir(base_dir: Path, project_only: bool, home: Optional[Path] = None) -> Path:
    """Global ~/.cursor, or <base_dir>/.cursor for a project-only install."""
    if project_only:
        return Path(base_dir) / ".cursor"
    return (home or Path.home()) / ".cursor"


def install_cursor_extension(
    base_dir: Path,
    exe_path: str,
    project_only: bool = False,
    home: Optional[Path] = None,
) -> Path:
    """
    Register the server with Cursor.

    Other servers already configured in mcp.json are kept.

    Args:
        base_dir: Project directory used for a project-only install
        exe_path: Server executable
        project_only: Install into the project instead of the user settings
        home: Home directory (defaults to the current user's)

    Returns:
        Path of the updated mcp.json

    Raises:
        InstallError: If mcp.json cannot be parsed or a file cannot be written
    """
    target = cursor_dir(base_dir, project_only, home)
    mcp_path = target / "mcp.json"

    config = read_json_file(mcp_path)
    servers = config.setdefault("mcpServers", {})
    if not isinstance(servers, dict):
        raise InstallError(f"'mcpServers' in {mcp_path} is not a JSON object")
    servers[SERVER_NAME] = {
        "command": exe_path,
        "type": "stdio",
    }
    write_json_file(mcp_path, config)

    write_file(target / "rules" / f"{SERVER_NAME}.mdc", RULE_HEADER + read_context_file())

    return mcp_path
