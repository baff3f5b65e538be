"""
Gemini CLI extension installer.

Installs the server as a Gemini CLI extension under
``~/.gemini/extensions/gke-mcp``: the extension manifest, the context
file and the ``/gke:cost`` custom command.
"""

import sys
from pathlib import Path
from typing import Any, Optional

from gke_mcp.install.base import (
    CONTEXT_FILE_NAME,
    SERVER_NAME,
    read_context_file,
    read_data_file,
    write_file,
    write_json_file,
)


def extension_dir(home: Optional[Path] = None) -> Path:
    return (home or Path.home()) / ".gemini" / "extensions" / SERVER_NAME


def extension_manifest(
    version: str, exe_path: str, base_dir: Path, developer: bool
) -> dict[str, Any]:
    """
    Build gemini-extension.json.

    In developer mode the server runs from the source tree in base_dir
    with the current interpreter, so local changes take effect without
    reinstalling.
    """
    if developer:
        server: dict[str, Any] = {
            "command": sys.executable,
            "args": [str(base_dir / "app" / "main.py")],
            "cwd": str(base_dir),
        }
    else:
        server = {"command": exe_path}

    return {
        "name": SERVER_NAME,
        "version": version,
        "description": "Enable MCP-compatible AI agents to interact with Google Kubernetes Engine.",
        "contextFileName": CONTEXT_FILE_NAME,
        "mcpServers": {
            "gke": server,
        },
    }


def install_gemini_cli_extension(
    base_dir: Path,
    version: str,
    exe_path: str,
    developer: bool = False,
    home: Optional[Path] = None,
) -> Path:
    """
    Install the Gemini CLI extension.

    Args:
        base_dir: Working directory (source tree in developer mode)
        version: Server version recorded in the manifest
        exe_path: Server executable
        developer: Run the server from base_dir instead of exe_path
        home: Home directory (defaults to the current user's)

    Returns:
        The extension directory

    Raises:
        InstallError: If a file cannot be written
    """
    target = extension_dir(home)

    write_json_file(
        target / "gemini-extension.json",
        extension_manifest(version, exe_path, Path(base_dir), developer),
    )
    write_file(target / CONTEXT_FILE_NAME, read_context_file())
    write_file(target / "commands" / "gke" / "cost.toml", read_data_file("cost.toml"))

    return target
