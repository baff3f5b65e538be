"""
Helpers shared by the AI tool installers.
"""

import json
from pathlib import Path
from typing import Any

from gke_mcp.utils import get_logger

logger = get_logger(__name__)

DATA_DIR = Path(__file__).parent / "data"
CONTEXT_FILE_NAME = "GEMINI.md"
SERVER_NAME = "gke-mcp"


class InstallError(Exception):
    """Raised when an installer cannot write its configuration."""

    pass


def read_data_file(name: str) -> str:
    """Read a file shipped in the installer data directory."""
    return (DATA_DIR / name).read_text(encoding="utf-8")


def read_context_file() -> str:
    """Usage instructions shared with every AI tool."""
    return read_data_file(CONTEXT_FILE_NAME)


def ensure_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InstallError(f"could not create directory {path}: {e}") from e
    return path


def write_file(path: Path, content: str) -> Path:
    """Write a text file, creating its directory."""
    ensure_directory(path.parent)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise InstallError(f"could not write {path}: {e}") from e
    logger.info(f"Wrote {path}")
    return path


def read_json_file(path: Path) -> dict[str, Any]:
    """
    Read a JSON object, returning an empty dict if the file does not exist.

    Raises:
        InstallError: If the file cannot be read or is not a JSON object
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InstallError(f"could not read existing configuration {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InstallError(f"could not parse existing configuration {path}: {e}") from e
    if not isinstance(data, dict):
        raise InstallError(f"existing configuration {path} is not a JSON object")
    return data


def write_json_file(path: Path, data: dict[str, Any]) -> Path:
    return write_file(path, json.dumps(data, indent=2) + "\n")
