"""
Pydantic models for server configuration.

Configuration is loaded from YAML files and environment variables,
then passed to server components explicitly.
"""

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = Field(
        default="127.0.0.1",
        description="Host to bind the server to",
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to listen on",
    )
    transport: Literal["streamable-http", "stdio"] = Field(
        default="stdio",
        description="Transport protocol to use",
    )
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file, in addition to stderr",
    )


class GCPSettings(BaseModel):
    """Google Cloud defaults used when a tool call omits them."""

    default_project_id: Optional[str] = Field(
        default=None,
        description="Project used when a tool call omits project_id "
        "(falls back to the Application Default Credentials project)",
    )
    default_location: Optional[str] = Field(
        default=None,
        description="Location used when a tool call omits location",
    )
    preflight_location: str = Field(
        default="us-central1",
        description="Location queried by the startup credentials check "
        "when no default location is set",
    )


class KubeconfigSettings(BaseModel):
    """Kubeconfig file written by get_kubeconfig."""

    path: Optional[str] = Field(
        default=None,
        description="Kubeconfig path (default: first entry of $KUBECONFIG, "
        "else ~/.kube/config)",
    )

    def resolve_path(self) -> Path:
        """Resolve the kubeconfig file location."""
        if self.path:
            return Path(self.path).expanduser()

        env_paths = os.environ.get("KUBECONFIG", "")
        for entry in env_paths.split(os.pathsep):
            if entry:
                return Path(entry).expanduser()

        return Path.home() / ".kube" / "config"


class LogsSettings(BaseModel):
    """Cloud Logging query limits."""

    lookback_hours: int = Field(
        default=24,
        ge=1,
        le=720,
        description="How far back list_logs reads",
    )
    max_entries: int = Field(
        default=1000,
        ge=1,
        le=100000,
        description="Maximum number of log entries returned by list_logs",
    )


class GKEMCPServerConfig(BaseModel):
    """
    Main configuration container for the GKE MCP Server.
    """

    server: ServerSettings = Field(default_factory=ServerSettings)
    gcp: GCPSettings = Field(default_factory=GCPSettings)
    kubeconfig: KubeconfigSettings = Field(default_factory=KubeconfigSettings)
    logs: LogsSettings = Field(default_factory=LogsSettings)

    @field_validator("gcp")
    @classmethod
    def strip_blank_defaults(cls, v: GCPSettings) -> GCPSettings:
        """Treat blank default project/location as unset."""
        if v.default_project_id is not None and not v.default_project_id.strip():
            v.default_project_id = None
        if v.default_location is not None and not v.default_location.strip():
            v.default_location = None
        return v

    # Allow extra fields to be ignored (forward compatibility)
    model_config = ConfigDict(extra="ignore")
