"""
Prompt templates rendered with Jinja2.
"""

from pathlib import Path
from typing import Annotated

from fastmcp import FastMCP
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from pydantic import Field

from gke_mcp.utils import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def render_deploy_prompt(user_request: str) -> str:
    """
    Render the gke:deploy prompt.

    Raises:
        ValueError: If user_request is blank
    """
    if not user_request.strip():
        raise ValueError("argument 'user_request' cannot be empty")

    template = jinja_env.get_template("deploy.j2")
    return template.render(user_request=user_request)


def register_prompts(mcp: FastMCP) -> None:
    """Register the GKE prompts with the MCP server."""

    @mcp.prompt(
        name="gke:deploy",
        description="Deploys a workload to a GKE cluster using a configuration file.",
    )
    def gke_deploy(
        user_request: Annotated[
            str,
            Field(
                description="A natural language request specifying the configuration "
                "file to deploy. e.g., 'my-app.yaml to staging'"
            ),
        ],
    ) -> str:
        return render_deploy_prompt(user_request)

    logger.debug("Registered prompt gke:deploy")
