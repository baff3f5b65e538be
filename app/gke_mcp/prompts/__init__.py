"""
MCP Prompt templates for GKE operations.
"""

from gke_mcp.prompts.templates import register_prompts, render_deploy_prompt

__all__ = [
    "register_prompts",
    "render_deploy_prompt",
]
