"""
MCP server + shared agent holder.

Uses the official `mcp` Python SDK. Handles tools/list and tools/call; each
call returns the action result as a single JSON text block.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from .actions import invoke
from .client.wallet_client import StoryAgentKit
from .errors import ConfigError
from .helpers import error_result, to_json
from .tools import ALL_TOOLS

log = logging.getLogger("skill.story.server")

_agent: StoryAgentKit | None = None


def set_agent(agent: StoryAgentKit | None) -> None:
  global _agent
  _agent = agent
  if agent is not None:
    log.info("Serving tools for %s on %s", agent.address, agent.network.name)


def get_agent() -> StoryAgentKit | None:
  return _agent


def require_agent() -> StoryAgentKit:
  if _agent is None:
    raise ConfigError("Story wallet is not configured. Run setup or set WALLET_PRIVATE_KEY.")
  return _agent


async def dispatch_tool(name: str, args: dict[str, Any] | None) -> dict[str, Any]:
  """Run a tool against the configured agent."""
  try:
    agent = require_agent()
  except ConfigError as e:
    return error_result(str(e), e.code)
  return await invoke(agent, name, args or {})


def create_mcp_server(agent: StoryAgentKit | None = None) -> Server:
  """Create and configure the MCP server with all tool handlers."""
  if agent is not None:
    set_agent(agent)
  server = Server("story-skill")

  @server.list_tools()
  async def list_tools() -> list[Tool]:
    return ALL_TOOLS

  @server.call_tool()
  async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
    result = await dispatch_tool(name, arguments)
    return [TextContent(type="text", text=to_json(result))]

  return server
