"""
Story SkillDefinition - wires setup, tools, and lifecycle hooks
into the unified SkillServer protocol.

Usage:
    from skills.story.skill import skill
"""

from __future__ import annotations

import logging
from typing import Any

from dev.types.skill_types import (
  SkillDefinition,
  SkillHooks,
  SkillTool,
  ToolDefinition,
)
from dev.types.skill_types import (
  ToolResult as SkillToolResult,
)

from .client.wallet_client import StoryAgentKit
from .config import StoryConfig
from .errors import ConfigError
from .helpers import is_error, to_json
from .server import dispatch_tool, get_agent, set_agent
from .setup import on_setup_cancel, on_setup_start, on_setup_submit
from .tools import ALL_TOOLS

log = logging.getLogger("skill.story.skill")


# ---------------------------------------------------------------------------
# Convert MCP Tool objects → SkillTool objects
# ---------------------------------------------------------------------------


def _make_execute(tool_name: str):
  """Create an async execute function for a given tool name."""

  async def execute(args: dict[str, Any]) -> SkillToolResult:
    result = await dispatch_tool(tool_name, args)
    return SkillToolResult(content=to_json(result), is_error=is_error(result))

  return execute


def _convert_tools() -> list[SkillTool]:
  """Convert MCP Tool definitions to SkillTool objects."""
  skill_tools: list[SkillTool] = []
  for mcp_tool in ALL_TOOLS:
    schema = mcp_tool.inputSchema if isinstance(mcp_tool.inputSchema, dict) else {}
    definition = ToolDefinition(
      name=mcp_tool.name,
      description=mcp_tool.description or "",
      parameters=schema,
    )
    skill_tools.append(SkillTool(definition=definition, execute=_make_execute(mcp_tool.name)))
  return skill_tools


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------


async def _read_config(ctx: Any) -> StoryConfig | None:
  """config.json written by setup, falling back to the environment."""
  try:
    raw = await ctx.read_data("config.json")
  except FileNotFoundError:
    raw = ""
  except Exception as exc:
    log.warning("Failed to read config.json: %s", exc)
    raw = ""

  if raw and raw.strip() not in ("", "{}"):
    return StoryConfig.from_json(raw)

  try:
    return StoryConfig.from_env()
  except ConfigError:
    return None


async def _on_load(ctx: Any) -> None:
  """Build the agent from the persisted or environment configuration."""
  try:
    config = await _read_config(ctx)
  except ConfigError as exc:
    log.error("Invalid config.json: %s", exc)
    set_agent(None)
    return

  if config is None:
    log.info("No wallet configured - setup required")
    set_agent(None)
    return

  try:
    agent = StoryAgentKit.from_config(config)
  except Exception as exc:
    log.error("Failed to initialize Story agent: %s", exc)
    set_agent(None)
    return

  set_agent(agent)
  ctx.set_state({"address": agent.address, "network": agent.network.key})
  log.info("Story agent loaded: %s on %s", agent.address, agent.network.name)


async def _on_unload(ctx: Any) -> None:
  agent = get_agent()
  set_agent(None)
  if agent is not None:
    await agent.close()
  log.info("Story skill unloaded")


async def _on_status(ctx: Any) -> dict[str, Any]:
  """Return current skill status."""
  agent = get_agent()
  if agent is None:
    return {
      "status": "not_configured",
      "message": "Setup required - no wallet configuration found",
    }

  return {
    "status": "ready",
    "address": agent.address,
    "network": agent.network.key,
    "chain_id": agent.network.chain_id,
    "rpc_url": agent.rpc_url,
    "tools": len(ALL_TOOLS),
  }


# ---------------------------------------------------------------------------
# Skill Definition
# ---------------------------------------------------------------------------

skill = SkillDefinition(
  name="story",
  description="Story chain wallet - native IP, ERC20 tokens and Metapool liquid staking",
  version="1.0.0",
  hooks=SkillHooks(
    on_load=_on_load,
    on_unload=_on_unload,
    on_status=_on_status,
    on_setup_start=on_setup_start,
    on_setup_submit=on_setup_submit,
    on_setup_cancel=on_setup_cancel,
  ),
  tools=_convert_tools(),
  has_setup=True,
)
