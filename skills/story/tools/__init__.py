"""
MCP tool definitions, generated from the action registry.
"""

from __future__ import annotations

from mcp.types import Tool

from ..actions import ACTIONS, Action


def action_tool(action: Action) -> Tool:
  schema = action.input_model.model_json_schema()
  schema.pop("title", None)
  schema.setdefault("properties", {})
  return Tool(name=action.name, description=action.description, inputSchema=schema)


ALL_TOOLS: list[Tool] = [action_tool(a) for a in ACTIONS]
