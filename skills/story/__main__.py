"""
Story skill entry point.

Run with:
    python -m skills.story            # MCP server on stdio
    python -m skills.story --runtime  # JSON-RPC skill runtime
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .errors import ConfigError

logging.basicConfig(
  level=logging.INFO,
  format="[%(name)s] %(levelname)s: %(message)s",
  stream=sys.stderr,
)

log = logging.getLogger("skill.story")


async def serve_mcp() -> None:
  """Start the MCP server with an agent built from the environment."""
  from mcp.server.stdio import stdio_server

  from .client.wallet_client import StoryAgentKit
  from .server import create_mcp_server

  agent = StoryAgentKit.from_env()
  server = create_mcp_server(agent)
  try:
    async with stdio_server() as (read_stream, write_stream):
      await server.run(read_stream, write_stream, server.create_initialization_options())
  finally:
    await agent.close()


def serve_runtime() -> None:
  from dev.runtime.server import SkillServer

  from .skill import skill

  SkillServer(skill).start()


def main(argv: list[str] | None = None) -> int:
  parser = argparse.ArgumentParser(prog="python -m skills.story")
  parser.add_argument(
    "--runtime",
    action="store_true",
    help="run as a JSON-RPC skill runtime instead of an MCP stdio server",
  )
  args = parser.parse_args(argv)

  if args.runtime:
    serve_runtime()
    return 0

  try:
    asyncio.run(serve_mcp())
  except ConfigError as exc:
    log.error("%s", exc)
    return 1
  return 0


if __name__ == "__main__":
  sys.exit(main())
