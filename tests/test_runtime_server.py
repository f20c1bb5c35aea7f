"""
JSON-RPC skill runtime dispatch, without stdio.
"""

from __future__ import annotations

import json

import pytest

from dev.runtime.server import MethodNotFound, SkillServer
from skills.story.server import set_agent
from skills.story.skill import skill

from .conftest import TEST_PRIVATE_KEY, WALLET


class RecordingServer(SkillServer):
  """SkillServer whose reverse RPC is answered from memory."""

  def __init__(self) -> None:
    super().__init__(skill)
    self.data: dict[str, str] = {}
    self.sent: list[dict] = []

  async def read_data(self, filename: str) -> str:
    if filename not in self.data:
      raise RuntimeError(f"not found: {filename}")
    return self.data[filename]

  async def write_data(self, filename: str, content: str) -> None:
    self.data[filename] = content

  def _write_message(self, message: dict) -> None:
    self.sent.append(message)


@pytest.fixture
def server():
  return RecordingServer()


class TestTools:
  @pytest.mark.asyncio
  async def test_tools_list(self, server):
    result = await server._dispatch("tools/list", {})
    names = [t["name"] for t in result["tools"]]
    assert len(names) == 13
    unstake = next(t for t in result["tools"] if t["name"] == "metapool_unstake")
    assert unstake["inputSchema"]["required"] == ["amount"]

  @pytest.mark.asyncio
  async def test_tools_call(self, server, agent, chain):
    set_agent(agent)
    chain.balances[WALLET.lower()] = 3 * 10**18
    result = await server._dispatch("tools/call", {"name": "native_balance", "arguments": {}})
    assert result["isError"] is False
    assert json.loads(result["content"][0]["text"])["balance"] == "3"

  @pytest.mark.asyncio
  async def test_tools_call_error_result(self, server, agent):
    set_agent(agent)
    result = await server._dispatch(
      "tools/call", {"name": "metapool_unstake", "arguments": {"amount": "0.01"}}
    )
    assert result["isError"] is True

  @pytest.mark.asyncio
  async def test_unknown_tool(self, server):
    with pytest.raises(ValueError, match="Unknown tool"):
      await server._dispatch("tools/call", {"name": "nope"})


class TestLifecycle:
  @pytest.mark.asyncio
  async def test_setup_then_load(self, server, monkeypatch):
    monkeypatch.delenv("WALLET_PRIVATE_KEY", raising=False)
    start = await server._dispatch("setup/start", {})
    assert start["step"]["id"] == "private_key"
    assert start["step"]["fields"][0]["type"] == "password"

    step = await server._dispatch(
      "setup/submit", {"stepId": "private_key", "values": {"private_key": TEST_PRIVATE_KEY}}
    )
    assert step["status"] == "next"
    assert step["nextStep"]["id"] == "network"
    assert {o["value"] for o in step["nextStep"]["fields"][0]["options"]} == {"story", "aeneid"}

    done = await server._dispatch("setup/submit", {"stepId": "network", "values": {"network": "story"}})
    assert done["status"] == "complete"
    assert "config.json" in server.data

    assert await server._dispatch("skill/load", {"dataDir": "/tmp/story"}) == {"ok": True}
    status = await server._dispatch("skill/status", {})
    assert status["status"]["address"] == WALLET

    assert await server._dispatch("skill/unload", {}) == {"ok": True}
    status = await server._dispatch("skill/status", {})
    assert status["status"]["status"] == "not_configured"

  @pytest.mark.asyncio
  async def test_info(self, server):
    info = await server._dispatch("skill/info", {})
    assert info["name"] == "story"
    assert info["hasSetup"] is True
    assert "metapool_apy" in info["tools"]

  @pytest.mark.asyncio
  async def test_unknown_method(self, server):
    with pytest.raises(MethodNotFound):
      await server._dispatch("skill/teleport", {})


class TestMessageHandling:
  @pytest.mark.asyncio
  async def test_response_envelope(self, server):
    await server._handle_message({"jsonrpc": "2.0", "id": 7, "method": "skill/info"})
    assert server.sent[0]["id"] == 7
    assert server.sent[0]["result"]["name"] == "story"

  @pytest.mark.asyncio
  async def test_method_not_found_error(self, server):
    await server._handle_message({"jsonrpc": "2.0", "id": 8, "method": "nope"})
    assert server.sent[0]["error"]["code"] == -32601

  @pytest.mark.asyncio
  async def test_internal_error(self, server):
    await server._handle_message(
      {"jsonrpc": "2.0", "id": 9, "method": "tools/call", "params": {"name": "missing"}}
    )
    assert server.sent[0]["error"]["code"] == -32603
    assert "Unknown tool" in server.sent[0]["error"]["message"]

  def test_reverse_rpc_reply_resolves_future(self, server):
    import asyncio

    async def scenario():
      task = asyncio.create_task(server._reverse_rpc("state/get"))
      await asyncio.sleep(0)
      request = server.sent[-1]
      assert request["method"] == "state/get"
      server._resolve_pending({"jsonrpc": "2.0", "id": request["id"], "result": {"state": {"a": 1}}})
      return await task

    assert asyncio.run(scenario()) == {"state": {"a": 1}}
