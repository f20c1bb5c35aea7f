"""
Action registry and dispatch.
"""

from __future__ import annotations

import pytest

from skills.story import actions
from skills.story.actions import ACTIONS, ActionRegistry, build_registry
from skills.story.actions.registry import Action
from skills.story.errors import DuplicateActionError
from skills.story.helpers import success
from skills.story.schemas import EmptyInput

from .conftest import OTHER

EXPECTED_NAMES = {
  "native_balance",
  "native_transfer",
  "erc20_balance",
  "erc20_transfer",
  "erc20_approve",
  "erc20_allowance",
  "erc20_info",
  "erc20_supported_tokens",
  "metapool_tvl",
  "metapool_stake",
  "metapool_unstake",
  "metapool_apy",
  "metapool_stip_balance",
}


async def _ok(agent, params):
  return success(echo=True)


async def _boom(agent, params):
  raise RuntimeError("handler exploded")


class TestRegistry:
  def test_all_actions_registered(self):
    assert set(actions.registry.names()) == EXPECTED_NAMES
    assert len(ACTIONS) == len(EXPECTED_NAMES)

  def test_every_action_is_documented(self):
    for action in ACTIONS:
      assert action.description
      assert action.similes
      assert action.examples
      for example in action.examples:
        assert example.output["status"] == "success"
        assert example.explanation

  def test_examples_match_input_models(self):
    for action in ACTIONS:
      for example in action.examples:
        action.parse_input(example.input)

  def test_list_actions(self):
    listed = actions.list_actions()
    assert set(listed) == EXPECTED_NAMES
    assert "Metapool" in listed["metapool_tvl"]

  def test_get(self):
    assert actions.get("erc20_info").name == "erc20_info"
    assert actions.get("nope") is None

  def test_duplicate_rejected(self):
    registry = build_registry()
    with pytest.raises(DuplicateActionError, match="native_balance"):
      registry.register(ACTIONS[0])

  def test_actions_are_frozen(self):
    with pytest.raises(Exception):
      ACTIONS[0].name = "renamed"


class TestInvoke:
  @pytest.mark.asyncio
  async def test_unknown_action(self, agent):
    result = await actions.invoke(agent, "launch_rocket", {})
    assert result["status"] == "error"
    assert result["code"] == "UNKNOWN_ACTION"
    assert "launch_rocket" in result["message"]

  @pytest.mark.asyncio
  async def test_invalid_input_names_field(self, agent, chain):
    result = await actions.invoke(agent, "native_transfer", {"to": "bob", "amount": "1"})
    assert result["status"] == "error"
    assert result["code"] == "INVALID_INPUT"
    assert "'to'" in result["message"]
    assert chain.calls == []

  @pytest.mark.asyncio
  async def test_missing_field(self, agent):
    result = await actions.invoke(agent, "native_transfer", {"to": OTHER})
    assert result["code"] == "INVALID_INPUT"
    assert "amount" in result["message"]

  @pytest.mark.asyncio
  @pytest.mark.parametrize("amount", ["0", "-1", "abc", "NaN"])
  async def test_non_positive_amount(self, agent, amount):
    result = await actions.invoke(agent, "metapool_stake", {"amount": amount})
    assert result["code"] == "INVALID_INPUT"

  @pytest.mark.asyncio
  async def test_token_ref_required(self, agent):
    result = await actions.invoke(agent, "erc20_info", {})
    assert result["code"] == "INVALID_INPUT"
    assert "token_address or token" in result["message"]

  @pytest.mark.asyncio
  async def test_json_string_input(self, agent, chain):
    chain.balances[OTHER.lower()] = 10**18
    result = await actions.invoke(agent, "native_balance", f'{{"address": "{OTHER}"}}')
    assert result == {"status": "success", "balance": "1", "address": OTHER, "symbol": "IP"}

  @pytest.mark.asyncio
  async def test_malformed_json_string(self, agent):
    result = await actions.invoke(agent, "native_balance", "{not json")
    assert result["code"] == "INVALID_INPUT"

  @pytest.mark.asyncio
  async def test_none_args(self, agent):
    result = await actions.invoke(agent, "erc20_supported_tokens", None)
    assert result["status"] == "success"
    assert len(result["tokens"]) == 3

  @pytest.mark.asyncio
  async def test_numeric_amount_coerced(self, agent, chain):
    result = await actions.invoke(agent, "native_transfer", {"to": OTHER, "amount": 1.5})
    assert result["status"] == "success"
    assert result["amount"] == "1.5"
    assert ("send", OTHER, 15 * 10**17) in chain.calls

  @pytest.mark.asyncio
  async def test_uncaught_handler_error_becomes_result(self, agent):
    registry = ActionRegistry()
    registry.register(
      Action(name="boom", description="always fails", input_model=EmptyInput, handler=_boom)
    )
    result = await registry.invoke(agent, "boom", {})
    assert result["status"] == "error"
    assert result["code"].startswith("DISPATCH-ERR-")
    assert "handler exploded" in result["message"]

  @pytest.mark.asyncio
  async def test_handler_result_returned_unchanged(self, agent):
    registry = ActionRegistry()
    registry.register(Action(name="ok", description="ok", input_model=EmptyInput, handler=_ok))
    assert await registry.invoke(agent, "ok", {"ignored": 1}) == {"status": "success", "echo": True}
