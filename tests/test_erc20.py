"""
ERC20 actions against the fake chain client.
"""

from __future__ import annotations

import pytest

from skills.story.actions import invoke
from skills.story.api import erc20_api
from skills.story.errors import SimulationError, SubmissionError

from .conftest import OTHER, TX_HASH, WALLET

USDT = "0x674843c06ff83502ddb4d37c2e09c01cda38cbc8"
UNKNOWN_TOKEN = "0x00000000000000000000000000000000000000aa"


@pytest.fixture
def token_chain(chain):
  chain.reads.update(
    {
      "name": "Tether USD",
      "symbol": "USDT",
      "decimals": 6,
      "totalSupply": 1_000_000_000_000,
      "balanceOf": 100_500_000,
      "allowance": 42_000_000,
    }
  )
  return chain


class TestReads:
  @pytest.mark.asyncio
  async def test_balance_by_symbol(self, agent, token_chain):
    result = await invoke(agent, "erc20_balance", {"token": "tether"})
    assert result == {
      "status": "success",
      "balance": "100.5",
      "token_address": USDT,
      "token_name": "USDT (Tether)",
      "owner_address": WALLET,
    }
    assert ("read", USDT, "balanceOf", (WALLET,)) in token_chain.calls

  @pytest.mark.asyncio
  async def test_balance_unknown_token_address(self, agent, token_chain):
    result = await invoke(
      agent, "erc20_balance", {"token_address": UNKNOWN_TOKEN, "owner_address": OTHER}
    )
    assert result["token_name"] == UNKNOWN_TOKEN
    assert result["owner_address"] == OTHER

  @pytest.mark.asyncio
  async def test_unknown_token_name(self, agent, token_chain):
    result = await invoke(agent, "erc20_balance", {"token": "DOGE"})
    assert result["status"] == "error"
    assert result["code"] == "RESOLUTION_ERROR"
    assert 'Unknown token: "DOGE"' in result["message"]
    assert "USDT (Tether)" in result["message"]
    assert token_chain.calls == []

  @pytest.mark.asyncio
  async def test_allowance(self, agent, token_chain):
    result = await invoke(agent, "erc20_allowance", {"token": "USDT", "spender_address": OTHER})
    assert result == {
      "status": "success",
      "allowance": "42",
      "token_address": USDT,
      "owner_address": WALLET,
      "spender_address": OTHER,
    }
    assert ("read", USDT, "allowance", (WALLET, OTHER)) in token_chain.calls

  @pytest.mark.asyncio
  async def test_info_exact_total_supply(self, agent, chain):
    chain.reads.update(
      {"name": "Big", "symbol": "BIG", "decimals": 18, "totalSupply": 5 * 10**27}
    )
    result = await invoke(agent, "erc20_info", {"token_address": UNKNOWN_TOKEN})
    assert result == {
      "status": "success",
      "info": {"name": "Big", "symbol": "BIG", "decimals": 18, "total_supply": "5000000000"},
      "token_address": UNKNOWN_TOKEN,
    }

  @pytest.mark.asyncio
  async def test_supported_tokens(self, agent, chain):
    result = await invoke(agent, "erc20_supported_tokens", {})
    assert [t["symbol"] for t in result["tokens"]] == ["USDT", "USDC", "stIP"]
    assert chain.calls == []


class TestWrites:
  @pytest.mark.asyncio
  async def test_transfer_simulates_then_writes_then_waits(self, agent, token_chain):
    result = await invoke(agent, "erc20_transfer", {"token": "USDT", "to": OTHER, "amount": "10.5"})
    assert result == {
      "status": "success",
      "tx_hash": TX_HASH,
      "token_address": USDT,
      "to": OTHER,
      "amount": "10.5",
      "confirmed": True,
    }
    assert token_chain.ops() == ["read", "simulate", "write", "wait"]
    assert token_chain.calls[1] == ("simulate", USDT, "transfer", (OTHER, 10_500_000), 0)

  @pytest.mark.asyncio
  async def test_transfer_without_waiting(self, agent, token_chain):
    result = await invoke(
      agent,
      "erc20_transfer",
      {"token": "USDT", "to": OTHER, "amount": "1", "wait_for_confirmation": False},
    )
    assert result["confirmed"] is False
    assert "wait" not in token_chain.ops()

  @pytest.mark.asyncio
  async def test_approve(self, agent, token_chain):
    result = await invoke(
      agent, "erc20_approve", {"token_address": USDT, "spender": OTHER, "amount": "100"}
    )
    assert result["status"] == "success"
    assert result["spender"] == OTHER
    assert ("simulate", USDT, "approve", (OTHER, 100_000_000), 0) in token_chain.calls

  @pytest.mark.asyncio
  async def test_simulation_failure_prevents_write(self, agent, token_chain):
    token_chain.fail["simulate"] = SimulationError("transfer() would fail: balance too low")
    result = await invoke(agent, "erc20_transfer", {"token": "USDT", "to": OTHER, "amount": "1"})
    assert result["code"] == "SIMULATION_ERROR"
    assert "write" not in token_chain.ops()

  @pytest.mark.asyncio
  async def test_reverted_receipt(self, agent, token_chain):
    token_chain.fail["wait"] = SubmissionError(f"Transaction {TX_HASH} reverted")
    result = await invoke(agent, "erc20_approve", {"token": "USDT", "spender": OTHER, "amount": "1"})
    assert result["code"] == "SUBMISSION_ERROR"
    assert "reverted" in result["message"]
    assert result["tx_hash"] == TX_HASH

  @pytest.mark.asyncio
  async def test_amount_beyond_token_decimals(self, agent, token_chain):
    result = await invoke(
      agent, "erc20_transfer", {"token": "USDT", "to": OTHER, "amount": "0.0000001"}
    )
    assert result["code"] == "VALIDATION_ERROR"
    assert "simulate" not in token_chain.ops()

  @pytest.mark.asyncio
  async def test_api_function_directly(self, agent, token_chain):
    tx_hash = await erc20_api.transfer_token(agent, USDT, OTHER, "2", wait_for_confirmation=False)
    assert tx_hash == TX_HASH
    assert token_chain.ops() == ["read", "simulate", "write"]
