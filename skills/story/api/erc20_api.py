"""
ERC20 token operations.

Amounts go in and come out as decimal strings scaled by the token's own
``decimals()``. Errors are raised as kit errors; handlers convert them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..constants import ERC20_ABI
from ..helpers import format_units, parse_units

if TYPE_CHECKING:
  from ..client.wallet_client import StoryAgentKit

log = logging.getLogger("skill.story.api.erc20")


async def get_decimals(agent: StoryAgentKit, token_address: str) -> int:
  decimals = await agent.client.read_contract(token_address, ERC20_ABI, "decimals")
  return int(decimals)


async def get_token_balance(
  agent: StoryAgentKit,
  token_address: str,
  owner_address: str | None = None,
) -> str:
  owner = owner_address or agent.get_wallet_address()
  raw = await agent.client.read_contract(token_address, ERC20_ABI, "balanceOf", [owner])
  decimals = await get_decimals(agent, token_address)
  return format_units(int(raw), decimals)


async def get_token_allowance(
  agent: StoryAgentKit,
  token_address: str,
  owner_address: str,
  spender_address: str,
) -> str:
  raw = await agent.client.read_contract(
    token_address, ERC20_ABI, "allowance", [owner_address, spender_address]
  )
  decimals = await get_decimals(agent, token_address)
  return format_units(int(raw), decimals)


async def get_token_info(agent: StoryAgentKit, token_address: str) -> dict[str, Any]:
  name = await agent.client.read_contract(token_address, ERC20_ABI, "name")
  symbol = await agent.client.read_contract(token_address, ERC20_ABI, "symbol")
  decimals = await get_decimals(agent, token_address)
  total_supply = await agent.client.read_contract(token_address, ERC20_ABI, "totalSupply")
  return {
    "name": str(name),
    "symbol": str(symbol),
    "decimals": decimals,
    "total_supply": format_units(int(total_supply), decimals),
  }


async def _write(
  agent: StoryAgentKit,
  token_address: str,
  function: str,
  target: str,
  amount: str,
  wait_for_confirmation: bool,
) -> str:
  decimals = await get_decimals(agent, token_address)
  value = parse_units(amount, decimals)

  request = await agent.client.simulate_contract(token_address, ERC20_ABI, function, [target, value])
  tx_hash = await agent.client.write_contract(request)
  log.info("%s %s of %s -> %s: %s", function, amount, token_address, target, tx_hash)

  if wait_for_confirmation:
    await agent.wait_for_confirmation(tx_hash)
  return tx_hash


async def transfer_token(
  agent: StoryAgentKit,
  token_address: str,
  to: str,
  amount: str,
  wait_for_confirmation: bool = True,
) -> str:
  """Transfer tokens; by default blocks until the transaction is mined."""
  return await _write(agent, token_address, "transfer", to, amount, wait_for_confirmation)


async def approve_token(
  agent: StoryAgentKit,
  token_address: str,
  spender: str,
  amount: str,
  wait_for_confirmation: bool = True,
) -> str:
  """Approve ``spender``; by default blocks until the transaction is mined."""
  return await _write(agent, token_address, "approve", spender, amount, wait_for_confirmation)
