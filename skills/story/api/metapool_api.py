"""
Metapool liquid staking on Story: stake IP for stIP, redeem stIP, and read
TVL, balances and APY.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from ..constants import MIN_UNSTAKE_AMOUNT, STAKED_IP_ABI, STAKED_IP_ADDRESS
from ..errors import InsufficientBalanceError, ValidationError
from ..helpers import format_units, parse_units

if TYPE_CHECKING:
  from ..client.metrics_client import MetricsClient
  from ..client.wallet_client import StoryAgentKit

log = logging.getLogger("skill.story.api.metapool")


async def _read(agent: StoryAgentKit, function: str, args: list[Any] | None = None) -> Any:
  return await agent.client.read_contract(STAKED_IP_ADDRESS, STAKED_IP_ABI, function, args or [])


async def get_total_value_locked(agent: StoryAgentKit) -> dict[str, str]:
  total_assets = await _read(agent, "totalAssets")
  decimals = int(await _read(agent, "decimals"))
  symbol = await _read(agent, "symbol")
  return {"amount": format_units(int(total_assets), decimals), "symbol": str(symbol)}


async def get_stip_balance(agent: StoryAgentKit, address: str | None = None) -> str:
  owner = address or agent.get_wallet_address()
  balance = await _read(agent, "balanceOf", [owner])
  decimals = int(await _read(agent, "decimals"))
  return format_units(int(balance), decimals)


async def stake_ip(agent: StoryAgentKit, amount: str, wait_for_confirmation: bool = False) -> str:
  """Deposit native IP and receive stIP. Returns the transaction hash."""
  value = parse_units(amount, agent.network.native_decimals)
  receiver = agent.get_wallet_address()

  request = await agent.client.simulate_contract(
    STAKED_IP_ADDRESS, STAKED_IP_ABI, "depositIP", [receiver], value=value
  )
  tx_hash = await agent.client.write_contract(request)
  log.info("Staked %s IP: %s", amount, tx_hash)

  if wait_for_confirmation:
    await agent.wait_for_confirmation(tx_hash)
  return tx_hash


def check_unstake_amount(amount: str) -> None:
  """Reject amounts below the minimum without touching the chain."""
  if amount.strip().lower() == "all":
    return
  try:
    value = Decimal(amount)
  except InvalidOperation:
    raise ValidationError(f"Invalid amount: {amount!r}") from None
  if not value.is_finite() or value < MIN_UNSTAKE_AMOUNT:
    raise ValidationError(f"Minimum unstake amount is {MIN_UNSTAKE_AMOUNT} stIP")


async def unstake_ip(
  agent: StoryAgentKit,
  amount: str,
  wait_for_confirmation: bool = False,
) -> tuple[str, str]:
  """Redeem stIP for IP.

  ``amount`` may be "all" (any case) to redeem the whole balance. Returns
  ``(tx_hash, redeemed_amount)``. Funds are released after the protocol's
  waiting period.
  """
  check_unstake_amount(amount)
  wallet = agent.get_wallet_address()
  decimals = int(await _read(agent, "decimals"))

  if amount.strip().lower() == "all":
    shares = int(await _read(agent, "balanceOf", [wallet]))
    if shares == 0:
      raise InsufficientBalanceError("You have no stIP tokens to unstake")
  else:
    shares = parse_units(amount, decimals)

  request = await agent.client.simulate_contract(
    STAKED_IP_ADDRESS, STAKED_IP_ABI, "redeem", [shares, wallet, wallet]
  )
  tx_hash = await agent.client.write_contract(request)
  redeemed = format_units(shares, decimals)
  log.info("Unstaked %s stIP: %s", redeemed, tx_hash)

  if wait_for_confirmation:
    await agent.wait_for_confirmation(tx_hash)
  return tx_hash, redeemed


def _apy_value(data: dict[str, Any], key: str) -> float | None:
  value = data.get(key)
  if value is None or value == "":
    return None
  try:
    return float(value)
  except (TypeError, ValueError):
    return None


async def get_staking_apy(metrics: MetricsClient) -> dict[str, float | None]:
  data = await metrics.fetch_metrics()
  return {
    "apy": _apy_value(data, "st_ip_apy") or 0.0,
    "three_day": _apy_value(data, "st_ip_3_day_apy"),
    "seven_day": _apy_value(data, "st_ip_7_day_apy"),
    "fifteen_day": _apy_value(data, "st_ip_15_day_apy"),
    "thirty_day": _apy_value(data, "st_ip_30_day_apy"),
  }
