"""
Metapool staking handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..api import metapool_api
from ..constants import UNSTAKE_RELEASE_NOTE
from ..helpers import ErrorCategory, Result, log_and_format_error, success

if TYPE_CHECKING:
  from ..client.wallet_client import StoryAgentKit
  from ..schemas import EmptyInput, StakeInput, StipBalanceInput, UnstakeInput


async def metapool_tvl(agent: StoryAgentKit, params: EmptyInput) -> Result:
  try:
    tvl = await metapool_api.get_total_value_locked(agent)
    return success(
      tvl=tvl["amount"],
      symbol=tvl["symbol"],
      formatted_tvl=f"{tvl['amount']} {tvl['symbol']}",
    )
  except Exception as e:
    return log_and_format_error("metapool_tvl", e, ErrorCategory.STAKING)


async def metapool_stake(agent: StoryAgentKit, params: StakeInput) -> Result:
  try:
    tx_hash = await metapool_api.stake_ip(agent, params.amount, params.wait_for_confirmation)
    return success(tx_hash=tx_hash, amount=params.amount, confirmed=params.wait_for_confirmation)
  except Exception as e:
    return log_and_format_error("metapool_stake", e, ErrorCategory.STAKING)


async def metapool_unstake(agent: StoryAgentKit, params: UnstakeInput) -> Result:
  try:
    unstake_all = params.amount.lower() == "all"
    tx_hash, redeemed = await metapool_api.unstake_ip(
      agent, params.amount, params.wait_for_confirmation
    )
    return success(
      tx_hash=tx_hash,
      amount=redeemed if unstake_all else params.amount,
      unstake_all=unstake_all,
      note=UNSTAKE_RELEASE_NOTE,
      confirmed=params.wait_for_confirmation,
    )
  except Exception as e:
    return log_and_format_error("metapool_unstake", e, ErrorCategory.STAKING)


async def metapool_apy(agent: StoryAgentKit, params: EmptyInput) -> Result:
  try:
    apy = await metapool_api.get_staking_apy(agent.metrics)
    return success(**apy, formatted_apy=f"{apy['apy']}%")
  except Exception as e:
    return log_and_format_error("metapool_apy", e, ErrorCategory.STAKING)


async def metapool_stip_balance(agent: StoryAgentKit, params: StipBalanceInput) -> Result:
  try:
    address = params.address or agent.get_wallet_address()
    balance = await metapool_api.get_stip_balance(agent, address)
    return success(balance=balance, address=address, symbol="stIP")
  except Exception as e:
    return log_and_format_error("metapool_stip_balance", e, ErrorCategory.STAKING)
