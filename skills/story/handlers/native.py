"""
Native IP balance and transfer handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..helpers import ErrorCategory, Result, log_and_format_error, success

if TYPE_CHECKING:
  from ..client.wallet_client import StoryAgentKit
  from ..schemas import NativeBalanceInput, NativeTransferInput


async def native_balance(agent: StoryAgentKit, params: NativeBalanceInput) -> Result:
  """Get the native IP balance of an address (defaults to the wallet)."""
  try:
    address = params.address or agent.get_wallet_address()
    balance = await agent.get_balance(address)
    return success(balance=balance, address=address, symbol=agent.network.native_symbol)
  except Exception as e:
    return log_and_format_error("native_balance", e, ErrorCategory.NATIVE)


async def native_transfer(agent: StoryAgentKit, params: NativeTransferInput) -> Result:
  """Send native IP to another address."""
  try:
    tx_hash = await agent.transfer(params.to, params.amount)
    if params.wait_for_confirmation:
      await agent.wait_for_confirmation(tx_hash)
    return success(
      tx_hash=tx_hash,
      **{"from": agent.get_wallet_address()},
      to=params.to,
      amount=params.amount,
      confirmed=params.wait_for_confirmation,
    )
  except Exception as e:
    return log_and_format_error("native_transfer", e, ErrorCategory.NATIVE)
