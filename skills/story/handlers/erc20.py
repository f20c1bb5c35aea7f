"""
ERC20 token handlers.

Every handler first resolves ``token_address`` / ``token`` through the
token registry; an unknown token becomes an error result listing the
supported tokens.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import tokens
from ..api import erc20_api
from ..errors import ResolutionError
from ..helpers import ErrorCategory, Result, log_and_format_error, success

if TYPE_CHECKING:
  from ..client.wallet_client import StoryAgentKit
  from ..schemas import (
    EmptyInput,
    TokenAllowanceInput,
    TokenApproveInput,
    TokenBalanceInput,
    TokenInfoInput,
    TokenRefInput,
    TokenTransferInput,
  )


def resolve_token(params: TokenRefInput) -> str:
  ref = params.token_ref
  address = tokens.resolve(ref)
  if address is None:
    raise ResolutionError(f'Unknown token: "{ref}". Supported tokens: {tokens.describe_supported()}')
  return address


async def erc20_balance(agent: StoryAgentKit, params: TokenBalanceInput) -> Result:
  try:
    token_address = resolve_token(params)
    owner = params.owner_address or agent.get_wallet_address()
    balance = await erc20_api.get_token_balance(agent, token_address, owner)
    return success(
      balance=balance,
      token_address=token_address,
      token_name=tokens.display_name(token_address),
      owner_address=owner,
    )
  except Exception as e:
    return log_and_format_error("erc20_balance", e, ErrorCategory.ERC20)


async def erc20_transfer(agent: StoryAgentKit, params: TokenTransferInput) -> Result:
  try:
    token_address = resolve_token(params)
    tx_hash = await erc20_api.transfer_token(
      agent, token_address, params.to, params.amount, params.wait_for_confirmation
    )
    return success(
      tx_hash=tx_hash,
      token_address=token_address,
      to=params.to,
      amount=params.amount,
      confirmed=params.wait_for_confirmation,
    )
  except Exception as e:
    return log_and_format_error("erc20_transfer", e, ErrorCategory.ERC20)


async def erc20_approve(agent: StoryAgentKit, params: TokenApproveInput) -> Result:
  try:
    token_address = resolve_token(params)
    tx_hash = await erc20_api.approve_token(
      agent, token_address, params.spender, params.amount, params.wait_for_confirmation
    )
    return success(
      tx_hash=tx_hash,
      token_address=token_address,
      spender=params.spender,
      amount=params.amount,
      confirmed=params.wait_for_confirmation,
    )
  except Exception as e:
    return log_and_format_error("erc20_approve", e, ErrorCategory.ERC20)


async def erc20_allowance(agent: StoryAgentKit, params: TokenAllowanceInput) -> Result:
  try:
    token_address = resolve_token(params)
    owner = params.owner_address or agent.get_wallet_address()
    allowance = await erc20_api.get_token_allowance(
      agent, token_address, owner, params.spender_address
    )
    return success(
      allowance=allowance,
      token_address=token_address,
      owner_address=owner,
      spender_address=params.spender_address,
    )
  except Exception as e:
    return log_and_format_error("erc20_allowance", e, ErrorCategory.ERC20)


async def erc20_info(agent: StoryAgentKit, params: TokenInfoInput) -> Result:
  try:
    token_address = resolve_token(params)
    info = await erc20_api.get_token_info(agent, token_address)
    return success(info=info, token_address=token_address)
  except Exception as e:
    return log_and_format_error("erc20_info", e, ErrorCategory.ERC20)


async def erc20_supported_tokens(agent: StoryAgentKit, params: EmptyInput) -> Result:
  return success(tokens=tokens.supported_tokens())
