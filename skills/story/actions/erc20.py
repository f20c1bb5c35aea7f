"""
ERC20 token actions.

Token arguments accept either ``token_address`` or ``token`` (a symbol or
name such as "USDT" or "usd coin").
"""

from __future__ import annotations

from ..handlers.erc20 import (
  erc20_allowance,
  erc20_approve,
  erc20_balance,
  erc20_info,
  erc20_supported_tokens,
  erc20_transfer,
)
from ..schemas import (
  EmptyInput,
  TokenAllowanceInput,
  TokenApproveInput,
  TokenBalanceInput,
  TokenInfoInput,
  TokenTransferInput,
)
from ..tokens import KNOWN_TOKENS
from .registry import Action, ActionExample

_USDT = KNOWN_TOKENS[0].address
_USDC = KNOWN_TOKENS[1].address
_WALLET = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
_OTHER = "0x1234567890123456789012345678901234567890"
_TX = "0xabcdef1234567890abcdef1234567890abcdef1234567890abcdef1234567890"

ERC20_BALANCE = Action(
  name="erc20_balance",
  similes=("check token balance", "get erc20 balance", "view token balance", "show token balance"),
  description="Get the balance of an ERC20 token for a specific address",
  examples=(
    ActionExample(
      input={"token": "USDT"},
      output={
        "status": "success",
        "balance": "100.5",
        "token_address": _USDT,
        "token_name": "USDT (Tether)",
        "owner_address": _WALLET,
      },
      explanation="Get the USDT balance of your wallet",
    ),
    ActionExample(
      input={"token_address": _USDC, "owner_address": _OTHER},
      output={
        "status": "success",
        "balance": "50",
        "token_address": _USDC,
        "token_name": "USDC (USD Coin)",
        "owner_address": _OTHER,
      },
      explanation="Get the USDC balance of a specific address",
    ),
  ),
  input_model=TokenBalanceInput,
  handler=erc20_balance,
)

ERC20_TRANSFER = Action(
  name="erc20_transfer",
  similes=("transfer erc20", "send tokens", "transfer tokens", "send erc20"),
  description="Transfer ERC20 tokens to another address",
  examples=(
    ActionExample(
      input={"token": "USDC", "to": _OTHER, "amount": "10.5"},
      output={
        "status": "success",
        "tx_hash": _TX,
        "token_address": _USDC,
        "to": _OTHER,
        "amount": "10.5",
        "confirmed": True,
      },
      explanation="Transfer 10.5 USDC and wait for the transaction to be mined",
    ),
  ),
  input_model=TokenTransferInput,
  handler=erc20_transfer,
)

ERC20_APPROVE = Action(
  name="erc20_approve",
  similes=("approve token spending", "approve erc20", "allow token usage", "set token allowance"),
  description="Approve an address to spend tokens on behalf of the wallet owner",
  examples=(
    ActionExample(
      input={"token": "USDT", "spender": _OTHER, "amount": "100"},
      output={
        "status": "success",
        "tx_hash": _TX,
        "token_address": _USDT,
        "spender": _OTHER,
        "amount": "100",
        "confirmed": True,
      },
      explanation="Allow the spender to use up to 100 USDT from your wallet",
    ),
  ),
  input_model=TokenApproveInput,
  handler=erc20_approve,
)

ERC20_ALLOWANCE = Action(
  name="erc20_allowance",
  similes=(
    "check token allowance",
    "get erc20 allowance",
    "view token approval",
    "show token spending limit",
  ),
  description="Get the amount of tokens a spender may use on behalf of the owner",
  examples=(
    ActionExample(
      input={"token": "USDT", "spender_address": _OTHER},
      output={
        "status": "success",
        "allowance": "100",
        "token_address": _USDT,
        "owner_address": _WALLET,
        "spender_address": _OTHER,
      },
      explanation="Check how much USDT the spender may use from your wallet",
    ),
  ),
  input_model=TokenAllowanceInput,
  handler=erc20_allowance,
)

ERC20_INFO = Action(
  name="erc20_info",
  similes=("get token details", "token information", "erc20 info", "token metadata"),
  description="Get information about an ERC20 token (name, symbol, decimals, total supply)",
  examples=(
    ActionExample(
      input={"token": "USDC"},
      output={
        "status": "success",
        "info": {
          "name": "USD Coin",
          "symbol": "USDC",
          "decimals": 6,
          "total_supply": "1000000",
        },
        "token_address": _USDC,
      },
      explanation="Get the metadata of USDC on Story",
    ),
  ),
  input_model=TokenInfoInput,
  handler=erc20_info,
)

ERC20_SUPPORTED_TOKENS = Action(
  name="erc20_supported_tokens",
  similes=("list tokens", "supported tokens", "which tokens", "known tokens"),
  description="List the tokens that can be referred to by name or symbol",
  examples=(
    ActionExample(
      input={},
      output={
        "status": "success",
        "tokens": [{"symbol": "USDT", "name": "Tether", "address": _USDT}],
      },
      explanation="List the supported tokens and their addresses",
    ),
  ),
  input_model=EmptyInput,
  handler=erc20_supported_tokens,
)

ERC20_ACTIONS = (
  ERC20_BALANCE,
  ERC20_TRANSFER,
  ERC20_APPROVE,
  ERC20_ALLOWANCE,
  ERC20_INFO,
  ERC20_SUPPORTED_TOKENS,
)
