"""
Native IP actions.
"""

from __future__ import annotations

from ..handlers.native import native_balance, native_transfer
from ..schemas import NativeBalanceInput, NativeTransferInput
from .registry import Action, ActionExample

_WALLET = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
_RECIPIENT = "0x1234567890123456789012345678901234567890"
_TX = "0xabcdef1234567890abcdef1234567890abcdef1234567890abcdef1234567890"

NATIVE_BALANCE = Action(
  name="native_balance",
  similes=("check balance", "get wallet balance", "view balance", "show balance"),
  description=(
    "Get the native IP balance of a Story wallet. "
    "Leave the address out to check your own wallet."
  ),
  examples=(
    ActionExample(
      input={},
      output={"status": "success", "balance": "12.5", "address": _WALLET, "symbol": "IP"},
      explanation="Get the balance of your own wallet",
    ),
    ActionExample(
      input={"address": _RECIPIENT},
      output={"status": "success", "balance": "0.75", "address": _RECIPIENT, "symbol": "IP"},
      explanation="Get the balance of another address",
    ),
  ),
  input_model=NativeBalanceInput,
  handler=native_balance,
)

NATIVE_TRANSFER = Action(
  name="native_transfer",
  similes=("transfer ip", "send ip", "send native tokens", "transfer native tokens"),
  description="Transfer native IP tokens to another address.",
  examples=(
    ActionExample(
      input={"to": _RECIPIENT, "amount": "1.5"},
      output={
        "status": "success",
        "tx_hash": _TX,
        "from": _WALLET,
        "to": _RECIPIENT,
        "amount": "1.5",
        "confirmed": False,
      },
      explanation="Send 1.5 IP and return as soon as the transaction is broadcast",
    ),
  ),
  input_model=NativeTransferInput,
  handler=native_transfer,
)

NATIVE_ACTIONS = (NATIVE_BALANCE, NATIVE_TRANSFER)
