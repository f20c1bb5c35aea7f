"""
Metapool liquid staking actions.
"""

from __future__ import annotations

from ..constants import UNSTAKE_RELEASE_NOTE
from ..handlers.metapool import (
  metapool_apy,
  metapool_stake,
  metapool_stip_balance,
  metapool_tvl,
  metapool_unstake,
)
from ..schemas import EmptyInput, StakeInput, StipBalanceInput, UnstakeInput
from .registry import Action, ActionExample

_WALLET = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
_TX = "0xabcdef1234567890abcdef1234567890abcdef1234567890abcdef1234567890"

METAPOOL_TVL = Action(
  name="metapool_tvl",
  similes=("check tvl", "get metapool tvl", "view total value locked", "show metapool assets"),
  description=(
    "Get the total value locked (TVL) in the Metapool contract on Story. "
    "Metapool is multichain; this reads the Story deployment only."
  ),
  examples=(
    ActionExample(
      input={},
      output={
        "status": "success",
        "tvl": "1000000",
        "symbol": "IP",
        "formatted_tvl": "1000000 IP",
      },
      explanation="Read the IP held by the Metapool vault",
    ),
  ),
  input_model=EmptyInput,
  handler=metapool_tvl,
)

METAPOOL_STAKE = Action(
  name="metapool_stake",
  similes=("stake ip", "deposit ip", "get stip", "stake tokens", "deposit tokens"),
  description=(
    "Stake native IP in the Metapool contract on Story and receive staked IP "
    "(stIP) in return."
  ),
  examples=(
    ActionExample(
      input={"amount": "10"},
      output={"status": "success", "tx_hash": _TX, "amount": "10", "confirmed": False},
      explanation="Stake 10 IP",
    ),
  ),
  input_model=StakeInput,
  handler=metapool_stake,
)

METAPOOL_UNSTAKE = Action(
  name="metapool_unstake",
  similes=("unstake ip", "withdraw ip", "redeem stip", "unstake tokens", "withdraw tokens"),
  description=(
    "Unstake stIP from the Metapool contract on Story to receive IP. "
    "Funds are released after a 14-day waiting period and the minimum "
    'unstake amount is 0.1 stIP. Pass "all" to unstake the whole balance.'
  ),
  examples=(
    ActionExample(
      input={"amount": "5"},
      output={
        "status": "success",
        "tx_hash": _TX,
        "amount": "5",
        "unstake_all": False,
        "note": UNSTAKE_RELEASE_NOTE,
        "confirmed": False,
      },
      explanation="Unstake 5 stIP",
    ),
    ActionExample(
      input={"amount": "all"},
      output={
        "status": "success",
        "tx_hash": _TX,
        "amount": "12.34",
        "unstake_all": True,
        "note": UNSTAKE_RELEASE_NOTE,
        "confirmed": False,
      },
      explanation="Unstake every stIP the wallet holds",
    ),
  ),
  input_model=UnstakeInput,
  handler=metapool_unstake,
)

METAPOOL_APY = Action(
  name="metapool_apy",
  similes=("check apy", "get metapool apy", "view staking rewards", "show ip staking returns"),
  description=(
    "Get the current APY for staking IP on Metapool, along with the 3, 7, 15 "
    "and 30 day averages."
  ),
  examples=(
    ActionExample(
      input={},
      output={
        "status": "success",
        "apy": 12.5,
        "three_day": 12.1,
        "seven_day": 12.3,
        "fifteen_day": 12.4,
        "thirty_day": 12.6,
        "formatted_apy": "12.5%",
      },
      explanation="Check the staking yield",
    ),
  ),
  input_model=EmptyInput,
  handler=metapool_apy,
)

METAPOOL_STIP_BALANCE = Action(
  name="metapool_stip_balance",
  similes=("check stip balance", "view staked ip", "show my stake", "how much stip"),
  description="Get the stIP balance of an address. Leave the address out to check your own wallet.",
  examples=(
    ActionExample(
      input={},
      output={"status": "success", "balance": "12.34", "address": _WALLET, "symbol": "stIP"},
      explanation="Check how much stIP your wallet holds",
    ),
  ),
  input_model=StipBalanceInput,
  handler=metapool_stip_balance,
)

METAPOOL_ACTIONS = (
  METAPOOL_TVL,
  METAPOOL_STAKE,
  METAPOOL_UNSTAKE,
  METAPOOL_APY,
  METAPOOL_STIP_BALANCE,
)
