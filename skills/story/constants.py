"""
Contract addresses, ABIs and protocol constants.
"""

from __future__ import annotations

from decimal import Decimal

NATIVE_DECIMALS = 18
DEFAULT_RECEIPT_TIMEOUT = 120.0

# ---------------------------------------------------------------------------
# ERC20
# ---------------------------------------------------------------------------

ERC20_ABI: list[dict] = [
  {
    "type": "function",
    "name": "name",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "string"}],
  },
  {
    "type": "function",
    "name": "symbol",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "string"}],
  },
  {
    "type": "function",
    "name": "decimals",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint8"}],
  },
  {
    "type": "function",
    "name": "totalSupply",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint256"}],
  },
  {
    "type": "function",
    "name": "balanceOf",
    "stateMutability": "view",
    "inputs": [{"name": "account", "type": "address"}],
    "outputs": [{"name": "", "type": "uint256"}],
  },
  {
    "type": "function",
    "name": "allowance",
    "stateMutability": "view",
    "inputs": [
      {"name": "owner", "type": "address"},
      {"name": "spender", "type": "address"},
    ],
    "outputs": [{"name": "", "type": "uint256"}],
  },
  {
    "type": "function",
    "name": "transfer",
    "stateMutability": "nonpayable",
    "inputs": [
      {"name": "to", "type": "address"},
      {"name": "amount", "type": "uint256"},
    ],
    "outputs": [{"name": "", "type": "bool"}],
  },
  {
    "type": "function",
    "name": "approve",
    "stateMutability": "nonpayable",
    "inputs": [
      {"name": "spender", "type": "address"},
      {"name": "amount", "type": "uint256"},
    ],
    "outputs": [{"name": "", "type": "bool"}],
  },
]

# ---------------------------------------------------------------------------
# Metapool (staked IP vault)
# ---------------------------------------------------------------------------

STAKED_IP_ADDRESS = "0xd07Faed671decf3C5A6cc038dAD97c8EFDb507c0"

STAKED_IP_ABI: list[dict] = [
  {
    "type": "function",
    "name": "totalAssets",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint256"}],
  },
  {
    "type": "function",
    "name": "decimals",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "uint8"}],
  },
  {
    "type": "function",
    "name": "symbol",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "string"}],
  },
  {
    "type": "function",
    "name": "balanceOf",
    "stateMutability": "view",
    "inputs": [{"name": "account", "type": "address"}],
    "outputs": [{"name": "", "type": "uint256"}],
  },
  {
    "type": "function",
    "name": "depositIP",
    "stateMutability": "payable",
    "inputs": [{"name": "receiver", "type": "address"}],
    "outputs": [],
  },
  {
    "type": "function",
    "name": "redeem",
    "stateMutability": "nonpayable",
    "inputs": [
      {"name": "shares", "type": "uint256"},
      {"name": "receiver", "type": "address"},
      {"name": "owner", "type": "address"},
    ],
    "outputs": [],
  },
]

MIN_UNSTAKE_AMOUNT = Decimal("0.1")
UNSTAKE_RELEASE_NOTE = "Your funds will be released after a 14-day waiting period"

METRICS_URL = "https://validators.narwallets.com/metrics_json"
METRICS_TIMEOUT = 30
