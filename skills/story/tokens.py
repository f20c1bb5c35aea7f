"""
Static registry of known Story tokens.

Lookup is fuzzy: the input is upper-cased, punctuation is turned into
spaces, and a token matches when the normalized input equals or contains
one of its aliases. Tokens are checked in registry order.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from .constants import STAKED_IP_ADDRESS

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_NON_ALNUM_RE = re.compile(r"[^A-Z0-9]")
_SPACES_RE = re.compile(r"\s+")


class TokenInfo(BaseModel):
  model_config = ConfigDict(frozen=True)

  symbol: str
  name: str
  address: str
  aliases: tuple[str, ...]

  @property
  def label(self) -> str:
    return f"{self.symbol} ({self.name})"


KNOWN_TOKENS: tuple[TokenInfo, ...] = (
  TokenInfo(
    symbol="USDT",
    name="Tether",
    address="0x674843c06ff83502ddb4d37c2e09c01cda38cbc8",
    aliases=("USDT", "TETHER"),
  ),
  TokenInfo(
    symbol="USDC",
    name="USD Coin",
    address="0xf1815bd50389c46847f0bda824ec8da914045d14",
    aliases=("USDC", "USD COIN"),
  ),
  TokenInfo(
    symbol="stIP",
    name="Staked IP",
    address=STAKED_IP_ADDRESS,
    aliases=("STIP", "STAKED IP"),
  ),
)


def normalize(value: str) -> str:
  upper = _NON_ALNUM_RE.sub(" ", value.upper())
  return _SPACES_RE.sub(" ", upper).strip()


def is_address(value: str) -> bool:
  return bool(ADDRESS_RE.match(value))


def resolve(value: str | None) -> str | None:
  """Resolve a token symbol, name or address to a contract address."""
  if not value:
    return None

  normalized = normalize(value)
  if normalized:
    for token in KNOWN_TOKENS:
      if any(alias == normalized or alias in normalized for alias in token.aliases):
        return token.address

  if is_address(value.strip()):
    return value.strip()
  return None


def display_name(address: str) -> str:
  """Human label for a token address; unknown addresses are echoed back."""
  if not address:
    return "Unknown token"
  lowered = address.lower()
  for token in KNOWN_TOKENS:
    if token.address.lower() == lowered:
      return token.label
  return address


def is_supported(value: str) -> bool:
  return resolve(value) is not None


def supported_tokens() -> list[dict[str, str]]:
  return [{"symbol": t.symbol, "name": t.name, "address": t.address} for t in KNOWN_TOKENS]


def describe_supported() -> str:
  return ", ".join(f"{t.label} ({t.address})" for t in KNOWN_TOKENS)
