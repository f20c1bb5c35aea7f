"""
Wallet context for Story operations.

``StoryAgentKit`` owns the signing identity and the chain client every
action runs against. The address is derived from the private key once, at
construction.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import STORY_MAINNET, NetworkConfig, StoryConfig
from ..constants import DEFAULT_RECEIPT_TIMEOUT
from ..errors import ChainQueryError, ConfigError, StoryKitError, TransferError
from ..helpers import format_units, parse_units
from .chain_client import ChainClient, Web3ChainClient, load_account
from .metrics_client import MetricsClient

log = logging.getLogger("skill.story.wallet")


class StoryAgentKit:
  """Signing wallet plus read/write access to a Story network."""

  def __init__(
    self,
    private_key: str | None = None,
    rpc_url: str | None = None,
    network: NetworkConfig = STORY_MAINNET,
    chain_client: ChainClient | None = None,
    metrics_client: MetricsClient | Any = None,
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
  ) -> None:
    self.network = network
    self.rpc_url = rpc_url or network.rpc_url
    self.receipt_timeout = receipt_timeout

    if chain_client is None:
      if not private_key:
        raise ConfigError("private_key is required when no chain_client is given")
      account = load_account(private_key)
      chain_client = Web3ChainClient(account, self.rpc_url, network.chain_id)

    self.client: ChainClient = chain_client
    self.metrics = metrics_client or MetricsClient()
    self._address = chain_client.address

  @classmethod
  def from_config(cls, config: StoryConfig, **kwargs: Any) -> StoryAgentKit:
    return cls(
      private_key=config.private_key,
      rpc_url=config.effective_rpc_url,
      network=config.network_config,
      receipt_timeout=config.receipt_timeout,
      **kwargs,
    )

  @classmethod
  def from_env(cls, **kwargs: Any) -> StoryAgentKit:
    return cls.from_config(StoryConfig.from_env(), **kwargs)

  @property
  def address(self) -> str:
    return self._address

  def get_wallet_address(self) -> str:
    return self._address

  async def get_balance(self, address: str | None = None) -> str:
    """Native balance of ``address`` (defaults to the wallet) as a decimal string."""
    target = address or self._address
    try:
      raw = await self.client.get_balance(target)
    except ChainQueryError:
      raise
    except Exception as exc:
      raise ChainQueryError(f"Failed to get balance for {target}: {exc}") from exc
    return format_units(raw, self.network.native_decimals)

  async def transfer(self, to: str, amount: str) -> str:
    """Send native IP. Returns the transaction hash right after broadcast."""
    value = parse_units(amount, self.network.native_decimals)
    try:
      tx_hash = await self.client.send_transaction(to, value)
    except TransferError:
      raise
    except Exception as exc:
      raise TransferError(f"Transfer failed: {exc}") from exc
    log.info("Transferred %s %s to %s: %s", amount, self.network.native_symbol, to, tx_hash)
    return tx_hash

  async def wait_for_confirmation(self, tx_hash: str) -> dict[str, Any]:
    """Wait for the receipt. Errors carry the hash of the broadcast transaction."""
    try:
      return await self.client.wait_for_receipt(tx_hash, timeout=self.receipt_timeout)
    except StoryKitError as exc:
      if exc.tx_hash is None:
        exc.tx_hash = tx_hash
      raise

  async def close(self) -> None:
    close = getattr(self.client, "close", None)
    if close is not None:
      await close()
