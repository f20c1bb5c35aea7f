"""
Chain client adapter over AsyncWeb3 and eth_account.

The rest of the kit talks to the chain only through the ``ChainClient``
protocol. ``Web3ChainClient`` is the production implementation; library
exceptions are translated into the kit's error types here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3
from web3.exceptions import TimeExhausted

from ..errors import (
  ChainQueryError,
  ConfigError,
  ConfirmationTimeout,
  SimulationError,
  SubmissionError,
  TransferError,
)

log = logging.getLogger("skill.story.chain")


@dataclass(frozen=True)
class PreparedCall:
  """A contract call that passed simulation and is ready to be signed."""

  address: str
  abi: list[dict] = field(repr=False)
  function: str
  args: tuple[Any, ...] = ()
  value: int = 0
  sender: str = ""


@runtime_checkable
class ChainClient(Protocol):
  """Capabilities the kit needs from the chain."""

  @property
  def address(self) -> str: ...

  async def get_balance(self, address: str) -> int: ...

  async def read_contract(
    self, address: str, abi: list[dict], function: str, args: Sequence[Any] = ()
  ) -> Any: ...

  async def simulate_contract(
    self,
    address: str,
    abi: list[dict],
    function: str,
    args: Sequence[Any] = (),
    value: int = 0,
  ) -> PreparedCall: ...

  async def write_contract(self, request: PreparedCall) -> str: ...

  async def send_transaction(self, to: str, value: int) -> str: ...

  async def wait_for_receipt(self, tx_hash: str, timeout: float | None = None) -> dict[str, Any]: ...


def _checksum_args(args: Sequence[Any]) -> tuple[Any, ...]:
  return tuple(
    Web3.to_checksum_address(a) if isinstance(a, str) and Web3.is_address(a) else a for a in args
  )


def load_account(private_key: str) -> LocalAccount:
  try:
    return Account.from_key(private_key)
  except Exception as exc:
    raise ConfigError(f"Invalid private key: {exc}") from None


class Web3ChainClient:
  """ChainClient backed by an AsyncWeb3 HTTP provider and a local signer."""

  def __init__(self, account: LocalAccount, rpc_url: str, chain_id: int) -> None:
    self._account = account
    self.rpc_url = rpc_url
    self.chain_id = chain_id
    self._w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))

  @property
  def address(self) -> str:
    return self._account.address

  def _function(self, address: str, abi: list[dict], function: str, args: Sequence[Any]) -> Any:
    contract = self._w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
    return contract.functions[function](*_checksum_args(args))

  async def _next_nonce(self) -> int:
    return await self._w3.eth.get_transaction_count(self.address, "pending")

  # ------------------------------------------------------------------
  # Reads
  # ------------------------------------------------------------------

  async def get_balance(self, address: str) -> int:
    try:
      return await self._w3.eth.get_balance(Web3.to_checksum_address(address))
    except Exception as exc:
      raise ChainQueryError(f"Failed to get balance for {address}: {exc}") from exc

  async def read_contract(
    self, address: str, abi: list[dict], function: str, args: Sequence[Any] = ()
  ) -> Any:
    try:
      return await self._function(address, abi, function, args).call()
    except Exception as exc:
      raise ChainQueryError(f"{function}() call on {address} failed: {exc}") from exc

  # ------------------------------------------------------------------
  # Writes
  # ------------------------------------------------------------------

  async def simulate_contract(
    self,
    address: str,
    abi: list[dict],
    function: str,
    args: Sequence[Any] = (),
    value: int = 0,
  ) -> PreparedCall:
    try:
      await self._function(address, abi, function, args).call({"from": self.address, "value": value})
    except Exception as exc:
      raise SimulationError(f"{function}() on {address} would fail: {exc}") from exc
    return PreparedCall(
      address=address,
      abi=abi,
      function=function,
      args=tuple(args),
      value=value,
      sender=self.address,
    )

  async def write_contract(self, request: PreparedCall) -> str:
    try:
      fn = self._function(request.address, request.abi, request.function, request.args)
      tx = await fn.build_transaction(
        {
          "from": self.address,
          "value": request.value,
          "nonce": await self._next_nonce(),
          "chainId": self.chain_id,
        }
      )
      signed = self._account.sign_transaction(tx)
      tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
    except Exception as exc:
      raise SubmissionError(f"Failed to submit {request.function}(): {exc}") from exc
    log.info("Submitted %s() to %s: %s", request.function, request.address, Web3.to_hex(tx_hash))
    return Web3.to_hex(tx_hash)

  async def send_transaction(self, to: str, value: int) -> str:
    try:
      tx: dict[str, Any] = {
        "from": self.address,
        "to": Web3.to_checksum_address(to),
        "value": value,
        "nonce": await self._next_nonce(),
        "chainId": self.chain_id,
      }
      tx["gas"] = await self._w3.eth.estimate_gas(tx)
      tx["gasPrice"] = await self._w3.eth.gas_price
      signed = self._account.sign_transaction(tx)
      tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
    except Exception as exc:
      raise TransferError(f"Failed to transfer to {to}: {exc}") from exc
    log.info("Sent %d wei to %s: %s", value, to, Web3.to_hex(tx_hash))
    return Web3.to_hex(tx_hash)

  async def wait_for_receipt(self, tx_hash: str, timeout: float | None = None) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if timeout is not None:
      kwargs["timeout"] = timeout
    try:
      receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash, **kwargs)
    except TimeExhausted as exc:
      raise ConfirmationTimeout(
        f"Transaction {tx_hash} not mined within {timeout}s", tx_hash=tx_hash
      ) from exc
    except Exception as exc:
      raise ChainQueryError(
        f"Failed to get receipt for {tx_hash}: {exc}", tx_hash=tx_hash
      ) from exc

    if receipt.get("status") == 0:
      raise SubmissionError(f"Transaction {tx_hash} reverted", tx_hash=tx_hash)
    return dict(receipt)

  async def close(self) -> None:
    provider = self._w3.provider
    disconnect = getattr(provider, "disconnect", None)
    if disconnect is not None:
      await disconnect()
