"""
Shared fixtures.

- FakeChainClient: in-memory ChainClient that records every call
- FakeMetricsClient: canned Metapool metrics payload
- agent: StoryAgentKit wired to both fakes
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from skills.story.client.chain_client import PreparedCall
from skills.story.client.wallet_client import StoryAgentKit
from skills.story.server import set_agent

WALLET = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
OTHER = "0x1234567890123456789012345678901234567890"
TX_HASH = "0x" + "ab" * 32

METRICS = {
  "st_ip_apy": 12.5,
  "st_ip_3_day_apy": 12.1,
  "st_ip_7_day_apy": "12.3",
  "st_ip_15_day_apy": 12.4,
  "st_ip_30_day_apy": None,
}


class FakeChainClient:
  """ChainClient double.

  ``reads`` maps a contract function name to its return value, or to a
  callable taking the call args. ``fail`` maps an operation name (``read``,
  ``simulate``, ``write``, ``send``, ``wait``, ``balance``) to the exception
  it should raise.
  """

  def __init__(
    self,
    address: str = WALLET,
    reads: dict[str, Any] | None = None,
    balances: dict[str, int] | None = None,
  ) -> None:
    self._address = address
    self.reads: dict[str, Any] = reads or {}
    self.balances: dict[str, int] = balances or {}
    self.fail: dict[str, Exception] = {}
    self.calls: list[tuple[Any, ...]] = []

  @property
  def address(self) -> str:
    return self._address

  def _check(self, op: str) -> None:
    if op in self.fail:
      raise self.fail[op]

  def ops(self) -> list[str]:
    return [c[0] for c in self.calls]

  async def get_balance(self, address: str) -> int:
    self.calls.append(("balance", address))
    self._check("balance")
    return self.balances.get(address.lower(), 0)

  async def read_contract(
    self, address: str, abi: list[dict], function: str, args: Sequence[Any] = ()
  ) -> Any:
    self.calls.append(("read", address, function, tuple(args)))
    self._check("read")
    value = self.reads[function]
    return value(tuple(args)) if callable(value) else value

  async def simulate_contract(
    self,
    address: str,
    abi: list[dict],
    function: str,
    args: Sequence[Any] = (),
    value: int = 0,
  ) -> PreparedCall:
    self.calls.append(("simulate", address, function, tuple(args), value))
    self._check("simulate")
    return PreparedCall(
      address=address, abi=abi, function=function, args=tuple(args), value=value, sender=self._address
    )

  async def write_contract(self, request: PreparedCall) -> str:
    self.calls.append(("write", request.address, request.function, request.args, request.value))
    self._check("write")
    return TX_HASH

  async def send_transaction(self, to: str, value: int) -> str:
    self.calls.append(("send", to, value))
    self._check("send")
    return TX_HASH

  async def wait_for_receipt(self, tx_hash: str, timeout: float | None = None) -> dict[str, Any]:
    self.calls.append(("wait", tx_hash, timeout))
    self._check("wait")
    return {"status": 1, "transactionHash": tx_hash}


class FakeMetricsClient:
  def __init__(self, data: dict[str, Any] | None = None, error: Exception | None = None) -> None:
    self.data = METRICS if data is None else data
    self.error = error
    self.calls = 0

  async def fetch_metrics(self) -> dict[str, Any]:
    self.calls += 1
    if self.error is not None:
      raise self.error
    return dict(self.data)


@pytest.fixture
def chain():
  return FakeChainClient()


@pytest.fixture
def metrics():
  return FakeMetricsClient()


@pytest.fixture
def agent(chain, metrics):
  return StoryAgentKit(chain_client=chain, metrics_client=metrics, receipt_timeout=5.0)


@pytest.fixture(autouse=True)
def _reset_agent():
  """Tool dispatch goes through a module-level agent; keep tests isolated."""
  set_agent(None)
  yield
  set_agent(None)
