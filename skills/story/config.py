"""
Network definitions and kit configuration.

Configuration comes from the environment (``WALLET_PRIVATE_KEY``,
``STORY_NETWORK``, ``RPC_URL``, ``RECEIPT_TIMEOUT``) or from the skill's
persisted ``config.json`` written by the setup flow.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .constants import DEFAULT_RECEIPT_TIMEOUT, NATIVE_DECIMALS
from .errors import ConfigError


class NetworkConfig(BaseModel):
  """A Story network the kit can connect to."""

  model_config = ConfigDict(frozen=True)

  key: str
  chain_id: int
  name: str
  rpc_url: str
  native_symbol: str = "IP"
  native_decimals: int = NATIVE_DECIMALS
  explorer_url: str | None = None


STORY_MAINNET = NetworkConfig(
  key="story",
  chain_id=1514,
  name="Story Mainnet",
  rpc_url="https://mainnet.storyrpc.io",
  explorer_url="https://explorer.story.foundation/",
)

STORY_AENEID = NetworkConfig(
  key="aeneid",
  chain_id=1315,
  name="Story Aeneid Testnet",
  rpc_url="https://aeneid.storyrpc.io",
  explorer_url="https://aeneid.storyscan.io/",
)

NETWORKS: dict[str, NetworkConfig] = {n.key: n for n in (STORY_MAINNET, STORY_AENEID)}


def get_network(key: str) -> NetworkConfig:
  network = NETWORKS.get(key.strip().lower())
  if network is None:
    raise ConfigError(f"Unknown network: {key!r}. Available: {', '.join(NETWORKS)}")
  return network


def normalize_private_key(key: str) -> str:
  key = key.strip()
  if not key.startswith("0x"):
    key = f"0x{key}"
  return key


class StoryConfig(BaseModel):
  """Everything needed to build a StoryAgentKit."""

  model_config = ConfigDict(frozen=True)

  private_key: str = Field(repr=False)
  network: str = STORY_MAINNET.key
  rpc_url: str | None = None
  receipt_timeout: float = Field(default=DEFAULT_RECEIPT_TIMEOUT, gt=0)

  @field_validator("private_key")
  @classmethod
  def _check_private_key(cls, v: str) -> str:
    if not v or not v.strip():
      raise ValueError("private key is empty")
    return normalize_private_key(v)

  @field_validator("network")
  @classmethod
  def _check_network(cls, v: str) -> str:
    key = v.strip().lower()
    if key not in NETWORKS:
      raise ValueError(f"unknown network {v!r}")
    return key

  @property
  def network_config(self) -> NetworkConfig:
    return NETWORKS[self.network]

  @property
  def effective_rpc_url(self) -> str:
    return self.rpc_url or self.network_config.rpc_url

  @classmethod
  def from_mapping(cls, data: Mapping[str, Any]) -> StoryConfig:
    try:
      return cls.model_validate(dict(data))
    except PydanticValidationError as exc:
      first = exc.errors()[0] if exc.errors() else {}
      field = ".".join(str(p) for p in first.get("loc", ())) or "config"
      raise ConfigError(f"Invalid configuration for '{field}': {first.get('msg', exc)}") from None

  @classmethod
  def from_env(cls, environ: Mapping[str, str] | None = None) -> StoryConfig:
    env = os.environ if environ is None else environ
    private_key = env.get("WALLET_PRIVATE_KEY", "")
    if not private_key.strip():
      raise ConfigError("WALLET_PRIVATE_KEY is required")

    data: dict[str, Any] = {"private_key": private_key}
    if env.get("STORY_NETWORK"):
      data["network"] = env["STORY_NETWORK"]
    if env.get("RPC_URL"):
      data["rpc_url"] = env["RPC_URL"]
    if env.get("RECEIPT_TIMEOUT"):
      try:
        data["receipt_timeout"] = float(env["RECEIPT_TIMEOUT"])
      except ValueError:
        raise ConfigError(f"RECEIPT_TIMEOUT must be a number, got {env['RECEIPT_TIMEOUT']!r}") from None
    return cls.from_mapping(data)

  @classmethod
  def from_json(cls, raw: str) -> StoryConfig:
    try:
      data = json.loads(raw)
    except json.JSONDecodeError as exc:
      raise ConfigError(f"config.json is not valid JSON: {exc}") from None
    if not isinstance(data, dict):
      raise ConfigError("config.json must contain an object")
    return cls.from_mapping(data)

  def to_json(self) -> str:
    return json.dumps(self.model_dump(exclude_none=True), indent=2)
