"""
Configuration from the environment and from config.json.
"""

from __future__ import annotations

import json

import pytest

from skills.story.client.wallet_client import StoryAgentKit
from skills.story.config import STORY_AENEID, STORY_MAINNET, StoryConfig, get_network
from skills.story.errors import ConfigError

from .conftest import TEST_PRIVATE_KEY, WALLET


class TestFromEnv:
  def test_missing_key(self):
    with pytest.raises(ConfigError, match="WALLET_PRIVATE_KEY is required"):
      StoryConfig.from_env({})

  def test_defaults(self):
    config = StoryConfig.from_env({"WALLET_PRIVATE_KEY": TEST_PRIVATE_KEY})
    assert config.network == "story"
    assert config.network_config == STORY_MAINNET
    assert config.effective_rpc_url == "https://mainnet.storyrpc.io"
    assert config.receipt_timeout == 120.0

  def test_prefix_added(self):
    config = StoryConfig.from_env({"WALLET_PRIVATE_KEY": TEST_PRIVATE_KEY[2:]})
    assert config.private_key == TEST_PRIVATE_KEY

  def test_overrides(self):
    config = StoryConfig.from_env(
      {
        "WALLET_PRIVATE_KEY": TEST_PRIVATE_KEY,
        "STORY_NETWORK": "Aeneid",
        "RPC_URL": "http://localhost:8545",
        "RECEIPT_TIMEOUT": "30",
      }
    )
    assert config.network_config == STORY_AENEID
    assert config.effective_rpc_url == "http://localhost:8545"
    assert config.receipt_timeout == 30.0

  def test_unknown_network(self):
    with pytest.raises(ConfigError, match="network"):
      StoryConfig.from_env({"WALLET_PRIVATE_KEY": TEST_PRIVATE_KEY, "STORY_NETWORK": "goerli"})

  def test_bad_timeout(self):
    with pytest.raises(ConfigError, match="RECEIPT_TIMEOUT"):
      StoryConfig.from_env({"WALLET_PRIVATE_KEY": TEST_PRIVATE_KEY, "RECEIPT_TIMEOUT": "soon"})

  def test_private_key_not_in_repr(self):
    config = StoryConfig.from_env({"WALLET_PRIVATE_KEY": TEST_PRIVATE_KEY})
    assert TEST_PRIVATE_KEY[2:] not in repr(config)


class TestFromJson:
  def test_round_trip(self):
    config = StoryConfig(private_key=TEST_PRIVATE_KEY, network="aeneid")
    loaded = StoryConfig.from_json(config.to_json())
    assert loaded == config
    assert "rpc_url" not in json.loads(config.to_json())

  def test_invalid_json(self):
    with pytest.raises(ConfigError, match="not valid JSON"):
      StoryConfig.from_json("{nope")

  def test_not_an_object(self):
    with pytest.raises(ConfigError):
      StoryConfig.from_json("[]")


class TestNetworks:
  def test_chain_ids(self):
    assert get_network("story").chain_id == 1514
    assert get_network("aeneid").chain_id == 1315
    assert get_network("story").native_decimals == 18

  def test_unknown(self):
    with pytest.raises(ConfigError, match="Unknown network"):
      get_network("mainnet")


class TestAgentFromConfig:
  def test_address_derived_from_key(self):
    agent = StoryAgentKit.from_config(StoryConfig(private_key=TEST_PRIVATE_KEY, network="aeneid"))
    assert agent.get_wallet_address() == WALLET
    assert agent.address == WALLET
    assert agent.network == STORY_AENEID
    assert agent.rpc_url == STORY_AENEID.rpc_url

  def test_invalid_key(self):
    with pytest.raises(ConfigError, match="Invalid private key"):
      StoryAgentKit(private_key="0x1234")

  def test_key_required_without_client(self):
    with pytest.raises(ConfigError):
      StoryAgentKit()
