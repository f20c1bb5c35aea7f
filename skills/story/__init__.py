"""
Story Agent Kit - wallet, ERC20 and Metapool staking operations on the
Story chain, exposed as plain async functions, an action registry, MCP
tools, a runtime skill and LangChain tools.

Usage:
    from skills.story import StoryAgentKit, invoke

    agent = StoryAgentKit.from_env()
    result = await invoke(agent, "native_balance", {})
"""

from .actions import ACTIONS, Action, ActionExample, ActionRegistry, get, invoke, list_actions, registry
from .client import ChainClient, MetricsClient, PreparedCall, StoryAgentKit, Web3ChainClient
from .config import NETWORKS, STORY_AENEID, STORY_MAINNET, NetworkConfig, StoryConfig
from .errors import (
  ChainQueryError,
  ConfigError,
  ConfirmationTimeout,
  DuplicateActionError,
  InsufficientBalanceError,
  InvalidInputError,
  MetricsApiError,
  ResolutionError,
  SimulationError,
  StoryKitError,
  SubmissionError,
  TransferError,
  UnknownActionError,
  ValidationError,
)
from .helpers import format_units, parse_units
from .langchain_tools import create_langchain_tools

__all__ = [
  "ACTIONS",
  "NETWORKS",
  "STORY_AENEID",
  "STORY_MAINNET",
  "Action",
  "ActionExample",
  "ActionRegistry",
  "ChainClient",
  "ChainQueryError",
  "ConfigError",
  "ConfirmationTimeout",
  "DuplicateActionError",
  "InsufficientBalanceError",
  "InvalidInputError",
  "MetricsApiError",
  "MetricsClient",
  "NetworkConfig",
  "PreparedCall",
  "ResolutionError",
  "SimulationError",
  "StoryAgentKit",
  "StoryConfig",
  "StoryKitError",
  "SubmissionError",
  "TransferError",
  "UnknownActionError",
  "ValidationError",
  "Web3ChainClient",
  "create_langchain_tools",
  "format_units",
  "get",
  "invoke",
  "list_actions",
  "parse_units",
  "registry",
]
