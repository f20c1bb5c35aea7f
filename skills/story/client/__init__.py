"""
Chain, metrics and wallet clients.
"""

from .chain_client import ChainClient, PreparedCall, Web3ChainClient
from .metrics_client import MetricsClient
from .wallet_client import StoryAgentKit

__all__ = [
  "ChainClient",
  "MetricsClient",
  "PreparedCall",
  "StoryAgentKit",
  "Web3ChainClient",
]
