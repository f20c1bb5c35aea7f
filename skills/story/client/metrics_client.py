"""
Async HTTP client for the Metapool metrics endpoint (staking APY data).
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ..constants import METRICS_TIMEOUT, METRICS_URL
from ..errors import MetricsApiError

log = logging.getLogger("skill.story.metrics")


class MetricsClient:
  """Fetches Metapool metrics. No retries; callers decide."""

  def __init__(self, url: str = METRICS_URL, timeout: float = METRICS_TIMEOUT) -> None:
    self.url = url
    self._timeout = aiohttp.ClientTimeout(total=timeout)

  async def fetch_metrics(self) -> dict[str, Any]:
    try:
      async with aiohttp.ClientSession(timeout=self._timeout) as session:
        async with session.get(self.url) as resp:
          if resp.status >= 400:
            text = await resp.text()
            raise MetricsApiError(resp.status, text[:200] or resp.reason or "request failed")
          data = await resp.json(content_type=None)
    except (TimeoutError, aiohttp.ClientError, ValueError) as e:
      raise MetricsApiError(0, f"Request failed: {e}") from e

    if not isinstance(data, dict):
      raise MetricsApiError(200, "Unexpected metrics payload")
    return data
