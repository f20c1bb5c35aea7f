"""
Story skill setup flow - multi-step interactive configuration.

Steps:
  1. private_key - Enter the wallet private key (hex, 0x prefix optional)
  2. network     - Select Story mainnet or the Aeneid testnet, optionally
                   overriding the RPC URL

On completion the configuration is persisted via ctx.write_data("config.json", ...).
"""

from __future__ import annotations

import logging
from typing import Any

from dev.types.skill_types import (
  SetupField,
  SetupFieldError,
  SetupFieldOption,
  SetupResult,
  SetupStep,
)

from .client.chain_client import load_account
from .config import NETWORKS, STORY_MAINNET, StoryConfig, normalize_private_key
from .errors import ConfigError

log = logging.getLogger("skill.story.setup")

# ---------------------------------------------------------------------------
# Module-level transient state
# ---------------------------------------------------------------------------

_private_key: str = ""
_address: str = ""


def _reset_state() -> None:
  global _private_key, _address
  _private_key = ""
  _address = ""


# ---------------------------------------------------------------------------
# Step definitions
# ---------------------------------------------------------------------------

STEP_PRIVATE_KEY = SetupStep(
  id="private_key",
  title="Wallet Key",
  description=(
    "Enter the private key of the wallet the agent will sign with. "
    "It is stored in the skill's data directory and never leaves this machine."
  ),
  fields=[
    SetupField(
      name="private_key",
      type="password",
      label="Private Key",
      description="64 hex characters, with or without the 0x prefix",
      required=True,
      placeholder="0x...",
    ),
  ],
)

STEP_NETWORK = SetupStep(
  id="network",
  title="Network",
  description="Select the Story network to connect to.",
  fields=[
    SetupField(
      name="network",
      type="select",
      label="Network",
      required=True,
      default=STORY_MAINNET.key,
      options=[SetupFieldOption(label=n.name, value=n.key) for n in NETWORKS.values()],
    ),
    SetupField(
      name="rpc_url",
      type="text",
      label="RPC URL",
      description="Leave empty to use the network's public RPC endpoint",
      required=False,
      placeholder=STORY_MAINNET.rpc_url,
    ),
  ],
)


# ---------------------------------------------------------------------------
# Hook handlers
# ---------------------------------------------------------------------------


async def on_setup_start(ctx: Any) -> SetupStep:
  """Return the first setup step."""
  _reset_state()
  return STEP_PRIVATE_KEY


async def on_setup_submit(ctx: Any, step_id: str, values: dict[str, Any]) -> SetupResult:
  """Validate and process a submitted step."""
  if step_id == "private_key":
    return await _handle_private_key(ctx, values)
  if step_id == "network":
    return await _handle_network(ctx, values)

  return SetupResult(
    status="error",
    errors=[SetupFieldError(field="", message=f"Unknown step: {step_id}")],
  )


async def on_setup_cancel(ctx: Any) -> None:
  """Clean up transient state on cancel."""
  _reset_state()


# ---------------------------------------------------------------------------
# Step handlers
# ---------------------------------------------------------------------------


async def _handle_private_key(ctx: Any, values: dict[str, Any]) -> SetupResult:
  global _private_key, _address

  raw_key = str(values.get("private_key", "")).strip()
  if not raw_key:
    return SetupResult(
      status="error",
      errors=[SetupFieldError(field="private_key", message="Private key is required")],
    )

  key = normalize_private_key(raw_key)
  try:
    account = load_account(key)
  except ConfigError as exc:
    return SetupResult(
      status="error",
      errors=[SetupFieldError(field="private_key", message=str(exc))],
    )

  _private_key = key
  _address = account.address
  log.info("Setup: wallet %s", _address)
  return SetupResult(status="next", next_step=STEP_NETWORK)


async def _handle_network(ctx: Any, values: dict[str, Any]) -> SetupResult:
  if not _private_key:
    return SetupResult(
      status="error",
      errors=[SetupFieldError(field="", message="Private key not set - restart setup")],
    )

  network = str(values.get("network") or STORY_MAINNET.key).strip().lower()
  if network not in NETWORKS:
    return SetupResult(
      status="error",
      errors=[SetupFieldError(field="network", message=f"Unknown network: {network}")],
    )

  rpc_url = str(values.get("rpc_url") or "").strip() or None
  if rpc_url and not rpc_url.startswith(("http://", "https://")):
    return SetupResult(
      status="error",
      errors=[SetupFieldError(field="rpc_url", message="RPC URL must start with http:// or https://")],
    )

  return await _complete_setup(ctx, network, rpc_url)


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


async def _complete_setup(ctx: Any, network: str, rpc_url: str | None) -> SetupResult:
  config = StoryConfig(private_key=_private_key, network=network, rpc_url=rpc_url)

  try:
    await ctx.write_data("config.json", config.to_json())
  except Exception as exc:
    log.warning("Could not persist config.json: %s", exc)
    return SetupResult(
      status="error",
      errors=[SetupFieldError(field="", message=f"Failed to save config: {exc}")],
    )

  address = _address
  _reset_state()

  return SetupResult(
    status="complete",
    message=f"Setup complete! Wallet {address} on {config.network_config.name}.",
  )
