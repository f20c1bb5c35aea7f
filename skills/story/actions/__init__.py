"""
Default action registry with every built-in action registered.
"""

from __future__ import annotations

from typing import Any

from ..helpers import Result
from .erc20 import ERC20_ACTIONS
from .metapool import METAPOOL_ACTIONS
from .native import NATIVE_ACTIONS
from .registry import Action, ActionExample, ActionRegistry

ACTIONS: tuple[Action, ...] = (*NATIVE_ACTIONS, *ERC20_ACTIONS, *METAPOOL_ACTIONS)


def build_registry() -> ActionRegistry:
  registry = ActionRegistry()
  for action in ACTIONS:
    registry.register(action)
  return registry


registry = build_registry()


def get(name: str) -> Action | None:
  return registry.get(name)


def list_actions() -> dict[str, str]:
  return registry.list_actions()


async def invoke(agent: Any, name: str, args: dict[str, Any] | str | None = None) -> Result:
  return await registry.invoke(agent, name, args)


__all__ = [
  "ACTIONS",
  "Action",
  "ActionExample",
  "ActionRegistry",
  "build_registry",
  "get",
  "invoke",
  "list_actions",
  "registry",
]
