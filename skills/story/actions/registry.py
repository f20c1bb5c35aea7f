"""
Action registry.

An action bundles a name, the phrases an agent may map to it, a description,
worked examples, an input model and an async handler. ``invoke`` is the one
entry point hosts use; it validates the arguments against the input model and
always returns a result dict.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..errors import DuplicateActionError, InvalidInputError, UnknownActionError
from ..helpers import ErrorCategory, Result, error_result, log_and_format_error
from ..validation import invalid_input_from

log = logging.getLogger("skill.story.actions")

Handler = Callable[[Any, Any], Awaitable[Result]]


class ActionExample(BaseModel):
  model_config = ConfigDict(frozen=True)

  input: dict[str, Any] = Field(default_factory=dict)
  output: dict[str, Any] = Field(default_factory=dict)
  explanation: str = ""


class Action(BaseModel):
  model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

  name: str
  similes: tuple[str, ...] = ()
  description: str
  examples: tuple[ActionExample, ...] = ()
  input_model: type[BaseModel]
  handler: Handler

  def parse_input(self, args: dict[str, Any] | str | None) -> BaseModel:
    """Validate raw arguments; raises InvalidInputError on the first bad field."""
    if args is None or args == "":
      args = {}
    if isinstance(args, str):
      try:
        args = json.loads(args)
      except json.JSONDecodeError as e:
        raise InvalidInputError("input", f"not valid JSON ({e.msg})") from None
    if not isinstance(args, dict):
      raise InvalidInputError("input", "expected an object of named arguments")
    try:
      return self.input_model.model_validate(args)
    except PydanticValidationError as e:
      raise invalid_input_from(e) from None


class ActionRegistry:
  def __init__(self) -> None:
    self._actions: dict[str, Action] = {}

  def register(self, action: Action) -> None:
    if action.name in self._actions:
      raise DuplicateActionError(action.name)
    self._actions[action.name] = action

  def get(self, name: str) -> Action | None:
    return self._actions.get(name)

  def list_actions(self) -> dict[str, str]:
    return {name: action.description for name, action in self._actions.items()}

  def names(self) -> list[str]:
    return list(self._actions)

  def __iter__(self):
    return iter(self._actions.values())

  def __len__(self) -> int:
    return len(self._actions)

  def __contains__(self, name: object) -> bool:
    return name in self._actions

  async def invoke(
    self,
    agent: Any,
    name: str,
    args: dict[str, Any] | str | None = None,
  ) -> Result:
    """Run an action by name. Never raises."""
    action = self.get(name)
    if action is None:
      err = UnknownActionError(name)
      log.warning("%s", err)
      return error_result(str(err), err.code)

    try:
      params = action.parse_input(args)
    except InvalidInputError as e:
      log.info("Rejected input for %s: %s", name, e)
      return error_result(str(e), e.code)

    log.debug("Invoking %s", name)
    try:
      return await action.handler(agent, params)
    except Exception as e:
      return log_and_format_error(name, e, ErrorCategory.DISPATCH)
