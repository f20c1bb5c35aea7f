"""LangChain tool wrappers for StoryAgentKit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .actions import ACTIONS, Action, invoke
from .helpers import error_result, to_json
from .validation import invalid_input_from

if TYPE_CHECKING:
  from .client.wallet_client import StoryAgentKit


def _validation_error_json(exc: Any) -> str:
  """LangChain validates args_schema before the coroutine runs."""
  err = invalid_input_from(exc)
  return to_json(error_result(str(err), err.code))


def _wrap(agent: StoryAgentKit, action: Action, structured_tool: Any) -> Any:
  async def run(**kwargs: Any) -> str:
    return to_json(await invoke(agent, action.name, kwargs))

  description = action.description
  if action.similes:
    description = f"{description} (also: {', '.join(action.similes)})"

  return structured_tool.from_function(
    coroutine=run,
    name=action.name,
    description=description,
    args_schema=action.input_model,
    handle_validation_error=_validation_error_json,
  )


def create_langchain_tools(agent: StoryAgentKit) -> list[Any]:
  """
  Return one LangChain StructuredTool per registered action.
  Each tool returns the action result as a JSON string, including for
  arguments that fail validation.
  Requires: pip install story-agent-kit[langchain]
  """
  try:
    from langchain_core.tools import StructuredTool
  except ImportError:
    raise ImportError(
      "LangChain integration requires: pip install story-agent-kit[langchain]"
    ) from None

  return [_wrap(agent, action, StructuredTool) for action in ACTIONS]
