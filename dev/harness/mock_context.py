"""
In-memory SkillContext used by hook and setup-flow tests.

Data files live in a dict, so a test can seed config.json before
``on_load`` and read back what ``on_setup_submit`` persisted. Missing
files raise FileNotFoundError like the host does.

    ctx, inspect = create_mock_context(
      MockContextOptions(initial_data={"config.json": config.to_json()})
    )
    await skill.hooks.on_load(ctx)
    assert inspect.get_state()["network"] == "story"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MockContextOptions:
  """Seed data files, seed state and the reported data_dir."""

  initial_data: dict[str, str] = field(default_factory=dict)
  initial_state: dict[str, Any] = field(default_factory=dict)
  data_dir: str = "/mock/data"


class MockInspector:
  """Read-only view of what the hooks wrote: logs, data files, state, events."""

  def __init__(
    self,
    logs: list[str],
    data_store: dict[str, str],
    state: list[dict[str, Any]],
    emitted_events: list[dict[str, Any]],
  ) -> None:
    self._logs = logs
    self._data_store = data_store
    self._state = state
    self._emitted_events = emitted_events

  def get_logs(self) -> list[str]:
    return list(self._logs)

  def get_data(self) -> dict[str, str]:
    return dict(self._data_store)

  def get_state(self) -> dict[str, Any]:
    return dict(self._state[0])

  def get_emitted_events(self) -> list[dict[str, Any]]:
    return list(self._emitted_events)


def create_mock_context(
  options: MockContextOptions | None = None,
) -> tuple[Any, MockInspector]:
  """Return (context, inspector) sharing the same in-memory stores."""

  opts = options or MockContextOptions()

  data_store: dict[str, str] = dict(opts.initial_data)
  logs: list[str] = []
  emitted_events: list[dict[str, Any]] = []
  # set_state merges into state[0]
  state: list[dict[str, Any]] = [dict(opts.initial_state)]

  class _Context:
    data_dir = opts.data_dir

    async def read_data(self, filename: str) -> str:
      content = data_store.get(filename)
      if content is None:
        raise FileNotFoundError(f"No such file: '{filename}'")
      return content

    async def write_data(self, filename: str, content: str) -> None:
      data_store[filename] = content

    def log(self, message: str) -> None:
      logs.append(message)

    def get_state(self) -> Any:
      return state[0]

    def set_state(self, partial: dict[str, Any]) -> None:
      state[0] = {**state[0], **partial}

    def emit_event(self, event_name: str, data: Any) -> None:
      emitted_events.append({"name": event_name, "data": data})

  inspector = MockInspector(
    logs=logs,
    data_store=data_store,
    state=state,
    emitted_events=emitted_events,
  )
  return _Context(), inspector
