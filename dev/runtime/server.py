"""
Python Runtime SDK - asyncio JSON-RPC 2.0 Server for Runtime Skills

Runtime skills use this as their entry point. The server:
- Reads newline-delimited JSON-RPC requests from stdin
- Dispatches tool calls, lifecycle hooks and the setup wizard
- Writes JSON-RPC responses to stdout
- Calls back into the host (reverse RPC) for state, data files and events

Usage:
    from dev.runtime.server import SkillServer

    server = SkillServer(skill_definition)
    server.start()
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
  from dev.types.skill_types import SetupResult, SetupStep, SkillDefinition, SkillTool

log = logging.getLogger("dev.runtime.server")

# JSON-RPC error codes
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class MethodNotFound(Exception):
  pass


class SkillServer:
  """JSON-RPC 2.0 server that bridges a Python skill to its host."""

  def __init__(self, skill: SkillDefinition) -> None:
    self._tools: dict[str, SkillTool] = {t.definition.name: t for t in skill.tools}
    self._hooks = skill.hooks
    self._skill = skill
    self._pending: dict[int | str, asyncio.Future[Any]] = {}
    self._next_id = 1
    self._data_dir = ""
    self._writer: asyncio.StreamWriter | None = None

  # --------------------------------------------------------------------- #
  # Public API
  # --------------------------------------------------------------------- #

  def start(self) -> None:
    """Start the server (blocking). Reads stdin, dispatches, writes stdout."""
    asyncio.run(self._run())

  # --------------------------------------------------------------------- #
  # Reverse RPC - call host
  # --------------------------------------------------------------------- #

  async def get_state(self) -> Any:
    result = await self._reverse_rpc("state/get")
    return result.get("state") if isinstance(result, dict) else result

  async def set_state(self, partial: dict[str, Any]) -> None:
    await self._reverse_rpc("state/set", {"partial": partial})

  async def read_data(self, filename: str) -> str:
    result = await self._reverse_rpc("data/read", {"filename": filename})
    return result["content"] if isinstance(result, dict) else str(result)

  async def write_data(self, filename: str, content: str) -> None:
    await self._reverse_rpc("data/write", {"filename": filename, "content": content})

  async def emit_event(self, event_type: str, data: Any) -> None:
    await self._reverse_rpc("intelligence/emitEvent", {"eventType": event_type, "data": data})

  def log(self, message: str) -> None:
    sys.stderr.write(f"[{self._skill.name}] {message}\n")
    sys.stderr.flush()

  # --------------------------------------------------------------------- #
  # Internal - main loop
  # --------------------------------------------------------------------- #

  async def _run(self) -> None:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    transport, _ = await loop.connect_write_pipe(asyncio.BaseProtocol, sys.stdout)
    self._writer = asyncio.StreamWriter(transport, protocol, reader, loop)

    while True:
      line = await reader.readline()
      if not line:
        break
      trimmed = line.decode().strip()
      if not trimmed:
        continue
      try:
        message = json.loads(trimmed)
      except json.JSONDecodeError:
        self.log(f"Failed to parse JSON-RPC message: {trimmed}")
        continue

      # Replies to reverse RPC are resolved inline so the read loop keeps
      # consuming stdin while hooks await them.
      if "result" in message or "error" in message:
        self._resolve_pending(message)
        continue

      _ = asyncio.create_task(self._handle_message(message))  # noqa: RUF006

  def _resolve_pending(self, message: dict[str, Any]) -> None:
    future = self._pending.pop(message.get("id"), None)
    if future is None or future.done():
      return
    if "error" in message:
      future.set_exception(RuntimeError(message["error"].get("message", "Reverse RPC error")))
    else:
      future.set_result(message.get("result"))

  # --------------------------------------------------------------------- #
  # Internal - message dispatch
  # --------------------------------------------------------------------- #

  async def _handle_message(self, message: dict[str, Any]) -> None:
    method = message.get("method", "")
    params = message.get("params")
    msg_id = message.get("id")

    try:
      result = await self._dispatch(method, params)
      if msg_id is not None:
        self._send_response(msg_id, result)
    except MethodNotFound as exc:
      if msg_id is not None:
        self._send_error(msg_id, METHOD_NOT_FOUND, str(exc))
    except Exception as exc:
      log.exception("Handler for %s failed", method)
      if msg_id is not None:
        self._send_error(msg_id, INTERNAL_ERROR, str(exc))

  async def _dispatch(self, method: str, params: Any) -> Any:
    p = params if isinstance(params, dict) else {}

    # -- Tool methods --
    if method == "tools/list":
      return {
        "tools": [
          {
            "name": t.definition.name,
            "description": t.definition.description,
            "inputSchema": {
              "type": "object",
              "properties": t.definition.parameters.get("properties", {}),
              "required": t.definition.parameters.get("required", []),
            },
          }
          for t in self._tools.values()
        ]
      }

    if method == "tools/call":
      name = p.get("name", "")
      args = p.get("arguments") or {}
      tool = self._tools.get(name)
      if not tool:
        raise ValueError(f"Unknown tool: {name}")
      result = await tool.execute(args)
      return {
        "content": [{"type": "text", "text": result.content}],
        "isError": result.is_error,
      }

    # -- Lifecycle methods --
    if method == "skill/load":
      if p.get("dataDir"):
        self._data_dir = p["dataDir"]
      if self._hooks and self._hooks.on_load:
        await self._hooks.on_load(self._create_context())
      return {"ok": True}

    if method == "skill/unload":
      if self._hooks and self._hooks.on_unload:
        await self._hooks.on_unload(self._create_context())
      return {"ok": True}

    if method == "skill/status":
      if not self._hooks or not self._hooks.on_status:  # type: ignore[truthy-function]
        raise ValueError("Skill must implement on_status hook")
      status = await self._hooks.on_status(self._create_context())
      return {"status": status}

    if method == "skill/info":
      return {
        "name": self._skill.name,
        "description": self._skill.description,
        "version": self._skill.version,
        "hasSetup": self._skill.has_setup,
        "tools": list(self._tools),
      }

    if method == "skill/shutdown":
      # Exit shortly after the response is flushed
      asyncio.get_running_loop().call_later(0.1, lambda: sys.exit(0))
      return {"ok": True}

    # -- Setup methods --
    if method == "setup/start":
      if not self._hooks or not self._hooks.on_setup_start:
        raise ValueError("Skill does not implement setup flow")
      step = await self._hooks.on_setup_start(self._create_context())
      return {"step": self._serialize_step(step)}

    if method == "setup/submit":
      if not self._hooks or not self._hooks.on_setup_submit:
        raise ValueError("Skill does not implement setup flow")
      setup_result: SetupResult = await self._hooks.on_setup_submit(
        self._create_context(), p.get("stepId", ""), p.get("values") or {}
      )
      return self._serialize_setup_result(setup_result)

    if method == "setup/cancel":
      if self._hooks and self._hooks.on_setup_cancel:
        await self._hooks.on_setup_cancel(self._create_context())
      return {"ok": True}

    raise MethodNotFound(f"Method not found: {method}")

  # --------------------------------------------------------------------- #
  # Internal - serialization
  # --------------------------------------------------------------------- #

  @staticmethod
  def _serialize_step(step: SetupStep) -> dict[str, Any]:
    """Serialize a SetupStep to a JSON-compatible dict."""
    return {
      "id": step.id,
      "title": step.title,
      "description": step.description,
      "fields": [
        {
          "name": f.name,
          "type": f.type,
          "label": f.label,
          "description": f.description,
          "required": f.required,
          "default": f.default,
          "placeholder": f.placeholder,
          "options": (
            [{"label": o.label, "value": o.value} for o in f.options] if f.options else None
          ),
        }
        for f in step.fields
      ],
    }

  @classmethod
  def _serialize_setup_result(cls, result: SetupResult) -> dict[str, Any]:
    return {
      "status": result.status,
      "nextStep": cls._serialize_step(result.next_step) if result.next_step else None,
      "errors": [{"field": e.field, "message": e.message} for e in result.errors]
      if result.errors
      else None,
      "message": result.message,
    }

  # --------------------------------------------------------------------- #
  # Internal - hook context
  # --------------------------------------------------------------------- #

  def _create_context(self) -> Any:
    """Build a SkillContext-compatible object wired to reverse RPC."""
    server = self

    class _Context:
      @property
      def data_dir(self) -> str:
        return server._data_dir or f"skills/{server._skill.name}/data"

      async def read_data(self, filename: str) -> str:
        return await server.read_data(filename)

      async def write_data(self, filename: str, content: str) -> None:
        await server.write_data(filename, content)

      def log(self, message: str) -> None:
        server.log(message)

      def get_state(self) -> Any:
        # Returns a coroutine; hooks await it
        return server.get_state()

      def set_state(self, partial: dict[str, Any]) -> None:
        _ = asyncio.ensure_future(server.set_state(partial))  # noqa: RUF006

      def emit_event(self, event_name: str, data: Any) -> None:
        _ = asyncio.ensure_future(server.emit_event(event_name, data))  # noqa: RUF006

    return _Context()

  # --------------------------------------------------------------------- #
  # Internal - JSON-RPC I/O
  # --------------------------------------------------------------------- #

  def _send_response(self, msg_id: int | str, result: Any) -> None:
    self._write_message({"jsonrpc": "2.0", "id": msg_id, "result": result})

  def _send_error(self, msg_id: int | str, code: int, message: str) -> None:
    self._write_message(
      {"jsonrpc": "2.0", "id": msg_id, "error": {"code": code, "message": message}}
    )

  def _write_message(self, message: dict[str, Any]) -> None:
    data = json.dumps(message) + "\n"
    if self._writer:
      self._writer.write(data.encode())
    else:
      sys.stdout.write(data)
      sys.stdout.flush()

  async def _reverse_rpc(self, method: str, params: Any = None, timeout: float = 30.0) -> Any:
    msg_id = self._next_id
    self._next_id += 1
    request: dict[str, Any] = {"jsonrpc": "2.0", "id": msg_id, "method": method}
    if params is not None:
      request["params"] = params

    future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
    self._pending[msg_id] = future
    self._write_message(request)

    try:
      return await asyncio.wait_for(future, timeout=timeout)
    except TimeoutError:
      self._pending.pop(msg_id, None)
      raise RuntimeError(f"Reverse RPC timeout: {method}") from None
