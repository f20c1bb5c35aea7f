"""
Skill Types - Pydantic v2 Edition

Type definitions shared by skills and the JSON-RPC skill runtime: tool
definitions and results, the context protocol passed to lifecycle hooks,
the hook table, the setup wizard forms, and the top-level SkillDefinition.

Usage:
    from dev.types.skill_types import SkillDefinition, SkillHooks, SetupStep
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Literal, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Tool Definition & Result
# ---------------------------------------------------------------------------


class ToolDefinition(BaseModel):
    """Schema for an AI-callable tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Tool name (snake_case, unique per skill)")
    description: str = Field(description="Human-readable description")
    parameters: dict[str, Any] = Field(
        description="JSON Schema for tool parameters",
        default_factory=lambda: {"type": "object", "properties": {}},
    )


class ToolResult(BaseModel):
    """Result returned by a tool's execute function."""

    content: str
    is_error: bool = False


class SkillTool(BaseModel):
    """A tool the skill exposes to the AI."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    definition: ToolDefinition
    execute: Callable[..., Awaitable[ToolResult]] = Field(
        description="Async function that executes the tool"
    )


# ---------------------------------------------------------------------------
# Setup wizard
# ---------------------------------------------------------------------------


class SetupFieldOption(BaseModel):
    """An option for select fields."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class SetupField(BaseModel):
    """A single field in a setup step form."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Field key (unique within step)")
    type: Literal["text", "password", "select", "boolean"]
    label: str = Field(description="Display label")
    description: str | None = None
    required: bool = True
    default: str | bool | None = None
    placeholder: str | None = None
    options: list[SetupFieldOption] | None = None


class SetupStep(BaseModel):
    """A single step in the setup wizard."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    fields: list[SetupField]


class SetupFieldError(BaseModel):
    """A validation error for a specific field."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class SetupResult(BaseModel):
    """Result of a setup/submit call."""

    model_config = ConfigDict(frozen=True)

    status: Literal["next", "error", "complete"]
    next_step: SetupStep | None = None
    errors: list[SetupFieldError] | None = None
    message: str | None = None


# ---------------------------------------------------------------------------
# Skill Context (Protocol - passed to every hook)
# ---------------------------------------------------------------------------


@runtime_checkable
class SkillContext(Protocol):
    """Context object passed to skill lifecycle hooks."""

    data_dir: str

    async def read_data(self, filename: str) -> str: ...
    async def write_data(self, filename: str, content: str) -> None: ...
    def log(self, message: str) -> None: ...
    def get_state(self) -> Any: ...
    def set_state(self, partial: dict[str, Any]) -> None: ...
    def emit_event(self, event_name: str, data: Any) -> None: ...


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------

LoadHook = Callable[[SkillContext], Awaitable[None]]
UnloadHook = Callable[[SkillContext], Awaitable[None]]
StatusHook = Callable[[SkillContext], Awaitable[dict[str, Any]]]

SetupStartHandler = Callable[[SkillContext], Awaitable[SetupStep]]
SetupSubmitHandler = Callable[[SkillContext, str, dict[str, Any]], Awaitable[SetupResult]]
SetupCancelHandler = Callable[[SkillContext], Awaitable[None]]


class SkillHooks(BaseModel):
    """Lifecycle hooks for a skill."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    on_load: Optional[LoadHook] = None
    on_unload: Optional[UnloadHook] = None
    on_status: StatusHook = Field(description="Returns current skill status information")
    on_setup_start: Optional[SetupStartHandler] = None
    on_setup_submit: Optional[SetupSubmitHandler] = None
    on_setup_cancel: Optional[SetupCancelHandler] = None


# ---------------------------------------------------------------------------
# Skill Definition (the main export from skill.py)
# ---------------------------------------------------------------------------


class SkillDefinition(BaseModel):
    """Top-level skill definition - the `skill` object exported by skill.py."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(description="Skill name (lowercase-hyphens, matches directory)")
    description: str = Field(description="Brief description")
    version: str = Field(default="1.0.0", description="Semver version string")
    hooks: SkillHooks | None = None
    tools: list[SkillTool] = Field(default_factory=list)
    has_setup: bool = Field(
        default=False,
        description="Whether this skill has an interactive setup flow",
    )

    def get_tool(self, name: str) -> SkillTool | None:
        for tool in self.tools:
            if tool.definition.name == name:
                return tool
        return None
