"""
Error taxonomy for Story Agent Kit operations.

Every error carries a stable ``code`` that ends up in the ``code`` field of
an error result.
"""

from __future__ import annotations


class StoryKitError(Exception):
  """Base class for all kit errors."""

  code = "STORY_KIT_ERROR"
  # Set once a transaction has been broadcast
  tx_hash: str | None = None

  def __init__(self, message: str, code: str | None = None, tx_hash: str | None = None) -> None:
    super().__init__(message)
    if code:
      self.code = code
    if tx_hash:
      self.tx_hash = tx_hash


class ValidationError(StoryKitError):
  """Bad or missing input, raised before any chain call."""

  code = "VALIDATION_ERROR"


class InvalidInputError(ValidationError):
  """Action input did not match the action's input model."""

  code = "INVALID_INPUT"

  def __init__(self, field: str, message: str) -> None:
    self.field = field
    super().__init__(f"Invalid input for '{field}': {message}")


class ResolutionError(StoryKitError):
  code = "RESOLUTION_ERROR"


class ChainQueryError(StoryKitError):
  code = "CHAIN_QUERY_ERROR"


class MetricsApiError(ChainQueryError):
  """Metapool metrics endpoint error."""

  code = "METRICS_API_ERROR"

  def __init__(self, status: int, message: str) -> None:
    self.status = status
    super().__init__(f"Metrics API error {status}: {message}")


class SimulationError(StoryKitError):
  code = "SIMULATION_ERROR"


class SubmissionError(StoryKitError):
  code = "SUBMISSION_ERROR"


class TransferError(SubmissionError):
  code = "TRANSFER_ERROR"


class ConfirmationTimeout(StoryKitError):
  code = "CONFIRMATION_TIMEOUT"


class InsufficientBalanceError(StoryKitError):
  code = "INSUFFICIENT_BALANCE"


class ConfigError(StoryKitError):
  code = "CONFIG_ERROR"


class DuplicateActionError(StoryKitError):
  code = "DUPLICATE_ACTION"

  def __init__(self, name: str) -> None:
    super().__init__(f"Action already registered: {name}")


class UnknownActionError(StoryKitError):
  code = "UNKNOWN_ACTION"

  def __init__(self, name: str) -> None:
    super().__init__(f"Unknown action: {name}")
