"""
Input validation helpers for action arguments.

Action inputs are pydantic models; the annotated types here carry the
address and amount checks shared by all of them.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator
from pydantic import ValidationError as PydanticValidationError

from .errors import InvalidInputError
from .tokens import is_address


def _coerce_str(v: Any) -> Any:
  if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
    return str(v)
  if isinstance(v, str):
    return v.strip()
  return v


def _check_address(v: str) -> str:
  if not is_address(v):
    raise ValueError(f"Invalid address: {v!r} (expected 0x followed by 40 hex characters)")
  return v


def _check_amount(v: str) -> str:
  try:
    d = Decimal(v)
  except InvalidOperation:
    raise ValueError(f"Invalid amount: {v!r}") from None
  if not d.is_finite() or d <= 0:
    raise ValueError(f"Amount must be a positive number, got {v!r}")
  return v


def _check_amount_or_all(v: str) -> str:
  if v.lower() == "all":
    return v
  return _check_amount(v)


AddressStr = Annotated[str, BeforeValidator(_coerce_str), AfterValidator(_check_address)]
AmountStr = Annotated[str, BeforeValidator(_coerce_str), AfterValidator(_check_amount)]
AmountOrAllStr = Annotated[str, BeforeValidator(_coerce_str), AfterValidator(_check_amount_or_all)]


def invalid_input_from(exc: PydanticValidationError) -> InvalidInputError:
  """Build an InvalidInputError naming the first violated field."""
  errors = exc.errors()
  if not errors:
    return InvalidInputError("input", str(exc))
  first = errors[0]
  field = ".".join(str(p) for p in first.get("loc", ())) or "input"
  message = str(first.get("msg", "invalid value"))
  return InvalidInputError(field, message)
