"""
Shared result shaping, unit conversion and error handling helpers.
"""

from __future__ import annotations

import json
import logging
from decimal import MIN_EMIN, Decimal, InvalidOperation, localcontext
from enum import Enum
from typing import Any

from .errors import StoryKitError, ValidationError

log = logging.getLogger("skill.story.helpers")

Result = dict[str, Any]

MAX_UINT256 = 2**256 - 1


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def success(**fields: Any) -> Result:
  return {"status": "success", **fields}


def error_result(message: str, code: str | None = None, **fields: Any) -> Result:
  out: Result = {"status": "error", "message": message}
  if code:
    out["code"] = code
  out.update(fields)
  return out


def is_error(result: Result) -> bool:
  return result.get("status") != "success"


def to_json(result: Result) -> str:
  return json.dumps(result, indent=2, default=str)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


class ErrorCategory(str, Enum):
  NATIVE = "NATIVE"
  ERC20 = "ERC20"
  STAKING = "STAKING"
  DISPATCH = "DISPATCH"


def log_and_format_error(
  function_name: str,
  error: Exception,
  category: str | ErrorCategory | None = None,
) -> Result:
  """Convert any exception into an error result.

  Kit errors keep their message and code. Anything else is a bug or an
  unexpected library failure: it is logged with its traceback and gets a
  code derived from the category and function name.
  """
  if isinstance(error, StoryKitError):
    log.warning("[%s] %s: %s", function_name, error.code, error)
    if error.tx_hash:
      return error_result(str(error), error.code, tx_hash=error.tx_hash)
    return error_result(str(error), error.code)

  prefix = category.value if isinstance(category, ErrorCategory) else (category or "GEN")
  hash_val = sum(ord(c) for c in function_name) % 1000
  error_code = f"{prefix}-ERR-{hash_val:03d}"

  log.error("Error in %s - Code: %s - %s", function_name, error_code, error, exc_info=error)
  return error_result(f"{function_name} failed: {error}", error_code)


# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------


def format_units(value: int, decimals: int) -> str:
  """Format a smallest-unit integer as a decimal string.

  Exact for any integer: 5 * 10**27 with 18 decimals gives "5000000000",
  1 with 18 decimals gives "0.000000000000000001".
  """
  negative = value < 0
  digits = str(abs(int(value)))
  if decimals > 0:
    digits = digits.rjust(decimals + 1, "0")
    integer, fraction = digits[:-decimals], digits[-decimals:].rstrip("0")
  else:
    integer, fraction = digits, ""
  out = integer + (f".{fraction}" if fraction else "")
  return f"-{out}" if negative else out


def parse_units(amount: str | int | Decimal, decimals: int) -> int:
  """Parse a decimal amount into a smallest-unit integer.

  Raises ValidationError for non-numeric input, more fractional digits
  than the token supports, or a result outside the uint256 range.
  """
  try:
    value = Decimal(str(amount).strip())
  except InvalidOperation:
    raise ValidationError(f"Invalid amount: {amount!r}") from None
  if not value.is_finite():
    raise ValidationError(f"Invalid amount: {amount!r}")

  with localcontext() as ctx:
    ctx.prec = 256
    ctx.Emin = MIN_EMIN
    try:
      scaled = value.scaleb(decimals)
    except ArithmeticError:
      raise ValidationError(f"Amount {amount} is out of range") from None
    if scaled != scaled.to_integral_value():
      raise ValidationError(f"Amount {amount} has more than {decimals} decimal places")
    # uint256 max has 78 digits
    if scaled.adjusted() > 77:
      raise ValidationError(f"Amount {amount} is out of range")
    raw = int(scaled)

  if abs(raw) > MAX_UINT256:
    raise ValidationError(f"Amount {amount} is out of range")
  return raw
