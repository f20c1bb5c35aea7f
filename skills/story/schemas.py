"""
Input models for every action.

Each action validates its arguments against one of these models before its
handler runs. Unknown keys are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .validation import AddressStr, AmountOrAllStr, AmountStr


class ActionInput(BaseModel):
  model_config = ConfigDict(extra="ignore", frozen=True)


class EmptyInput(ActionInput):
  pass


# ---------------------------------------------------------------------------
# Native
# ---------------------------------------------------------------------------


class NativeBalanceInput(ActionInput):
  address: AddressStr | None = Field(
    default=None, description="The address to check (defaults to the wallet address)"
  )


class NativeTransferInput(ActionInput):
  to: AddressStr = Field(description="The recipient address")
  amount: AmountStr = Field(description="The amount of IP to transfer, e.g. '1.5'")
  wait_for_confirmation: bool = Field(
    default=False, description="Wait until the transaction is mined before returning"
  )


# ---------------------------------------------------------------------------
# ERC20
# ---------------------------------------------------------------------------


class TokenRefInput(ActionInput):
  """Either a token contract address or a token name/symbol."""

  token_address: str | None = Field(default=None, description="The address of the ERC20 token")
  token: str | None = Field(
    default=None, description='The name or symbol of the token (e.g. "USDT", "USDC")'
  )

  @model_validator(mode="after")
  def _require_token(self) -> TokenRefInput:
    if not (self.token_address or self.token):
      raise ValueError("Either token_address or token must be provided")
    return self

  @property
  def token_ref(self) -> str:
    return (self.token_address or self.token or "").strip()


class TokenBalanceInput(TokenRefInput):
  owner_address: AddressStr | None = Field(
    default=None, description="The address to check (defaults to the wallet address)"
  )


class TokenTransferInput(TokenRefInput):
  to: AddressStr = Field(description="The recipient address")
  amount: AmountStr = Field(description="The amount to transfer, in token units")
  wait_for_confirmation: bool = Field(
    default=True, description="Wait until the transaction is mined before returning"
  )


class TokenApproveInput(TokenRefInput):
  spender: AddressStr = Field(description="The address allowed to spend the tokens")
  amount: AmountStr = Field(description="The amount to approve, in token units")
  wait_for_confirmation: bool = Field(
    default=True, description="Wait until the transaction is mined before returning"
  )


class TokenAllowanceInput(TokenRefInput):
  owner_address: AddressStr | None = Field(
    default=None, description="The token owner (defaults to the wallet address)"
  )
  spender_address: AddressStr = Field(description="The spender address")


class TokenInfoInput(TokenRefInput):
  pass


# ---------------------------------------------------------------------------
# Metapool
# ---------------------------------------------------------------------------


class StakeInput(ActionInput):
  amount: AmountStr = Field(description="The amount of IP to stake")
  wait_for_confirmation: bool = Field(
    default=False, description="Wait until the transaction is mined before returning"
  )


class UnstakeInput(ActionInput):
  amount: AmountOrAllStr = Field(
    description='The amount of stIP to unstake, or "all" to unstake everything'
  )
  wait_for_confirmation: bool = Field(
    default=False, description="Wait until the transaction is mined before returning"
  )


class StipBalanceInput(ActionInput):
  address: AddressStr | None = Field(
    default=None, description="The address to check (defaults to the wallet address)"
  )
