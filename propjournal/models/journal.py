"""JournalEntry data models."""

from datetime import date as date_type
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class JournalEntry(BaseModel):
    """Represents one journal line: a day's trading P/L or a payout.

    Trade entries carry ``pnl``; payout entries carry ``payout_amount``.
    Field aliases match the persisted camelCase shape.
    """

    id: str = Field(..., min_length=1, description="Unique entry identifier")
    date: date_type = Field(..., description="Calendar date of the activity")
    pnl: float = Field(default=0.0, description="Net P/L (trade entries only)")
    is_payout: bool = Field(
        default=False, alias="isPayout", description="Payout (withdrawal) flag"
    )
    payout_amount: Optional[float] = Field(
        default=None, ge=0, alias="payoutAmount", description="Withdrawn amount"
    )
    notes: Optional[str] = Field(default=None, description="User notes")
    setup: Optional[str] = Field(default=None, description="Trade setup tag")

    model_config = {"frozen": True, "populate_by_name": True}


class EntryRequest(BaseModel):
    """An entry-creation request; the journal assigns the id."""

    date: date_type = Field(..., description="Calendar date of the activity")
    pnl: float = Field(default=0.0, allow_inf_nan=False, description="Net P/L")
    is_payout: bool = Field(default=False, description="Payout (withdrawal) flag")
    payout_amount: Optional[float] = Field(
        default=None, allow_inf_nan=False, description="Withdrawn amount (sign ignored)"
    )
    notes: Optional[str] = Field(default=None, description="User notes")
    setup: Optional[str] = Field(default=None, description="Trade setup tag")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_payout_amount(self) -> "EntryRequest":
        if self.is_payout and self.payout_amount is None:
            raise ValueError("payout requests need a payout_amount")
        return self
