from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from konut.presets import (
    LOAN_TERM_YEARS,
    MAX_LOAN,
    MONTHLY_INTEREST_RATE,
    NEW_HOUSE_TIERS,
    SECONDHAND_NO_LOAN_THRESHOLD,
    SECONDHAND_TIERS,
)


class HouseCategory(str, Enum):
    SECONDHAND = "secondhand"
    NEW = "new"


class PriceInputState(str, Enum):
    """What the page should show for the current contents of the price field."""

    EMPTY = "empty"
    INVALID = "invalid"
    VALID = "valid"


class LoanTier(BaseModel):
    model_config = ConfigDict(frozen=True)

    upper_bound: Optional[float] = Field(
        default=None, gt=0, description="Exclusive upper price bound; None for the top tier."
    )
    percentage: float = Field(gt=0, le=1, description="Share of the price that may be financed.")


def _tiers(pairs) -> Tuple[LoanTier, ...]:
    return tuple(LoanTier(upper_bound=b, percentage=p) for b, p in pairs)


class AmortizationTerms(BaseModel):
    model_config = ConfigDict(frozen=True)

    term_years: int = Field(default=LOAN_TERM_YEARS, gt=0)
    monthly_rate: float = Field(default=MONTHLY_INTEREST_RATE, ge=0)

    @property
    def number_of_payments(self) -> int:
        return self.term_years * 12


class LendingPolicy(BaseModel):
    """Loan ratio schedule and payment terms used by every calculation.

    ``max_loan`` and ``no_loan_threshold`` apply to second-hand houses only.
    Either may be ``None`` to switch the rule off when testing alternate
    schedules.
    """

    model_config = ConfigDict(frozen=True)

    secondhand_tiers: Tuple[LoanTier, ...] = Field(default_factory=lambda: _tiers(SECONDHAND_TIERS))
    new_tiers: Tuple[LoanTier, ...] = Field(default_factory=lambda: _tiers(NEW_HOUSE_TIERS))
    max_loan: Optional[float] = Field(default=MAX_LOAN, gt=0)
    no_loan_threshold: Optional[float] = Field(default=SECONDHAND_NO_LOAN_THRESHOLD, gt=0)
    terms: AmortizationTerms = Field(default_factory=AmortizationTerms)

    @field_validator("secondhand_tiers", "new_tiers")
    @classmethod
    def _check_tiers(cls, tiers: Tuple[LoanTier, ...]) -> Tuple[LoanTier, ...]:
        if not tiers:
            raise ValueError("at least one tier is required")
        if tiers[-1].upper_bound is not None:
            raise ValueError("the last tier must be open-ended")
        bounds = [t.upper_bound for t in tiers[:-1]]
        if any(b is None for b in bounds):
            raise ValueError("only the last tier may be open-ended")
        if any(hi <= lo for lo, hi in zip(bounds, bounds[1:])):
            raise ValueError("tier bounds must be strictly increasing")
        return tiers

    def tiers_for(self, category: HouseCategory) -> Tuple[LoanTier, ...]:
        if HouseCategory(category) is HouseCategory.NEW:
            return self.new_tiers
        return self.secondhand_tiers

    @classmethod
    def from_dict(cls, data: dict) -> "LendingPolicy":
        """Build a policy from plain data, e.g. ``{"new_tiers": [[5e6, 0.8], [None, 0.5]]}``."""
        data = dict(data)
        for key in ("secondhand_tiers", "new_tiers"):
            if key in data:
                data[key] = [
                    t if isinstance(t, (dict, LoanTier)) else {"upper_bound": t[0], "percentage": t[1]}
                    for t in data[key]
                ]
        return cls.model_validate(data)


DEFAULT_POLICY = LendingPolicy()


class MortgageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    loan_amount: float = Field(ge=0)
    down_payment: float = Field(ge=0)
    loan_percentage: float = Field(ge=0, le=1)
    capped: bool = False

    @property
    def house_price(self) -> float:
        return self.loan_amount + self.down_payment


class PaymentSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_payment: float = 0.0
    total_payment: float = 0.0
    number_of_payments: int = 0
