
from __future__ import annotations

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import pandas as pd

from konut import presets
from konut.models import (
    DEFAULT_POLICY,
    AmortizationTerms,
    HouseCategory,
    LendingPolicy,
    MortgageResult,
    PaymentSummary,
    PriceInputState,
)

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


class InvalidPriceError(ValueError):
    """Raised when a house price is empty, not a number, or not positive."""


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Widget values arrive as ``None`` before the first interaction; treating
    them as zero keeps the payment math from breaking.
    """

    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        return float(x)
    except (TypeError, ValueError):
        return default


def parse_price(raw) -> float:
    """Convert the price field contents into a positive, finite float.

    Accepts plain decimal text such as ``"1500000"`` or ``"1500000.50"`` as
    well as ``int``/``float`` values.  Anything else, including digit
    separators, exponents and booleans, raises :class:`InvalidPriceError`.
    """

    if raw is None:
        raise InvalidPriceError("house price is empty")
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            raise InvalidPriceError("house price is empty")
        if not _DECIMAL_RE.fullmatch(raw):
            raise InvalidPriceError(f"house price is not a number: {raw!r}")
    elif isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidPriceError(f"house price is not a number: {raw!r}")
    price = float(raw)
    if not math.isfinite(price) or price <= 0:
        raise InvalidPriceError(f"house price must be a positive number: {raw!r}")
    return price


def classify_price_input(raw) -> PriceInputState:
    """Map raw field contents onto the three display states of the page."""

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return PriceInputState.EMPTY
    try:
        parse_price(raw)
    except InvalidPriceError:
        return PriceInputState.INVALID
    return PriceInputState.VALID


def resolve_loan_percentage(price, category, policy: LendingPolicy = DEFAULT_POLICY) -> float:
    """Return the share of ``price`` that may be financed for ``category``.

    Tiers are half-open ``[lo, hi)`` intervals, so a price sitting exactly on
    a boundary falls into the upper tier.
    """

    for tier in policy.tiers_for(category):
        if tier.upper_bound is None or price < tier.upper_bound:
            return tier.percentage
    # validated policies always end with an open tier
    return policy.tiers_for(category)[-1].percentage


def compose_mortgage(price, category, policy: LendingPolicy = DEFAULT_POLICY) -> MortgageResult:
    """Split ``price`` into loan amount and down payment.

    Second-hand houses at or above the no-loan threshold get no financing at
    all.  Otherwise the tier percentage is applied and, for second-hand houses
    only, the loan is clamped to ``policy.max_loan``.
    """

    price = parse_price(price)
    category = HouseCategory(category)
    secondhand = category is HouseCategory.SECONDHAND

    if secondhand and policy.no_loan_threshold is not None and price >= policy.no_loan_threshold:
        logger.debug("no loan for second-hand house priced %s", price)
        return MortgageResult(loan_amount=0.0, down_payment=price, loan_percentage=0.0)

    pct = resolve_loan_percentage(price, category, policy)
    raw_loan = price * pct
    loan = raw_loan
    if secondhand and policy.max_loan is not None:
        loan = min(raw_loan, policy.max_loan)
    result = MortgageResult(
        loan_amount=loan,
        down_payment=price - loan,
        loan_percentage=pct,
        capped=loan < raw_loan,
    )
    logger.debug("composed mortgage for %s %s: %s", category.value, price, result)
    return result


def calculate_mortgage(raw_price, category, policy: LendingPolicy = DEFAULT_POLICY) -> Optional[MortgageResult]:
    """Parse ``raw_price`` and compose the mortgage, or return ``None`` for invalid input."""

    try:
        return compose_mortgage(raw_price, category, policy)
    except InvalidPriceError as exc:
        logger.debug("rejected price input: %s", exc)
        return None


def _finite(name, value) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(out):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return out


def monthly_payment(principal, monthly_rate=None, term_years=None):
    """Calculate the fixed monthly installment for a loan.

    ``monthly_rate`` is the per-period rate used as-is (``0.0265`` for 2.65%
    a month), not an annual rate divided by twelve.  Both arguments default to
    the published terms in :mod:`konut.presets`; a value that is not a finite
    number raises ``ValueError``.
    """

    L = nz(principal)
    r = presets.MONTHLY_INTEREST_RATE if monthly_rate is None else _finite("monthly_rate", monthly_rate)
    years = presets.LOAN_TERM_YEARS if term_years is None else _finite("term_years", term_years)
    n = int(years * 12)
    if L <= 0 or n <= 0:
        return 0.0
    if abs(r) < 1e-12:
        return L / n
    growth = (1 + r) ** n
    return L * r * growth / (growth - 1)


def total_payment(principal, monthly_rate=None, term_years=None):
    """Sum of all installments over the full term."""

    years = presets.LOAN_TERM_YEARS if term_years is None else _finite("term_years", term_years)
    return monthly_payment(principal, monthly_rate, term_years) * int(years * 12)


def payment_summary(principal, terms: Optional[AmortizationTerms] = None) -> PaymentSummary:
    terms = terms or DEFAULT_POLICY.terms
    pmt = monthly_payment(principal, terms.monthly_rate, terms.term_years)
    n = terms.number_of_payments
    return PaymentSummary(monthly_payment=pmt, total_payment=pmt * n, number_of_payments=n)


def amortization_schedule(principal, terms: Optional[AmortizationTerms] = None) -> pd.DataFrame:
    """Month-by-month amortization of a fixed-rate loan aggregated by year."""

    terms = terms or DEFAULT_POLICY.terms
    columns = ["Year", "Interest", "Principal", "Ending Balance"]
    bal = nz(principal)
    if bal <= 0:
        return pd.DataFrame(columns=columns)

    pmt = monthly_payment(bal, terms.monthly_rate, terms.term_years)
    r = terms.monthly_rate
    rows = []
    interest_ytd = principal_ytd = 0.0
    for m in range(1, terms.number_of_payments + 1):
        interest = bal * r
        principal_paid = min(pmt - interest, bal)
        bal -= principal_paid
        interest_ytd += interest
        principal_ytd += principal_paid
        if m % 12 == 0 or m == terms.number_of_payments:
            rows.append(
                {
                    "Year": (m - 1) // 12 + 1,
                    "Interest": interest_ytd,
                    "Principal": principal_ytd,
                    # float drift leaves a tiny residue after the last month
                    "Ending Balance": bal if bal > 0.01 else 0.0,
                }
            )
            interest_ytd = principal_ytd = 0.0
    return pd.DataFrame(rows, columns=columns)


def _round_half_up(value) -> int:
    return int(Decimal(str(nz(value))).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_currency(value) -> str:
    """Format ``value`` as a grouped whole-lira amount, e.g. ``1.234.568``."""

    return f"{_round_half_up(value):,}".replace(",", ".")


def format_percentage(fraction) -> str:
    """Whole-number percentage for a loan ratio (``0.9`` -> ``"90"``)."""

    return str(_round_half_up(nz(fraction) * 100))
