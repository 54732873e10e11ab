"""Human readable summaries of the loan tier schedule."""
from __future__ import annotations
from typing import List

import pandas as pd

from core.i18n import t
from konut.calculators import format_currency, format_percentage
from konut.models import DEFAULT_POLICY, HouseCategory, LendingPolicy

RULE_HEADINGS = {
    HouseCategory.SECONDHAND: "Second-hand Rules:",
    HouseCategory.NEW: "New House Rules:",
}


def short_amount(value: float) -> str:
    """Compact lira amount used in rule lines, e.g. ``2500000`` -> ``2.5M``."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:g}M"
    if value >= 1_000:
        return f"{value / 1_000:g}K"
    return f"{value:g}"


def _range_bounds(lo: float, hi: float):
    # "1-2M" rather than "1M-2M" when both ends are in millions
    if lo >= 1_000_000 and hi >= 1_000_000:
        return f"{lo / 1_000_000:g}", short_amount(hi)
    return short_amount(lo), short_amount(hi)


def _may_exceed_cap(upper_bound, pct: float, policy: LendingPolicy) -> bool:
    if policy.max_loan is None:
        return False
    return upper_bound is None or upper_bound * pct > policy.max_loan


def tier_rule_lines(category, lang: str, policy: LendingPolicy = DEFAULT_POLICY) -> List[str]:
    """Bullet lines describing each tier of ``category`` in ``lang``."""
    category = HouseCategory(category)
    secondhand = category is HouseCategory.SECONDHAND
    lines: List[str] = []
    lo = 0.0
    for tier in policy.tiers_for(category):
        pct = format_percentage(tier.percentage)
        if lo == 0 and tier.upper_bound is not None:
            line = t("Under {hi} TRY: {pct}% loan", lang, hi=short_amount(tier.upper_bound), pct=pct)
        elif tier.upper_bound is None and lo == 0:
            line = t("All prices: {pct}% loan", lang, pct=pct)
        elif tier.upper_bound is None:
            line = t("{lo}+ TRY: {pct}% loan", lang, lo=short_amount(lo), pct=pct)
        else:
            a, b = _range_bounds(lo, tier.upper_bound)
            line = t("{lo}-{hi} TRY: {pct}% loan", lang, lo=a, hi=b, pct=pct)
        if secondhand and _may_exceed_cap(tier.upper_bound, tier.percentage, policy):
            line += t(" (max {cap})", lang, cap=short_amount(policy.max_loan))
        lines.append(line)
        lo = tier.upper_bound or lo
    if secondhand and policy.no_loan_threshold is not None:
        lines.append(t("{lo}+ TRY: No loan available", lang, lo=short_amount(policy.no_loan_threshold)))
    return lines


def tier_table(category, lang: str, policy: LendingPolicy = DEFAULT_POLICY) -> pd.DataFrame:
    """Tier schedule as a table with localized column names."""
    rows = []
    lo = 0.0
    for tier in policy.tiers_for(category):
        rows.append(
            {
                t("From", lang): format_currency(lo),
                t("To", lang): "" if tier.upper_bound is None else format_currency(tier.upper_bound),
                t("Loan %", lang): format_percentage(tier.percentage),
            }
        )
        lo = tier.upper_bound or lo
    return pd.DataFrame(rows)
