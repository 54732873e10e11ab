from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from konut.calculators import format_currency
from konut.models import DEFAULT_POLICY, HouseCategory, LendingPolicy, MortgageResult
from core.schedule import short_amount


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(
    result: MortgageResult,
    category,
    policy: LendingPolicy = DEFAULT_POLICY,
) -> List[RuleResult]:
    """Notices to show alongside a computed mortgage.

    ``message`` is an untranslated template; render it with ``core.i18n.t``
    and the entries of ``context``.
    """
    res: List[RuleResult] = []
    category = HouseCategory(category)

    if category is HouseCategory.SECONDHAND and result.loan_amount == 0:
        res.append(
            RuleResult(
                code="NO_LOAN_AVAILABLE",
                severity="warn",
                message="No loan available for houses {threshold}+ TRY",
                context={"threshold": short_amount(policy.no_loan_threshold or 0)},
            )
        )

    if result.capped:
        res.append(
            RuleResult(
                code="MAX_LOAN_APPLIED",
                severity="info",
                message="Loan limited to the maximum of {cap} TRY",
                context={"cap": format_currency(policy.max_loan)},
            )
        )

    return res

