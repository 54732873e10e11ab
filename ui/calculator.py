import logging

import streamlit as st

from core.i18n import t
from core.rules import evaluate_rules
from core.schedule import RULE_HEADINGS, tier_rule_lines, tier_table
from konut.calculators import (
    amortization_schedule,
    classify_price_input,
    compose_mortgage,
    format_currency,
    format_percentage,
    payment_summary,
)
from konut.models import DEFAULT_POLICY, HouseCategory, LendingPolicy, PriceInputState
from konut.presets import BDDK_URL

logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    HouseCategory.NEW.value: "New",
    HouseCategory.SECONDHAND.value: "Second-hand",
}


def lira(value) -> str:
    return f"₺{format_currency(value)}"


def render_inputs(lang: str):
    """House type selector, regulation link and price field.

    Returns the raw price text and the selected :class:`HouseCategory`.
    """
    options = list(CATEGORY_LABELS)
    if st.session_state.get("house_type") not in options:
        st.session_state["house_type"] = HouseCategory.SECONDHAND.value
    # Re-assigning the keys pins their values, so the relabelled widgets
    # after a language switch keep what the user entered.
    st.session_state["house_type"] = st.session_state["house_type"]
    st.session_state["house_price"] = st.session_state.get("house_price", "")

    st.radio(
        t("House Type", lang),
        options,
        format_func=lambda v: t(CATEGORY_LABELS[v], lang),
        horizontal=True,
        key="house_type",
    )
    st.markdown(f"[{t('BDDK Regulations', lang)}]({BDDK_URL})")
    st.text_input(
        t("House Price (₺)", lang),
        placeholder=t("Enter house price", lang),
        key="house_price",
    )
    return st.session_state["house_price"], HouseCategory(st.session_state["house_type"])


def render_result(raw_price, category, lang: str, policy: LendingPolicy = DEFAULT_POLICY):
    """Show nothing, an invalid-price notice, or the full result panel."""
    state = classify_price_input(raw_price)
    st.session_state["mortgage_calc"] = None
    if state is PriceInputState.EMPTY:
        return None
    if state is PriceInputState.INVALID:
        logger.info("invalid house price entered: %r", raw_price)
        st.warning(t("Please enter a valid house price.", lang))
        return None

    result = compose_mortgage(raw_price, category, policy)
    summary = payment_summary(result.loan_amount, policy.terms)

    st.metric(t("House Price", lang), lira(result.house_price))
    st.metric(t("Loan Amount", lang), lira(result.loan_amount))
    st.caption(t("({pct}% of price)", lang, pct=format_percentage(result.loan_percentage)))
    if result.loan_amount > 0:
        c1, c2 = st.columns(2)
        c1.metric(t("Monthly Payment", lang), lira(summary.monthly_payment))
        c2.metric(t("Total Payment", lang), lira(summary.total_payment))
        st.caption(
            t(
                "{years} years @ {rate}% monthly",
                lang,
                years=policy.terms.term_years,
                rate=f"{policy.terms.monthly_rate * 100:.2f}",
            )
        )
    for rule in evaluate_rules(result, category, policy):
        msg = t(rule.message, lang, **rule.context)
        if rule.severity == "warn":
            st.warning(msg)
        else:
            st.info(msg)
    st.metric(t("Down Payment", lang), lira(result.down_payment))

    st.markdown(f"**{t(RULE_HEADINGS[category], lang)}**")
    for line in tier_rule_lines(category, lang, policy):
        st.caption(f"• {line}")
    with st.expander(t("Loan Tiers", lang)):
        st.dataframe(tier_table(category, lang, policy), hide_index=True)
    if result.loan_amount > 0:
        with st.expander(t("Yearly Schedule", lang)):
            sched = amortization_schedule(result.loan_amount, policy.terms)
            sched = sched.rename(columns={c: t(c, lang) for c in sched.columns})
            st.dataframe(sched, hide_index=True)

    st.session_state["mortgage_calc"] = {**result.model_dump(), **summary.model_dump()}
    return result
