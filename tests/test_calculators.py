import math

import pytest

from konut import presets
from konut.calculators import (
    InvalidPriceError,
    amortization_schedule,
    calculate_mortgage,
    classify_price_input,
    compose_mortgage,
    format_currency,
    format_percentage,
    monthly_payment,
    parse_price,
    payment_summary,
    resolve_loan_percentage,
    total_payment,
)
from konut.models import AmortizationTerms, HouseCategory, PriceInputState

SECONDHAND = HouseCategory.SECONDHAND
NEW = HouseCategory.NEW


@pytest.mark.parametrize(
    "price, expected",
    [(999_999, 0.90), (1_000_000, 0.60), (1_999_999, 0.60), (2_000_000, 0.50), (50_000_000, 0.50)],
)
def test_secondhand_tiers(price, expected):
    assert resolve_loan_percentage(price, SECONDHAND) == expected


@pytest.mark.parametrize(
    "price, expected",
    [
        (4_999_999, 0.80),
        (5_000_000, 0.70),
        (9_999_999, 0.70),
        (10_000_000, 0.60),
        (19_999_999, 0.60),
        (20_000_000, 0.50),
    ],
)
def test_new_house_tiers(price, expected):
    assert resolve_loan_percentage(price, NEW) == expected


def test_secondhand_percentage_non_increasing():
    prices = [100_000, 999_999, 1_000_000, 1_999_999, 2_000_000, 9_000_000]
    pcts = [resolve_loan_percentage(p, SECONDHAND) for p in prices]
    assert pcts == sorted(pcts, reverse=True)


def test_category_accepts_plain_string():
    assert resolve_loan_percentage(4_000_000, "new") == 0.80


@pytest.mark.parametrize("category", [SECONDHAND, NEW])
@pytest.mark.parametrize("price", [1, 0.3, 850_000, 1_234_567.89, 4_999_999, 9_999_999.99, 25_000_000])
def test_loan_plus_down_payment_equals_price(price, category):
    res = compose_mortgage(price, category)
    assert math.isclose(res.loan_amount + res.down_payment, price, rel_tol=1e-12)
    assert res.loan_amount >= 0
    assert res.down_payment >= 0


@pytest.mark.parametrize("price", [10_000_000, 10_000_001, 75_000_000])
def test_secondhand_no_loan_above_threshold(price):
    res = compose_mortgage(price, SECONDHAND)
    assert res.loan_amount == 0
    assert res.down_payment == price
    assert res.loan_percentage == 0
    assert not res.capped


def test_secondhand_loan_clamped_to_ceiling():
    res = compose_mortgage(6_000_000, SECONDHAND)
    assert res.loan_percentage == 0.50
    assert res.loan_amount == 2_500_000
    assert res.down_payment == 3_500_000
    assert res.capped


def test_secondhand_below_ceiling_not_capped():
    res = compose_mortgage(1_000_000, SECONDHAND)
    assert res.loan_amount == pytest.approx(600_000)
    assert not res.capped


def test_new_house_loans_are_uncapped():
    res = compose_mortgage(10_000_000, NEW)
    assert res.loan_amount == pytest.approx(6_000_000)
    assert not res.capped
    res = compose_mortgage(30_000_000, NEW)
    assert res.loan_amount == pytest.approx(15_000_000)


def test_compose_is_idempotent():
    a = compose_mortgage(3_750_000, SECONDHAND)
    b = compose_mortgage(3_750_000, SECONDHAND)
    assert a == b
    assert a.model_dump() == b.model_dump()


@pytest.mark.parametrize("bad", [0, -5, float("nan"), float("inf")])
def test_compose_rejects_non_positive_or_non_finite(bad):
    with pytest.raises(InvalidPriceError):
        compose_mortgage(bad, NEW)


@pytest.mark.parametrize("raw", ["", "   ", "abc", "0", "-100", "nan", "1,5", "1_000_000", "1e6", "0x10", True, None])
def test_calculate_mortgage_returns_none_for_invalid(raw):
    assert calculate_mortgage(raw, SECONDHAND) is None


def test_calculate_mortgage_valid_text():
    res = calculate_mortgage(" 1500000 ", SECONDHAND)
    assert res is not None
    assert res.loan_amount == pytest.approx(900_000)


def test_zero_loan_result_is_not_no_result():
    res = calculate_mortgage("12000000", SECONDHAND)
    assert res is not None
    assert res.loan_amount == 0


def test_parse_price():
    assert parse_price("1500000.50") == 1_500_000.5
    assert parse_price(250000) == 250_000.0
    with pytest.raises(InvalidPriceError):
        parse_price("twelve")


@pytest.mark.parametrize("raw", ["1_000_000", "1e6", "1.500.000", True, False, [1_000_000], b"100"])
def test_parse_price_rejects_non_decimal_input(raw):
    with pytest.raises(InvalidPriceError):
        parse_price(raw)
    assert classify_price_input(raw) is PriceInputState.INVALID


def test_invalid_price_error_is_value_error():
    assert issubclass(InvalidPriceError, ValueError)


@pytest.mark.parametrize(
    "raw, state",
    [
        ("", PriceInputState.EMPTY),
        (None, PriceInputState.EMPTY),
        ("  ", PriceInputState.EMPTY),
        ("abc", PriceInputState.INVALID),
        ("0", PriceInputState.INVALID),
        ("-1", PriceInputState.INVALID),
        ("1000000", PriceInputState.VALID),
    ],
)
def test_classify_price_input(raw, state):
    assert classify_price_input(raw) is state


def test_monthly_payment_reference_value():
    pmt = monthly_payment(1_000_000, 0.0265, 10)
    r, n = 0.0265, 120
    reference = 1_000_000 * r / (1 - (1 + r) ** (-n))
    assert pmt == pytest.approx(reference, rel=1e-12)
    assert pmt == pytest.approx(27_700.6, abs=1)
    assert total_payment(1_000_000, 0.0265, 10) == pytest.approx(pmt * 120)


def test_monthly_payment_uses_published_terms_by_default():
    assert monthly_payment(1_000_000) == monthly_payment(
        1_000_000, presets.MONTHLY_INTEREST_RATE, presets.LOAN_TERM_YEARS
    )


def test_monthly_payment_follows_overridden_constants(monkeypatch):
    monkeypatch.setattr(presets, "MONTHLY_INTEREST_RATE", 0.0)
    monkeypatch.setattr(presets, "LOAN_TERM_YEARS", 5)
    assert monthly_payment(600_000) == pytest.approx(10_000)
    assert total_payment(600_000) == pytest.approx(600_000)


def test_monthly_payment_zero_rate_and_zero_principal():
    assert monthly_payment(120_000, 0.0, 10) == pytest.approx(1_000)
    assert monthly_payment(0) == 0.0
    assert monthly_payment(-50_000) == 0.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"monthly_rate": "abc"},
        {"term_years": "abc"},
        {"monthly_rate": float("nan")},
        {"term_years": float("inf")},
    ],
)
def test_payment_terms_must_be_finite_numbers(kwargs):
    with pytest.raises(ValueError):
        monthly_payment(1_000_000, **kwargs)
    with pytest.raises(ValueError):
        total_payment(1_000_000, **kwargs)


def test_payment_summary():
    terms = AmortizationTerms(term_years=2, monthly_rate=0.01)
    s = payment_summary(100_000, terms)
    assert s.number_of_payments == 24
    assert s.monthly_payment == pytest.approx(monthly_payment(100_000, 0.01, 2))
    assert s.total_payment == pytest.approx(s.monthly_payment * 24)


def test_amortization_schedule_pays_off_loan():
    sched = amortization_schedule(1_000_000)
    assert list(sched.columns) == ["Year", "Interest", "Principal", "Ending Balance"]
    assert len(sched) == 10
    assert sched["Principal"].sum() == pytest.approx(1_000_000)
    assert sched["Ending Balance"].iloc[-1] == 0.0
    total = sched["Interest"].sum() + sched["Principal"].sum()
    assert total == pytest.approx(total_payment(1_000_000))


def test_amortization_schedule_empty_for_no_loan():
    assert amortization_schedule(0).empty


@pytest.mark.parametrize(
    "value, text",
    [(0, "0"), (999.4, "999"), (1_234_567.5, "1.234.568"), (2_500_000, "2.500.000"), (27_700.64, "27.701")],
)
def test_format_currency(value, text):
    assert format_currency(value) == text


def test_format_percentage():
    assert format_percentage(0.9) == "90"
    assert format_percentage(0.6) == "60"
    assert format_percentage(0) == "0"
