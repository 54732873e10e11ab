import json

from core.i18n import LANGUAGES, TRANSLATIONS_DIR, t


def test_turkish_translation_loaded():
    assert t("Loan Amount", "tr") == "Kredi Tutarı"
    assert t("Down Payment", "tr") == "Peşinat"
    assert t("UnknownKey", "tr") == "UnknownKey"


def test_placeholders_filled():
    assert t("({pct}% of price)", "en", pct="60") == "(60% of price)"
    assert t("{years} years @ {rate}% monthly", "tr", years=10, rate="2.65") == "10 yıl @ aylık %2.65"


def test_unknown_language_falls_back_to_key():
    assert t("Loan Amount", "de") == "Loan Amount"


def test_label_sets_cover_same_keys():
    tables = {
        lang: json.loads((TRANSLATIONS_DIR / f"{lang}.json").read_text(encoding="utf-8"))
        for lang in LANGUAGES
    }
    assert set(tables["en"]) == set(tables["tr"])
