import logging
import os

import streamlit as st

from konut.presets import DISCLAIMER
from ui.calculator import render_inputs, render_result
from ui.topbar import render_topbar


def configure_logging() -> None:
    """Route library log records to stderr at the level in ``KONUT_LOG_LEVEL``."""

    level = os.environ.get("KONUT_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    configure_logging()
    lang = render_topbar()
    raw_price, category = render_inputs(lang)
    render_result(raw_price, category, lang)
    st.divider()
    st.caption(DISCLAIMER)


if __name__ == "__main__":
    st.set_page_config(page_title="Mortgage Calculator", page_icon="🏠", layout="centered")
    main()
