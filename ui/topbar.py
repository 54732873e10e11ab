import streamlit as st
from core.i18n import DEFAULT_LANGUAGE, LANGUAGES, t
from core.version import __version__


def render_topbar() -> str:
    """Render the title bar with the language toggle and return the language."""
    st.markdown(
        """
        <style>
        .konut-topbar div[data-testid="stHorizontalBlock"] {align-items:center;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state.setdefault("ui_prefs", {})
    st.session_state["ui_prefs"].setdefault("language", DEFAULT_LANGUAGE)
    current = st.session_state.get("ui_lang", st.session_state["ui_prefs"]["language"])
    if current not in LANGUAGES:
        current = DEFAULT_LANGUAGE
    st.session_state["ui_lang"] = current

    with st.container():
        st.markdown('<div class="konut-topbar">', unsafe_allow_html=True)
        left, right = st.columns([4, 1])
        with right:
            lang = st.selectbox(
                t("Language", current),
                list(LANGUAGES),
                format_func=str.upper,
                key="ui_lang",
            )
        with left:
            st.title(t("Mortgage Calculator", lang))
            st.caption(f"{t('Turkey', lang)} · v{__version__}")
        st.markdown("</div>", unsafe_allow_html=True)
    st.session_state["ui_prefs"]["language"] = lang
    return lang
