"""Main Streamlit application for the Crafting Calculator."""

from pathlib import Path

import streamlit as st

from craftcalc.config import ConfigManager
from craftcalc.data.loader import load_example_text
from craftcalc.engine.aggregator import ResultAggregator
from craftcalc.errors import ConfigError
from craftcalc.logging_config import configure_logging
from craftcalc.persistence.storage import PlanStorage
from craftcalc.ui.components import render_plan_editor, render_sidebar
from craftcalc.ui.summary_view import render_summary
from craftcalc.ui.tree_view import render_breakdown_tree


def init_session_state():
    """Initialize session state variables."""
    if st.session_state.get("config") is None:
        config = ConfigManager()
        try:
            config.load_config()
        except ConfigError as e:
            st.warning(f"{e} - using defaults")
            config.reset_to_defaults()
        configure_logging(
            config.get("logging.level", "INFO"), config.get("logging.file")
        )
        st.session_state.config = config

    config = st.session_state.config

    if st.session_state.get("storage") is None:
        st.session_state.storage = PlanStorage(
            Path(config.get("storage.directory", "saved_plans"))
        )

    if st.session_state.get("aggregator") is None:
        st.session_state.aggregator = ResultAggregator(
            decimal_places=config.get("display.decimal_places", 2)
        )

    if "plan_text" not in st.session_state:
        st.session_state.plan_text = load_example_text()

    if "current_output" not in st.session_state:
        st.session_state.current_output = None


def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Crafting Calculator",
        page_icon="🔨",
        layout="wide",
    )

    init_session_state()

    with st.sidebar:
        render_sidebar()

    st.title("🔨 Crafting Calculator")

    editor_col, result_col = st.columns([2, 3])

    with editor_col:
        render_plan_editor()

    with result_col:
        output = st.session_state.current_output
        if output is not None:
            st.caption(f"{len(output)} items across {len(output.requests)} targets")

        tab1, tab2 = st.tabs(["🌳 Breakdown", "🛒 Shopping List"])
        with tab1:
            render_breakdown_tree()
        with tab2:
            render_summary()


if __name__ == "__main__":
    main()
