"""Reusable Streamlit UI components."""

import logging

import streamlit as st

from craftcalc.data.parser import parse_plan
from craftcalc.engine.calculator import resolve_plan
from craftcalc.errors import CraftCalcError

logger = logging.getLogger(__name__)


def _get_default_plan_name(storage) -> str:
    """Generate default plan name like 'Plan 1', 'Plan 2', etc."""
    existing_names = {name for _, name, _, _ in storage.list_plans()}
    suffix = 1
    while f"Plan {suffix}" in existing_names:
        suffix += 1
    return f"Plan {suffix}"


def evaluate_plan_text(text: str) -> None:
    """Parse and resolve the editor contents into session state.

    On failure the previous result is dropped so a stale breakdown is
    never shown next to an edited plan.
    """
    st.session_state.current_plan = None
    st.session_state.current_output = None
    st.session_state.plan_error = None
    try:
        plan = parse_plan(text, name=st.session_state.plan_name)
        output = resolve_plan(plan)
    except CraftCalcError as e:
        logger.info("Plan rejected: %s", e)
        st.session_state.plan_error = str(e)
        return
    st.session_state.current_plan = plan
    st.session_state.current_output = output


def render_plan_editor():
    """Text editor for the plan; every edit recomputes the result."""
    text = st.text_area(
        "Plan",
        key="plan_text",
        height=320,
        help="Sections: need, have, recipes. Recipes look like '4 stick = 2 plank'.",
    )
    evaluate_plan_text(text)

    if st.session_state.plan_error:
        st.error(st.session_state.plan_error)


def render_sidebar():
    """Render sidebar with plan management."""
    st.header("Plan Management")

    storage = st.session_state.storage

    if "widget_key_version" not in st.session_state:
        st.session_state.widget_key_version = 0

    st.subheader("Saved Plans")

    saved_plans = storage.list_plans()
    if saved_plans:
        plan_options = {"(Current Plan)": None}
        for filepath, name, target, recipe_count in saved_plans:
            label = f"{name} ({target or 'no target'}, {recipe_count} recipes)"
            plan_options[label] = filepath

        col1, col2 = st.columns([4, 1])
        with col1:
            selected_label = st.selectbox(
                "Load Plan",
                options=list(plan_options.keys()),
                key=f"load_plan_select_{st.session_state.widget_key_version}",
                label_visibility="collapsed",
            )
        selected_path = plan_options[selected_label]
        with col2:
            if selected_path and st.button("X", key="delete_selected"):
                storage.delete(selected_path)
                st.session_state.widget_key_version += 1
                st.rerun()

        if selected_path and st.button("Load", key="load_selected"):
            loaded = storage.load(selected_path)
            st.session_state.plan_text = loaded.to_text()
            st.session_state.plan_name = loaded.name
            st.session_state.plan_id = loaded.id
            st.session_state.widget_key_version += 1
            st.rerun()
    else:
        st.info("No saved plans yet")

    st.divider()

    if not st.session_state.get("plan_name"):
        st.session_state.plan_name = _get_default_plan_name(storage)

    plan_name = st.text_input(
        "Plan Name",
        value=st.session_state.plan_name,
        key=f"plan_name_input_{st.session_state.widget_key_version}",
    )
    st.session_state.plan_name = plan_name

    # Save current plan (only once it parses and resolves)
    plan = st.session_state.get("current_plan")
    if st.button("Save Current Plan", disabled=plan is None):
        plan.name = plan_name
        if st.session_state.get("plan_id"):
            plan.id = st.session_state.plan_id
        storage.save(plan)
        st.session_state.plan_id = plan.id
        st.session_state.widget_key_version += 1
        st.success("Saved!")
        st.rerun()
