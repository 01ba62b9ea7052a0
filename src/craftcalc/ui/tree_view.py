"""Hierarchical breakdown tree display."""

import streamlit as st

from craftcalc.models.recipe import format_quantity
from craftcalc.models.result import TreeNode


def render_breakdown_tree():
    """Render one nested breakdown per requested target."""
    output = st.session_state.get("current_output")
    if output is None:
        st.info("Fix the plan to see the breakdown")
        return
    if not output.requests:
        st.info("Add items to the 'need' section to see a breakdown")
        return

    aggregator = st.session_state.aggregator
    for root in aggregator.build_tree(output):
        st.subheader(f"{format_quantity(root.quantity)} {root.item}")
        stack = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            _render_node(node, output, depth)
            stack.extend((child, depth + 1) for child in reversed(node.children))


def _render_node(node: TreeNode, output, depth: int):
    """Render a single tree line, indented by depth."""
    places = st.session_state.aggregator.decimal_places
    result = output[node.item]

    # Indent using columns with empty spacer
    indent_size = min(depth * 3, 60)  # percentage of width for indent
    if indent_size > 0:
        cols = st.columns([indent_size, 100 - indent_size])
        container = cols[1]
    else:
        container = st.container()

    with container:
        quantity = format_quantity(node.quantity, places)
        if node.is_base:
            st.markdown(f"📦 **{node.item}** · *{quantity} needed*")
        elif node.shared:
            st.markdown(f"↑ **{node.item}** · {quantity} (broken down above)")
        else:
            detail = f"{node.craft_count}x craft"
            if result.output_yield != 1:
                detail += f" @ {format_quantity(result.output_yield, places)} each"
            if result.leftover > 0:
                detail += f", {format_quantity(result.leftover, places)} left over"
            st.markdown(f"🔨 **{node.item}** · {quantity} ({detail})")
