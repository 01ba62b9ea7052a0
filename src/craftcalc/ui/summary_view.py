"""Shopping list and totals tables."""

import pandas as pd
import streamlit as st

from craftcalc.models.recipe import format_quantity


def render_summary():
    """Render the shopping list, totals table and headline metrics."""
    output = st.session_state.get("current_output")
    if output is None:
        st.info("Fix the plan to see the summary")
        return

    aggregator = st.session_state.aggregator
    places = aggregator.decimal_places
    show_stock = st.session_state.config.get("display.show_stock", True)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("🪨 Base Materials", len(output.base_materials))
    with col2:
        st.metric("🔨 Crafted Items", len(output.intermediates))
    with col3:
        st.metric("🔁 Total Crafts", sum(output.craft_counts.values()))

    st.divider()

    st.subheader("🛒 Shopping List")
    shopping = aggregator.shopping_list(output)
    if shopping:
        st.dataframe(
            pd.DataFrame(
                [
                    {"Item": item, "Quantity": format_quantity(count, places)}
                    for item, count in shopping.items()
                ]
            ),
            use_container_width=True,
            hide_index=True,
        )
    else:
        st.success("Nothing to gather - everything is covered!")

    st.divider()

    st.subheader("📊 All Items")
    df = aggregator.to_dataframe(output)
    if df.empty:
        st.info("No items in plan")
        return

    df = df.rename(
        columns={
            "item_name": "Item",
            "total_quantity_needed": "Needed",
            "from_stock": "From Stock",
            "still_needed": "To Get",
            "craft_count": "Crafts",
            "is_base": "Base",
        }
    )
    if not show_stock:
        df = df.drop(columns=["From Stock", "To Get"])
    st.dataframe(df.round(places), use_container_width=True, hide_index=True)
