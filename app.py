from contextlib import contextmanager
from typing import Optional

import altair as alt
import streamlit as st

from core.charts import line_chart, statistics_bar_chart
from core.client import ResourceClient
from core.config import PanelConfig, configure_logging, get_config
from core.dashboard import StatisticsController, TimeSeriesController
from core.models import TimeFilter
from core.products import ProductListController
from core.views import (
    DELETE_CONFIRM_PROMPT,
    EMPTY_PRODUCTS_MESSAGE,
    TABLE_COLUMNS,
    pagination_view,
    statistics_tiles,
    table_cells,
)

alt.data_transformers.disable_max_rows()


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .card-actions {font-size: 0.9rem;color: #6b7280;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_page_header(title: str, breadcrumb: str):
    inject_base_styles()
    st.markdown(
        f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
        unsafe_allow_html=True,
    )


# ---------- session-scoped state ----------
def get_state() -> dict:
    if "panel" not in st.session_state:
        config: PanelConfig = get_config()
        configure_logging(config.log_level)
        client = ResourceClient(config)
        st.session_state["panel"] = {
            "config": config,
            "statistics": StatisticsController(client),
            "series": TimeSeriesController(client),
            "products": ProductListController(client),
        }
    return st.session_state["panel"]


# ---------- Dashboard ----------
def _on_filter_change():
    get_state()["series"].set_filter(st.session_state["time_filter"])


def render_dashboard_page(entered: bool):
    state = get_state()
    stats_ctl: StatisticsController = state["statistics"]
    series_ctl: TimeSeriesController = state["series"]

    if entered:
        stats_ctl.remount()
        series_ctl.load()

    render_page_header("Dashboard", "Home / Dashboard")

    cols = st.columns(3)
    for col, tile in zip(cols, statistics_tiles(stats_ctl.statistics)):
        col.metric(tile["label"], tile["display"])
    if stats_ctl.last_error:
        st.caption("Statistics could not be refreshed; showing the last known values.")

    with card("Graph", "Visualization and analysis of data"):
        options = [f.value for f in TimeFilter]
        _, right = st.columns([4, 1])
        right.selectbox(
            "Granularity",
            options,
            index=options.index(series_ctl.filter.value),
            format_func=str.capitalize,
            key="time_filter",
            on_change=_on_filter_change,
        )
        if series_ctl.last_error:
            st.warning("Chart data could not be refreshed; showing the previous series.")
        if state["config"].show_statistics_bar:
            st.altair_chart(statistics_bar_chart(stats_ctl.statistics), use_container_width=True)
        st.altair_chart(line_chart(series_ctl.points), use_container_width=True)


# ---------- Products ----------
def _on_search_change():
    get_state()["products"].set_search(st.session_state["product_search"])


def render_delete_modal(ctl: ProductListController):
    with card("Delete product"):
        st.markdown(f"**{DELETE_CONFIRM_PROMPT}**")
        c1, c2, _ = st.columns([1, 1, 6])
        c1.button("Cancel", key="delete_cancel", on_click=ctl.close_modal)
        c2.button("Yes", key="delete_confirm", type="primary", on_click=ctl.confirm_delete)


def render_pagination(ctl: ProductListController):
    view = pagination_view(ctl.pagination)
    left, right = st.columns([2, 5])
    left.caption(view["label"])
    buttons = right.columns(len(view["pages"]) + 2)
    buttons[0].button("Previous", key="page_prev", disabled=view["prev_disabled"], on_click=ctl.previous_page)
    for i, page in enumerate(view["pages"], start=1):
        buttons[i].button(
            str(page),
            key=f"page_{page}",
            type="primary" if page == view["current_page"] else "secondary",
            on_click=ctl.go_to_page,
            args=(page,),
        )
    buttons[-1].button("Next", key="page_next", disabled=view["next_disabled"], on_click=ctl.next_page)


def render_products_page(entered: bool):
    ctl: ProductListController = get_state()["products"]
    if entered:
        ctl.load()

    render_page_header("Products", "Home / Dashboard / Products")

    if ctl.notice:
        st.error(ctl.notice)
        st.button("OK", key="notice_ok", on_click=ctl.dismiss_notice)
        return

    if ctl.modal_open:
        render_delete_modal(ctl)

    with card("Products"):
        st.text_input(
            "Search",
            value=ctl.search,
            placeholder="Search for products",
            key="product_search",
            on_change=_on_search_change,
            label_visibility="collapsed",
        )
        if ctl.last_error:
            st.warning("Products could not be refreshed; showing the previous results.")

        widths = [3, 1, 1, 4, 1]
        header = st.columns(widths)
        for col, name in zip(header, TABLE_COLUMNS + ["Action"]):
            col.markdown(f"**{name}**")

        if not ctl.products:
            st.info(EMPTY_PRODUCTS_MESSAGE)
        for product in ctl.products:
            row = st.columns(widths)
            for col, text in zip(row, table_cells(product)):
                col.write(text)
            row[4].button("Delete", key=f"delete_{product.id}", on_click=ctl.open_modal, args=(product.id,))

        render_pagination(ctl)


# ---------- UI setup ----------
st.set_page_config(page_title="Admin Panel", layout="wide")
inject_base_styles()

with st.sidebar:
    st.markdown("### Navigate")
    nav_choice = st.radio("Navigate", ["Dashboard", "Products"], index=0, label_visibility="collapsed")

# a screen is (re)mounted whenever the sidebar selection changes, first run included
entered = st.session_state.get("_current_page") != nav_choice
st.session_state["_current_page"] = nav_choice

if nav_choice == "Dashboard":
    render_dashboard_page(entered)
else:
    render_products_page(entered)
