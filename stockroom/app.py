from html import escape

import pandas as pd
import streamlit as st

from stockroom.auth import get_current_user
from stockroom.core.pagination import page_url
from stockroom.data.models import ELLIPSIS, StockLevel
from stockroom.data.util import get_data_access
from stockroom.errors import AuthenticationError, MutationFailure, ProductValidationError
from stockroom.services.dashboard import load_dashboard
from stockroom.services.inventory import load_inventory_page, parse_query
from stockroom.services import products as product_actions

st.set_page_config(page_title="Stockroom | Inventory", layout="wide")

da = get_data_access("csv")

LEVEL_COLORS = {
    StockLevel.OUT_OF_STOCK: "#dc2626",
    StockLevel.LOW_STOCK: "#ca8a04",
    StockLevel.IN_STOCK: "#16a34a",
}
VIEWS = {"dashboard": "Dashboard", "inventory": "Inventory", "add": "Add Product"}


def link(href: str, label: str, active: bool = False, disabled: bool = False) -> str:
    if disabled:
        return f'<span class="pg pg-disabled">{escape(label)}</span>'
    cls = "pg pg-active" if active else "pg"
    return f'<a class="{cls}" href="{escape(href)}" target="_self">{escape(label)}</a>'


# -----------------------------------------------------------------------------
# Authentication: every query below is scoped to this user
# -----------------------------------------------------------------------------
try:
    user = get_current_user(dict(st.context.headers))
except AuthenticationError as e:
    st.title("Sign in required")
    st.error(str(e))
    st.info("Open the app through the workspace proxy, or set DEFAULT_USER_ID for local development.")
    st.stop()

view = st.query_params.get("view", "dashboard")
if view not in VIEWS:
    view = "dashboard"

# -----------------------------------------------------------------------------
# Sidebar navigation
# -----------------------------------------------------------------------------
st.sidebar.header("Stockroom")
st.sidebar.caption(f"Signed in as {user.display_name}")
st.sidebar.markdown(
    "<br>".join(link(f"?view={key}", label, active=(key == view))
                for key, label in VIEWS.items()),
    unsafe_allow_html=True,
)


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------
def render_dashboard() -> None:
    st.title("Dashboard")
    st.caption("Welcome back! Here is an overview of your inventory.")

    dash = load_dashboard(da, user.id)
    summary = dash.summary

    left, right = st.columns(2)
    with left:
        st.markdown("### Key Metrics")
        c1, c2, c3 = st.columns(3)
        c1.metric("Total Products", f"{dash.total_products:,}")
        c2.metric("Total Value", f"${summary.total_value:,.0f}")
        c3.metric("Low Stock", f"{dash.flagged_low_stock:,}",
                  help="Products with an explicit low-stock threshold and 5 or fewer units.")
    with right:
        st.markdown("### New products per week")
        weekly = pd.DataFrame(
            [{"week": b.label, "products": b.count} for b in summary.weekly_series]
        )
        st.bar_chart(weekly, x="week", y="products", use_container_width=True)

    left, right = st.columns(2)
    with left:
        st.markdown("### Stock Levels")
        if not dash.recent:
            st.write("No products yet.")
        for item in dash.recent:
            color = LEVEL_COLORS[item.level]
            st.markdown(
                f'<div style="display:flex;justify-content:space-between;padding:6px 10px;">'
                f'<span><span style="color:{color};">&#9679;</span> {escape(item.product.name)}</span>'
                f'<span style="color:{color};">{item.product.quantity} units</span></div>',
                unsafe_allow_html=True,
            )
    with right:
        st.markdown("### Efficiency")
        e1, e2, e3 = st.columns(3)
        e1.metric("In Stock", f"{summary.in_stock_pct}%")
        e2.metric("Low Stock", f"{summary.low_stock_pct}%")
        e3.metric("Out of Stock", f"{summary.out_of_stock_pct}%")

    # Optional: tiny latency readout (useful when comparing backends)
    with st.expander("Query timings (ms)"):
        st.write(dash.timings_ms)


# -----------------------------------------------------------------------------
# Inventory table
# -----------------------------------------------------------------------------
def render_pagination(inv) -> None:
    window = inv.window
    if not window.should_render:
        return
    params = {"view": "inventory", **inv.nav_params}
    parts = [link(page_url("", params, window.current_page - 1), "‹ Previous", disabled=not window.has_previous)]
    for token in window.tokens:
        if token == ELLIPSIS:
            parts.append(f'<span class="pg">{ELLIPSIS}</span>')
        else:
            parts.append(link(page_url("", params, token), str(token), active=(token == window.current_page)))
    parts.append(link(page_url("", params, window.current_page + 1), "Next ›", disabled=not window.has_next))
    st.markdown(f'<nav class="pagination">{" ".join(parts)}</nav>', unsafe_allow_html=True)


def render_inventory() -> None:
    st.title("Inventory")
    st.caption("Manage your products and track inventory levels.")

    query = parse_query(st.query_params.to_dict())
    with st.form("search"):
        q = st.text_input("Search products...", value=query.q, label_visibility="collapsed",
                          placeholder="Search products...")
        if st.form_submit_button("Search"):
            st.query_params.from_dict({"view": "inventory", "q": q.strip()})
            st.rerun()

    inv = load_inventory_page(da, user.id, query)

    header = st.columns([3, 2, 1, 1, 1, 1])
    for col, title in zip(header, ["Name", "SKU", "Price", "Quantity", "Low Stock At", "Actions"]):
        col.markdown(f"**{title}**")
    for product in inv.items:
        row = st.columns([3, 2, 1, 1, 1, 1])
        row[0].write(product.name)
        row[1].write(product.sku or "-")
        row[2].write(f"${product.price:.2f}")
        row[3].write(product.quantity)
        row[4].write(product.low_stock_at if product.low_stock_at is not None else "-")
        if row[5].button("Delete", key=f"delete-{product.id}"):
            try:
                product_actions.delete_product(da, user, {"id": product.id})
            except MutationFailure as e:
                st.error(str(e))
            else:
                st.rerun()
    if not inv.items:
        st.write("No products found.")

    render_pagination(inv)


# -----------------------------------------------------------------------------
# Add product
# -----------------------------------------------------------------------------
def render_add_product() -> None:
    st.title("Add Product")
    st.caption("Add a new product to your inventory.")

    with st.form("create-product"):
        form = {
            "name": st.text_input("Product Name *"),
            "quantity": st.text_input("Quantity *", value="0"),
            "price": st.text_input("Price *", value="0.00"),
            "sku": st.text_input("SKU (optional)"),
            "low_stock_at": st.text_input("Low Stock At (optional)"),
        }
        submitted = st.form_submit_button("Add Product")

    if submitted:
        try:
            product_actions.create_product(da, user, form)
        except ProductValidationError as e:
            for field, message in e.field_errors.items():
                st.error(f"{field}: {message}")
        except MutationFailure as e:
            st.error(str(e))
        else:
            st.query_params.from_dict({"view": "inventory"})
            st.rerun()


{"dashboard": render_dashboard, "inventory": render_inventory, "add": render_add_product}[view]()

# -----------------------------------------------------------------------------
# Pagination / nav link styling
# -----------------------------------------------------------------------------
st.markdown(
    """
    <style>
    .pg {
        display: inline-block;
        padding: 6px 10px;
        margin: 2px;
        border-radius: 6px;
        border: 1px solid #d1d5db;
        color: #374151;
        text-decoration: none;
        font-size: 14px;
    }
    .pg-active { background: #7c3aed; color: #ffffff !important; border-color: #7c3aed; }
    .pg-disabled { color: #9ca3af; background: #f3f4f6; cursor: not-allowed; }
    </style>
    """,
    unsafe_allow_html=True,
)
