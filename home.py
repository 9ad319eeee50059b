from __future__ import annotations

import streamlit as st

from shopdesk.config import configure_logging, get_settings
from shopdesk.db import get_conn, ensure_schema
from shopdesk.services.demo_data import upsert_reference_data

st.set_page_config(page_title="Shop Desk", page_icon="🏪", layout="wide")

st.title("🏪 Shop Desk")
st.caption("Daily stock reconciliation: opening and closing counts checked against what the orders say was sold.")

settings = get_settings()
configure_logging(settings.log_level)
conn = get_conn(settings.db_path)
ensure_schema(conn)
upsert_reference_data(conn)

with st.sidebar:
    st.subheader("Environment")
    st.write(f"**Data directory:** `{settings.data_dir}`")
    st.write(f"**Database:** `{settings.db_path.name}`")

st.info(
    "Use the left sidebar navigation. Start with **🧪 Data Management** to load a demo day, then open **Stock Reconciliation**.",
    icon="ℹ️",
)
