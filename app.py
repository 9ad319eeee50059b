from __future__ import annotations

import streamlit as st

st.set_page_config(page_title="Shop Desk", page_icon="🏪", layout="wide")

pages = [
    st.Page("home.py", title="Home", icon="🏠"),
    st.Page("pages/1_📋_Stock_Reconciliation.py", title="Stock Reconciliation", icon="📋"),
    st.Page("pages/2_🧪_Data_Management.py", title="Data Management", icon="🧪"),
]

st.navigation(pages).run()
