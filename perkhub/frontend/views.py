import streamlit as st

from . import api_client
from ..directory import filter_perks, merchant_options, summary_text


def init_session_state():
    if 'user_token' not in st.session_state:
        st.session_state.user_token = None
    if 'user' not in st.session_state:
        st.session_state.user = None


def _store_auth(payload):
    st.session_state.user_token = payload["token"]
    st.session_state.user = payload["user"]


def logout():
    st.session_state.user_token = None
    st.session_state.user = None


def render_perk_card(perk):
    with st.container(border=True):
        st.subheader(perk["title"])
        st.markdown(f"**Merchant:** {perk.get('merchant', 'N/A')}")
        st.markdown(f"**Category:** {str(perk.get('category', 'other')).title()}")
        if perk.get("discount_percent"):
            st.markdown(f"**Discount:** {perk['discount_percent']}% off")
        if perk.get("description"):
            st.write(perk["description"])


def render_all_perks():
    """Directory page: fetch the public perks once, filter them in the browser session."""
    st.title("All Perks")
    st.write("Browse every perk our merchants are offering.")

    try:
        perks = api_client.fetch_public_perks()
    except api_client.ApiError as e:
        st.error(f"Could not load perks: {e.message}")
        perks = []

    name_col, merchant_col = st.columns(2)
    with name_col:
        name_query = st.text_input(
            "Perk name",
            placeholder="Enter perk name...",
            key="perk_name_filter",
        )
    with merchant_col:
        merchant = st.selectbox(
            "Merchant",
            merchant_options(perks),
            key="perk_merchant_filter",
        )

    visible = filter_perks(perks, name_query, merchant)
    st.caption(summary_text(len(visible), len(perks)))

    if not visible:
        st.info("No perks match your filters.")
    for perk in visible:
        render_perk_card(perk)


def render_login_form():
    with st.form("login_form"):
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Login")
    if submitted:
        try:
            _store_auth(api_client.login(email, password))
        except api_client.ApiError as e:
            st.error(f"Login failed: {e.message}")
            return
        st.rerun()


def render_register_form():
    with st.form("register_form"):
        name = st.text_input("Name", key="reg_name")
        email = st.text_input("Email", key="reg_email")
        password = st.text_input("Password", type="password", key="reg_password")
        submitted = st.form_submit_button("Create account")
    if submitted:
        try:
            _store_auth(api_client.register(name, email, password))
        except api_client.ApiError as e:
            st.error(f"Registration failed: {e.message}")
            return
        st.rerun()


def render_profile():
    try:
        user = api_client.fetch_profile(st.session_state.user_token)
    except api_client.ApiError as e:
        if e.status_code == 401:
            # token expired or revoked
            logout()
            st.warning("Your session has expired, please log in again.")
            return
        st.error(f"Error loading profile: {e.message}")
        return

    st.session_state.user = user
    st.title(f"Welcome, {user['name']}")
    st.markdown(f"**Email:** {user['email']}")
    st.markdown(f"**Member since:** {user['created_at'][:10]}")
    st.info("Open **All Perks** in the sidebar to explore the directory.")


def render_home():
    init_session_state()

    if not st.session_state.user_token:
        st.title("Welcome to Perkhub")
        login_tab, register_tab = st.tabs(["Login", "Register"])
        with login_tab:
            render_login_form()
        with register_tab:
            render_register_form()
        return

    st.sidebar.write(f"Logged in as: {st.session_state.user['email']}")
    if st.sidebar.button("Logout"):
        logout()
        st.rerun()

    render_profile()
