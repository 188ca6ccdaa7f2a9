import streamlit as st

from pokexplorer_client import ClientApp, Route, build_app
from pokexplorer_client.views import history_panel, loading_state, welcome_state

st.set_page_config(page_title="Poké-Explorer", page_icon="⚡", layout="centered")

st.markdown("""
<style>
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    .pokemon-card {text-align: center; padding: 1rem; border-radius: 15px; background: #f7f7f9;}
    .pokemon-card img {max-width: 240px;}
    .pokemon-id {color: #888; font-weight: 600;}
    .pokemon-type {display: inline-block; margin: 0 4px; padding: 2px 10px; border-radius: 10px;
                   background: #ffcb05; color: #2a75bb; font-weight: 600; text-transform: capitalize;}
    .alert-error {color: #b00020;}
    .alert-success {color: #1b5e20;}
</style>
""", unsafe_allow_html=True)

# --- STATE INIT ---
if "app" not in st.session_state:
    st.session_state.app = build_app()
app: ClientApp = st.session_state.app


def go(route: Route) -> None:
    """Mirror the route in the URL, like the browser hash."""
    st.query_params["route"] = route.value
    st.rerun()


def html(fragment: str) -> None:
    st.markdown(fragment, unsafe_allow_html=True)


# --- ROUTING ---
requested = st.query_params.get("route")
if requested != app.route.value:
    app.navigate(requested)
    if app.route.value != requested:
        go(app.route)


# --- PAGES ---
def login_page() -> None:
    st.title("⚡ Poké-Explorer")
    st.caption("Discover the world of Pokémon")
    html(app.alert_html)

    with st.form("login"):
        username = st.text_input("Username", autocomplete="username")
        password = st.text_input("Password", type="password", autocomplete="current-password")
        col1, col2 = st.columns(2)
        login_clicked = col1.form_submit_button("Log In", use_container_width=True)
        register_clicked = col2.form_submit_button("Create New Account", use_container_width=True)

    if login_clicked:
        app.login(username, password)
    elif register_clicked:
        app.register(username, password)
    else:
        return

    if app.route == Route.DASHBOARD:
        go(app.route)
    st.rerun()


def dashboard_page() -> None:
    header, logout_col = st.columns([4, 1])
    header.title("⚡ Poké-Explorer")
    logout_col.caption(f"👤 {app.session.username}")
    if logout_col.button("Log Out"):
        app.logout()
        go(app.route)

    html(app.alert_html)

    with st.form("search", clear_on_submit=True):
        term = st.text_input("Search Pokémon by name or ID...", label_visibility="collapsed",
                             placeholder="Search Pokémon by name or ID...")
        submitted = st.form_submit_button("🔍 Search")

    grid = st.empty()
    if submitted:
        grid.markdown(loading_state(), unsafe_allow_html=True)
        app.search(term)
        st.rerun()

    grid.markdown(app.grid_html or welcome_state(), unsafe_allow_html=True)
    html(history_panel(app.history))


if app.route == Route.DASHBOARD:
    dashboard_page()
else:
    login_page()
