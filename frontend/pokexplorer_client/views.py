"""HTML templates for the login and dashboard views."""

from __future__ import annotations

import html
from typing import Any, Dict, Optional, Sequence

from .session import Session

APP_TITLE = "⚡ Poké-Explorer"
PLACEHOLDER_SPRITE = "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/0.png"


def _e(value: Any) -> str:
    return html.escape(str(value), quote=True)


def format_dex_number(pokemon_id: Any) -> str:
    """``25`` -> ``#025``."""
    return f"#{str(pokemon_id).zfill(3)}"


def pokemon_image_url(pokemon: Dict[str, Any]) -> str:
    """Official artwork, else the default sprite, else PokéAPI's placeholder."""
    sprites = pokemon.get("sprites") or {}
    artwork = ((sprites.get("other") or {}).get("official-artwork") or {}).get("front_default")
    return artwork or sprites.get("front_default") or PLACEHOLDER_SPRITE


def pokemon_type_names(pokemon: Dict[str, Any]) -> list[str]:
    return [t["type"]["name"] for t in pokemon.get("types") or [] if t.get("type")]


def alert(message: str, kind: str = "error") -> str:
    return f'<div class="alert alert-{_e(kind)}">{_e(message)}</div>'


def empty_state(title: str, text: str) -> str:
    return (
        '<div class="empty-state">'
        f"<h2>{_e(title)}</h2>"
        f"<p>{_e(text)}</p>"
        "</div>"
    )


def welcome_state() -> str:
    return empty_state("Welcome!", "Search for a Pokémon to start exploring")


def loading_state() -> str:
    return '<div class="loading">Searching for Pokémon</div>'


def not_found_state(message: Optional[str] = None) -> str:
    return empty_state(
        "❌ Not found",
        message or "Pokémon not found. Try another name or ID.",
    )


def pokemon_card(pokemon: Dict[str, Any]) -> str:
    badges = "".join(
        f'<span class="pokemon-type type-{_e(name)}">{_e(name)}</span>'
        for name in pokemon_type_names(pokemon)
    )
    name = pokemon.get("name", "")
    return f"""
      <div class="pokemon-card">
        <div class="pokemon-image">
          <img src="{_e(pokemon_image_url(pokemon))}" alt="{_e(name)}">
        </div>
        <h2 class="pokemon-name">{_e(name)}</h2>
        <p class="pokemon-id">{_e(format_dex_number(pokemon.get("id", 0)))}</p>
        <div class="pokemon-types">{badges}</div>
      </div>
    """


def pokemon_grid(pokemon_list: Sequence[Dict[str, Any]]) -> str:
    if not pokemon_list:
        return empty_state("No results", "Try searching for another Pokémon")
    return "".join(pokemon_card(p) for p in pokemon_list)


def history_panel(entries: Sequence[Dict[str, Any]]) -> str:
    if not entries:
        return ""
    items = "".join(f'<li class="history-term">{_e(e.get("term", ""))}</li>' for e in entries)
    return f'<div class="search-history"><h3>Recent searches</h3><ul>{items}</ul></div>'


def login_view(alert_html: str = "") -> str:
    return f"""
    <div class="login-container">
      {alert_html}
      <h1>{APP_TITLE}</h1>
      <p class="subtitle">Discover the world of Pokémon</p>

      <form id="loginForm">
        <div class="form-group">
          <label for="username">Username</label>
          <input type="text" id="username" name="username" placeholder="Enter your username"
                 required autocomplete="username">
        </div>

        <div class="form-group">
          <label for="password">Password</label>
          <input type="password" id="password" name="password" placeholder="Enter your password"
                 required autocomplete="current-password">
        </div>

        <button type="submit" class="btn btn-primary">Log In</button>
        <button type="button" id="registerBtn" class="btn btn-secondary">Create New Account</button>
      </form>
    </div>
    """


def dashboard_view(
    session: Session,
    grid_html: Optional[str] = None,
    alert_html: str = "",
    history: Sequence[Dict[str, Any]] = (),
) -> str:
    username = session.username or "User"
    return f"""
    <div class="dashboard">
      <div class="dashboard-header">
        <h1>{APP_TITLE}</h1>
        <div class="user-info">
          <span class="username">👤 {_e(username)}</span>
          <button id="logoutBtn" class="btn-logout">Log Out</button>
        </div>
      </div>

      <div class="container">
        {alert_html}
        <div class="search-container">
          <input type="text" id="searchInput" class="search-input"
                 placeholder="Search Pokémon by name or ID...">
          <button id="searchBtn" class="btn-search">🔍 Search</button>
        </div>

        <div id="pokemonGrid" class="pokemon-grid">{grid_html if grid_html is not None else welcome_state()}</div>
        {history_panel(history)}
      </div>
    </div>
    """
