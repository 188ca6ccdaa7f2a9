"""Poké-Explorer API: authenticated Pokémon search over PokéAPI."""

__version__ = "0.1.0"
