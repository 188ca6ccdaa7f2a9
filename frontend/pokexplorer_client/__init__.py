"""Poké-Explorer client: session handling, routing and views for the API."""

from .app import ClientApp, build_app
from .router import AuthState, Route
from .session import Session, SessionStore

__all__ = ["ClientApp", "build_app", "AuthState", "Route", "Session", "SessionStore"]
