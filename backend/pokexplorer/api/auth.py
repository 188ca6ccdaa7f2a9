"""Registration and login endpoints."""

from fastapi import APIRouter, Depends, status

from pokexplorer.api.dependencies import get_auth_service
from pokexplorer.schemas.auth import AuthResponse, Credentials
from pokexplorer.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: Credentials, service: AuthService = Depends(get_auth_service)):
    """Create an account and return it with a session token."""
    return service.register(body.username, body.password)


@router.post("/login", response_model=AuthResponse)
def login(body: Credentials, service: AuthService = Depends(get_auth_service)):
    """Exchange credentials for a session token."""
    return service.login(body.username, body.password)
